"""Package entry point for ``python -m medline_converter``."""

from medline_converter.cli import main

if __name__ == "__main__":
    main()
