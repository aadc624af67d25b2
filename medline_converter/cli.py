"""Command-line interface for the MEDLINE converter.

WHY: Users need to move citations between ``.nbib`` exports and JSON
from the terminal or a shell pipeline, without writing Python.

HOW: argparse with two subcommands. ``parse`` reads MEDLINE from a file,
stdin, or an HTTP(S) URL and writes JSON lines (or one JSON array).
``output`` reads canonical records as JSON, validates them against
RECORD_SCHEMA, and writes MEDLINE through the emitter. Both run under
asyncio.run(). Status messages go to stderr; data goes to stdout or
--output.

RULES:
- INPUT "-" means stdin
- parse accepts http:// and https:// URLs as INPUT
- output accepts a JSON array, a single JSON object, or JSON lines
- Exit code 1 for missing files, bad JSON, schema failures, HTTP errors
- Progress and errors go to stderr so stdout stays clean for records
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import httpx

from medline_converter import __version__
from medline_converter.config import DEFAULT_TYPE, LOG_LEVEL
from medline_converter.core.emitter import emit
from medline_converter.core.ir import Record
from medline_converter.core.parser import parse
from medline_converter.core.schema import validate_records
from medline_converter.fetch import fetch_records
from medline_converter.formatters import JsonLinesFormatter


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


class _FlushOnClose:
    """Destination wrapper for stdout: close() flushes instead of closing."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream

    def write(self, text: str) -> None:
        self._stream.write(text)

    def close(self) -> None:
        self._stream.flush()


def _load_json_records(text: str) -> Any:
    """Decode a JSON document, falling back to JSON lines.

    RULES:
    - A whole-document parse is tried first (array or object)
    - Otherwise every non-blank line must be one JSON object
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    records: List[Any] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid JSON on line {}: {}".format(line_no, exc.msg)) from exc
    return records


async def _read_medline(source: str) -> List[Record]:
    if _is_url(source):
        _status("Fetching {}...".format(source))
        return await fetch_records(source)

    if source == "-":
        return await parse(sys.stdin.buffer)

    path = Path(source)
    if not path.is_file():
        _fail("File not found: {}".format(path))
    with open(path, "rb") as f:
        return await parse(f)


async def _run_parse(args: argparse.Namespace) -> None:
    try:
        records = await _read_medline(args.input)
    except httpx.HTTPError as exc:
        _fail("Download failed: {}".format(exc))
        return

    if args.array:
        content = json.dumps(records, indent=2, ensure_ascii=False) + "\n"
    else:
        formatter = JsonLinesFormatter()
        content = "".join(formatter.format(record) for record in records)

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        _status("Saved {} record(s) to {}".format(len(records), args.output))
    else:
        sys.stdout.write(content)
        sys.stdout.flush()
        _status("Parsed {} record(s)".format(len(records)))


async def _run_output(args: argparse.Namespace) -> None:
    if args.input == "-":
        text = sys.stdin.read()
    else:
        path = Path(args.input)
        if not path.is_file():
            _fail("File not found: {}".format(path))
        text = path.read_text(encoding="utf-8")

    try:
        records = validate_records(_load_json_records(text))
    except ValueError as exc:
        _fail(str(exc))
        return

    if args.output:
        destination: Any = open(args.output, "w", encoding="utf-8", newline="\n")
    else:
        destination = _FlushOnClose(sys.stdout)

    count = await emit(records, destination, default_type=args.default_type)
    if args.output:
        _status("Saved {} record(s) to {}".format(count, args.output))
    else:
        _status("Wrote {} record(s)".format(count))


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the parse and output subcommands.

    WHY: Kept apart from main() so argument defaults can be checked
    without reading or writing any records.
    """
    parser = argparse.ArgumentParser(
        prog="medline_converter",
        description="Convert between MEDLINE (.nbib) citations and JSON records.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser(
        "parse",
        help="Read MEDLINE text and write JSON records.",
    )
    parse_cmd.add_argument(
        "input",
        help="MEDLINE file path, '-' for stdin, or an http(s) URL.",
    )
    parse_cmd.add_argument(
        "-o", "--output",
        default=None,
        help="Write JSON here instead of stdout.",
    )
    parse_cmd.add_argument(
        "--array",
        action="store_true",
        help="Write a single indented JSON array instead of JSON lines.",
    )

    output_cmd = subparsers.add_parser(
        "output",
        help="Read JSON records and write MEDLINE text.",
    )
    output_cmd.add_argument(
        "input",
        help="JSON file (array, object, or JSON lines), or '-' for stdin.",
    )
    output_cmd.add_argument(
        "-o", "--output",
        default=None,
        help="Write MEDLINE here instead of stdout.",
    )
    output_cmd.add_argument(
        "--default-type",
        default=DEFAULT_TYPE,
        help="Canonical type used for records with an unmapped type "
             "(default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m medline_converter``.

    RULES:
    - argv=None reads the process arguments
    - A list of strings runs the same commands in-process
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "parse":
        asyncio.run(_run_parse(args))
    else:
        asyncio.run(_run_output(args))


if __name__ == "__main__":
    main()
