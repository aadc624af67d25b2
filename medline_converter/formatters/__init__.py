"""Record formatter registry.

WHY: The CLI looks formatters up by name, and new output forms should
only need one new module plus one line here.

HOW: FORMATTERS maps a short key to a formatter class. Callers build
the instance they need: ``formatter = FORMATTERS["medline"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are uninstantiated BaseFormatter subclasses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from medline_converter.formatters.json_lines import JsonLinesFormatter
from medline_converter.formatters.medline import MedlineFormatter, format_record

if TYPE_CHECKING:
    from medline_converter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "medline": MedlineFormatter,
    "jsonl": JsonLinesFormatter,
}

__all__ = ["FORMATTERS", "JsonLinesFormatter", "MedlineFormatter", "format_record"]
