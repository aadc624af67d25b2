"""JSON lines formatter: one canonical record per line.

WHY: Parsed records need a machine-readable dump that other tools can
stream without loading the whole file. One compact JSON object per line
is appendable and trivially splittable.

RULES:
- Keys keep record insertion order
- Non-ASCII text is written as-is (UTF-8), not escaped
"""

from __future__ import annotations

import json

from medline_converter.core.ir import Record
from medline_converter.formatters.base import BaseFormatter


class JsonLinesFormatter(BaseFormatter):
    """Formatter that writes each record as a single JSON line."""

    @property
    def name(self) -> str:
        return "JSON Lines"

    def format(self, record: Record) -> str:
        return json.dumps(record, ensure_ascii=False) + "\n"
