"""MEDLINE record formatter: canonical record to tagged text block.

WHY: The output direction of the codec. Reference managers hand us
canonical records; PubMed-compatible tools want ``.nbib`` text with the
original tags and upper-case publication type labels.

HOW: Walks the record in insertion order. The ``type`` field is mapped
back to a MEDLINE label; every other field is looked up by canonical
name in the field table. Array fields produce one tag line per element.

RULES:
- Line form: "<tag>- <value>\\n"
- Fields without a field table entry are dropped, not an error
- Unmapped types fall back to default_type (see tables.label_for_type)
- A record without a "type" key gets no PT line
- No wrapping: long values stay on one line
- The input record is never modified
"""

from __future__ import annotations

from typing import List

from medline_converter.config import DEFAULT_TYPE
from medline_converter.core.ir import Record
from medline_converter.core.tables import field_for_name, label_for_type
from medline_converter.formatters.base import BaseFormatter


def _tag_line(tag: str, value: str) -> str:
    return "{}- {}\n".format(tag, value)


def format_record(record: Record, default_type: str = DEFAULT_TYPE) -> str:
    """Render one canonical record as a MEDLINE text block.

    Args:
        record: Canonical record (field name → string or list of strings).
        default_type: Canonical type used when the record's type has no
                      MEDLINE label.

    Returns:
        The tag lines for the record, each terminated by "\\n". No
        trailing blank line.
    """
    lines: List[str] = []

    for name, value in record.items():
        field = field_for_name(name)
        if field is None:
            continue

        if name == "type":
            type_tag = value if isinstance(value, str) else None
            lines.append(_tag_line(field.tag, label_for_type(type_tag, default_type)))
        elif field.is_array:
            items = value if isinstance(value, (list, tuple)) else [value]
            for item in items:
                lines.append(_tag_line(field.tag, item))
        else:
            lines.append(_tag_line(field.tag, value))  # type: ignore[arg-type]

    return "".join(lines)


class MedlineFormatter(BaseFormatter):
    """Formatter producing MEDLINE tagged text blocks.

    RULES:
    - default_type is fixed per formatter instance
    - Output of format() round-trips through parser.iter_records for any
      record built from known fields and a mapped type
    """

    def __init__(self, default_type: str = DEFAULT_TYPE) -> None:
        self.default_type = default_type

    @property
    def name(self) -> str:
        return "MEDLINE"

    def format(self, record: Record) -> str:
        return format_record(record, self.default_type)
