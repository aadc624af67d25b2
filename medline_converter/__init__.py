"""MEDLINE Converter: MEDLINE/PubMed tagged citations ↔ canonical records.

WHY: PubMed exports citations as fixed-width tagged text (``.nbib``);
reference managers work with structured records. This package converts
in both directions without losing array fields or record boundaries.

HOW: Two directions over shared translation tables:
  parse: text / bytes / stream → line parser → canonical records
  emit:  records / producer → MEDLINE formatter → destination

RULES:
- The translation tables are the single source of truth for both directions
- Unknown tags and unmapped field names are dropped, never errors
- Records are plain dicts, ready for JSON
"""

__version__ = "0.1.0"

from medline_converter.core.emitter import (  # noqa: E402
    ContentMissingError,
    ContentTypeError,
    EmitError,
    ProducerError,
    emit,
    output,
)
from medline_converter.core.ir import Done, Record, RecordsBatch, SingleBatch  # noqa: E402
from medline_converter.core.parser import (  # noqa: E402
    ParseHandle,
    iter_records,
    parse,
    parse_text,
)
from medline_converter.core.sources import SourceTypeError  # noqa: E402
from medline_converter.formatters.medline import format_record  # noqa: E402

__all__ = [
    "ContentMissingError",
    "ContentTypeError",
    "Done",
    "EmitError",
    "ParseHandle",
    "ProducerError",
    "Record",
    "RecordsBatch",
    "SingleBatch",
    "SourceTypeError",
    "emit",
    "format_record",
    "iter_records",
    "output",
    "parse",
    "parse_text",
]
