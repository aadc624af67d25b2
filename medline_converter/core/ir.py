"""Canonical record shape, field entries and producer batch variants.

WHY: The parser, the formatter and the emitter all speak about the same
few shapes: a citation record, a field translation entry, and the batches
a pull producer hands to the emitter. Defining them once keeps the two
directions of the codec honest with each other.

HOW: A record is a plain dict (canonical field name → string or list of
strings), so it serializes to JSON without conversion. Field entries and
batches are small frozen dataclasses.

RULES:
- Only fields flagged is_array hold lists; every other value is a string
- After parsing, "type" always holds a canonical type tag
- Records never share mutable state with the translation tables
- A producer signals the end of input with Done() or by returning None
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

Record = Dict[str, Union[str, List[str]]]


@dataclass(frozen=True)
class FieldTranslation:
    """One row of the field table.

    RULES:
    - tag: the 4-character MEDLINE code, padded with spaces (e.g. "TI  ")
    - name: the canonical record key (e.g. "title")
    - is_array: repeated tags accumulate into a list instead of overwriting
    """

    tag: str
    name: str
    is_array: bool = False


@dataclass(frozen=True)
class RecordsBatch:
    """A producer batch carrying several records.

    The last record is terminal only when is_last is also set. An empty
    records sequence ends the pull loop.
    """

    records: Sequence[Record]
    is_last: bool = False


@dataclass(frozen=True)
class SingleBatch:
    """A producer batch carrying exactly one record."""

    record: Record
    is_last: bool = False


@dataclass(frozen=True)
class Done:
    """Producer signal that no more batches follow."""


Batch = Union[RecordsBatch, SingleBatch, Done]
