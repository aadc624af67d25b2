"""Line-oriented MEDLINE parser and record assembler.

WHY: MEDLINE text is a flat stream of tagged lines. A record's fields
can repeat (authors, keywords), wrap across indented continuation lines,
or use tags we do not know. This module rebuilds structured records from
that stream, one record per blank-line-delimited block.

HOW: The complete text is newline-normalized and split into lines. Each
line is classified (field-open, continuation, blank, other) and fed to a
RecordAssembler, a three-state machine that accumulates field values and
hands back a finished record on every blank line. A synthetic blank line
after the input flushes a final record that lacks a trailing separator.

parse() wraps this in a ParseHandle: the caller attaches ref/end/error
listeners, then awaits or async-iterates the handle to drive the parse.
Nothing is read until then, so listeners are always in place before the
first record appears.

RULES:
- Field-open line: 4 characters + "- " + value
- Known array field → append a new element; known scalar → overwrite
- Unknown tag → its value AND its continuation lines are dropped
- Continuation line (6 leading spaces) → " " + line[6:] appended to the
  scalar value, or to the LAST element of an array value
- Blank line with a non-empty accumulator → record emitted, type resolved
  through the type table (missing or unmapped → "unknown")
- Consecutive blank lines never produce empty records
- Any other line is ignored and leaves the state unchanged
- "\\r\\n" is normalized on the fully assembled text, never per chunk
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any, List, Optional

from medline_converter.core.ir import FieldTranslation, Record
from medline_converter.core.sources import check_source, read_source
from medline_converter.core.tables import field_for_tag, type_for_label

logger = logging.getLogger(__name__)

_FIELD_LINE_RE = re.compile(r"^(.{4})- (.*)$")
_CONTINUATION_INDENT = " " * 6


class ParserState(str, enum.Enum):
    """Where the assembler is relative to the field being read.

    RULES:
    - no_record: nothing accumulated since the last record boundary
    - in_field: the last field-open line was a known tag; continuations attach
    - in_field_unknown: the last field-open line was an unknown tag;
      continuations are discarded
    """

    NO_RECORD = "no_record"
    IN_FIELD = "in_field"
    IN_FIELD_UNKNOWN = "in_field_unknown"


class RecordAssembler:
    """Accumulates the fields of one record at a time.

    The assembler is reused across records: close() hands back the
    finished record and resets it to an empty accumulator.
    """

    def __init__(self) -> None:
        self._record: Record = {}
        self._field: Optional[FieldTranslation] = None
        self.state = ParserState.NO_RECORD

    @property
    def is_empty(self) -> bool:
        return not self._record

    def open_field(self, tag: str, value: str) -> None:
        """Start a new field from a field-open line."""
        entry = field_for_tag(tag)
        if entry is None:
            logger.debug("Dropping unknown MEDLINE tag %r", tag)
            self._field = None
            self.state = ParserState.IN_FIELD_UNKNOWN
            return

        if entry.is_array:
            values = self._record.setdefault(entry.name, [])
            values.append(value)  # type: ignore[union-attr]
        else:
            self._record[entry.name] = value

        self._field = entry
        self.state = ParserState.IN_FIELD

    def continue_field(self, text: str) -> None:
        """Append continuation text to the field opened last, if any."""
        if self.state is not ParserState.IN_FIELD or self._field is None:
            return

        name = self._field.name
        current = self._record[name]
        if isinstance(current, list):
            current[-1] = "{} {}".format(current[-1], text)
        else:
            self._record[name] = "{} {}".format(current, text)

    def close(self) -> Optional[Record]:
        """Finish the current record and reset.

        Returns:
            The finished record with its type resolved, or None when
            nothing was accumulated.
        """
        record = self._record
        self._record = {}
        self._field = None
        self.state = ParserState.NO_RECORD

        if not record:
            return None

        label = record.get("type")
        record["type"] = type_for_label(label if isinstance(label, str) else None)
        return record


def normalize_newlines(text: str) -> str:
    """Convert Windows line endings to "\\n"."""
    return text.replace("\r\n", "\n")


def iter_records(text: str) -> Iterator[Record]:
    """Yield records from MEDLINE text in source order.

    WHY: The core of the parser, kept synchronous so it can be used on
    in-memory text without an event loop.

    HOW: Normalizes newlines, appends a synthetic blank line, and feeds
    every line to a RecordAssembler.

    Args:
        text: The complete MEDLINE text.

    Returns:
        A one-pass generator of canonical records.
    """
    assembler = RecordAssembler()

    for line in (normalize_newlines(text) + "\n").split("\n"):
        match = _FIELD_LINE_RE.match(line)
        if match:
            assembler.open_field(match.group(1), match.group(2))
        elif line.startswith(_CONTINUATION_INDENT):
            assembler.continue_field(line[len(_CONTINUATION_INDENT):])
        elif not line:
            record = assembler.close()
            if record is not None:
                yield record


def parse_text(text: str) -> List[Record]:
    """Parse MEDLINE text into a list of records."""
    return list(iter_records(text))


class ParseHandle:
    """Deferred parse of one source, with record/end/error listeners.

    WHY: Callers want to subscribe to results before any record exists,
    the same way they would attach handlers to an event emitter. Python
    gives us that for free by not doing any work until awaited.

    HOW: Listener registration is chainable. Iterating the handle with
    ``async for`` reads the source, then yields records one by one while
    notifying ref listeners; end listeners fire once the input is
    exhausted. ``await handle`` drives the same loop and returns every
    record as a list.

    RULES:
    - A handle can be consumed once; a second run raises RuntimeError
    - Source read errors are passed to error listeners, then re-raised
    - End listeners do not fire after an error
    - Records are delivered synchronously, in source order
    """

    def __init__(self, source: Any) -> None:
        self._source = source
        self._ref_listeners: List[Callable[[Record], Any]] = []
        self._end_listeners: List[Callable[[], Any]] = []
        self._error_listeners: List[Callable[[BaseException], Any]] = []
        self._consumed = False

    def on_ref(self, callback: Callable[[Record], Any]) -> ParseHandle:
        self._ref_listeners.append(callback)
        return self

    def on_end(self, callback: Callable[[], Any]) -> ParseHandle:
        self._end_listeners.append(callback)
        return self

    def on_error(self, callback: Callable[[BaseException], Any]) -> ParseHandle:
        self._error_listeners.append(callback)
        return self

    async def _records(self) -> AsyncIterator[Record]:
        if self._consumed:
            raise RuntimeError("ParseHandle has already been consumed")
        self._consumed = True

        try:
            text = await read_source(self._source)
        except Exception as exc:
            for callback in self._error_listeners:
                callback(exc)
            raise

        count = 0
        for record in iter_records(text):
            count += 1
            for callback in self._ref_listeners:
                callback(record)
            yield record

        logger.info("Parsed %d MEDLINE record(s)", count)
        for callback in self._end_listeners:
            callback()

    def __aiter__(self) -> AsyncIterator[Record]:
        return self._records()

    async def run(self) -> List[Record]:
        """Drive the parse to completion and return all records."""
        return [record async for record in self._records()]

    def __await__(self):
        return self.run().__await__()


def parse(source: Any) -> ParseHandle:
    """Prepare a parse of a MEDLINE source.

    Args:
        source: str, bytes-like, readable file object, or async iterable
                of byte/str chunks.

    Returns:
        A ParseHandle; nothing is read until it is awaited or iterated.

    Raises:
        SourceTypeError: Immediately, for an unsupported source shape.
    """
    check_source(source)
    return ParseHandle(source)
