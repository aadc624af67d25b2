"""Serializer driver: writes canonical records to a MEDLINE destination.

WHY: Records reach the writer in different shapes: a list already in
memory, a single record, or a producer that pages them from storage in
batches. Whatever the shape, the output must be the same: MEDLINE blocks
separated by one blank line, no trailing blank line after the last
block, and the destination closed exactly once at the end.

HOW: emit() classifies the content, turns it into a stream of
(record, is_terminal) pairs, formats each record with MedlineFormatter
and writes the block, followed by a "\\n" separator unless terminal.
Pull producers are called with an increasing batch index owned by the
driver; the driver yields to the event loop between batches so a
producer can do its own async work and deep batch chains never grow
the stack.

RULES:
- Shape priority: callable producer → list/tuple → single record
  (Mapping) → other sync/async iterables of records
- Producer returns RecordsBatch, SingleBatch, Done or None (may be
  awaitable); Done, None or an empty RecordsBatch end the loop
- In a RecordsBatch only the last record can be terminal, and only when
  is_last is set; a SingleBatch is terminal iff is_last
- For lists and iterables only the final record is terminal
- content None → ContentMissingError, nothing written, nothing closed
- Producer exception → ProducerError; earlier writes stand, the
  destination is left open
- Awaitable results of write()/close() are awaited
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Iterable, Mapping
from typing import Any, Optional, Tuple

from medline_converter.config import DEFAULT_TYPE
from medline_converter.core.ir import Done, Record, RecordsBatch, SingleBatch
from medline_converter.formatters.medline import MedlineFormatter

logger = logging.getLogger(__name__)

_SEPARATOR = "\n"


class EmitError(Exception):
    """Base class for errors raised while emitting records."""


class ContentMissingError(EmitError, ValueError):
    """Raised when emit() is called without content.

    RULES:
    - Raised before any write; the destination is not closed
    """

    def __init__(self) -> None:
        super().__init__("No content has been provided")


class ContentTypeError(EmitError, TypeError):
    """Raised when the content is not a producer, record or record collection.

    WHY: A str or a number passed as content is almost certainly a bug
    (a file path instead of records, say). Failing loudly beats writing
    an empty file.
    """

    def __init__(self, content: Any) -> None:
        super().__init__(
            "Unsupported content type {!r}: expected a record, a sequence "
            "of records, or a batch producer".format(type(content).__name__)
        )


class ProducerError(EmitError):
    """Raised when a pull producer fails.

    WHY: The caller needs to know which batch failed to resume or report
    a partial export; the original exception is chained as __cause__.

    RULES:
    - batch_index is the index the failing call received
    - Records written before the failure are not rolled back
    """

    def __init__(self, batch_index: int, cause: BaseException) -> None:
        self.batch_index = batch_index
        super().__init__(
            "Record producer failed on batch {}: {}".format(batch_index, cause)
        )


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _write(destination: Any, text: str) -> None:
    await _resolve(destination.write(text))


async def _close(destination: Any) -> None:
    aclose = getattr(destination, "aclose", None)
    if callable(aclose):
        await aclose()
    else:
        await _resolve(destination.close())


async def _with_lookahead(records: AsyncIterator[Record]) -> AsyncIterator[Tuple[Record, bool]]:
    """Pair each record with whether it is the final one."""
    previous: Optional[Record] = None
    has_previous = False
    async for record in records:
        if has_previous:
            yield previous, False  # type: ignore[misc]
        previous = record
        has_previous = True
    if has_previous:
        yield previous, True  # type: ignore[misc]


async def _iterate(records: Iterable[Record]) -> AsyncIterator[Record]:
    for record in records:
        yield record


async def _pull(producer: Any) -> AsyncIterator[Tuple[Record, bool]]:
    """Drive a pull producer batch by batch."""
    batch_index = 0
    while True:
        try:
            batch = await _resolve(producer(batch_index))
        except Exception as exc:
            raise ProducerError(batch_index, exc) from exc

        if isinstance(batch, RecordsBatch) and len(batch.records) > 0:
            last = len(batch.records) - 1
            for index, record in enumerate(batch.records):
                yield record, batch.is_last and index == last
        elif isinstance(batch, SingleBatch):
            yield batch.record, batch.is_last
        elif batch is None or isinstance(batch, (Done, RecordsBatch)):
            logger.debug("Producer finished after %d batch(es)", batch_index)
            return
        else:
            raise ProducerError(
                batch_index,
                TypeError("unexpected batch type {!r}".format(type(batch).__name__)),
            )

        batch_index += 1
        await asyncio.sleep(0)


def _classify(content: Any) -> AsyncIterator[Tuple[Record, bool]]:
    if callable(content):
        return _pull(content)
    if isinstance(content, (list, tuple)):
        return _with_lookahead(_iterate(content))
    if isinstance(content, Mapping):
        return _with_lookahead(_iterate([content]))
    if isinstance(content, (str, bytes, bytearray)):
        raise ContentTypeError(content)
    if hasattr(content, "__aiter__"):
        return _with_lookahead(content.__aiter__())
    if isinstance(content, Iterable):
        return _with_lookahead(_iterate(content))
    raise ContentTypeError(content)


async def emit(
    content: Any,
    destination: Any,
    default_type: str = DEFAULT_TYPE,
) -> int:
    """Write records to a destination as MEDLINE text, then close it.

    Args:
        content: A pull producer ``(batch_index) -> Batch``, a list or
                 tuple of records, a single record, or any (async)
                 iterable of records.
        destination: Object with ``write(str)`` and ``close()`` (or
                     ``aclose()``); either may return an awaitable.
        default_type: Canonical type written for records whose type has
                      no MEDLINE label.

    Returns:
        The number of records written.

    Raises:
        ContentMissingError: content is None.
        ContentTypeError: content has an unsupported shape.
        ProducerError: the pull producer raised.
    """
    if content is None:
        raise ContentMissingError()

    pairs = _classify(content)
    formatter = MedlineFormatter(default_type)

    written = 0
    async for record, is_terminal in pairs:
        block = formatter.format(record)
        await _write(destination, block if is_terminal else block + _SEPARATOR)
        written += 1

    await _close(destination)
    logger.info("Wrote %d MEDLINE record(s)", written)
    return written


async def output(
    stream: Any,
    content: Any,
    default_type: str = DEFAULT_TYPE,
) -> Any:
    """Option-style front end to emit(); returns the stream."""
    await emit(content, stream, default_type=default_type)
    return stream
