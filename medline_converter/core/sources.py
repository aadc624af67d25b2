"""Parse input sources: text, byte buffers, file objects and byte streams.

WHY: Callers hold MEDLINE data in different shapes: a string already in
memory, a downloaded byte buffer, an open file, or an async stream of
chunks from a socket or HTTP response. The parser only wants the
complete text, so this module reduces every accepted shape to one str.

HOW: check_source() classifies the source synchronously so a bad input
fails before any parse work is scheduled. read_source() then collects
the text, awaiting each chunk for async iterables.

RULES:
- Accepted: str, bytes/bytearray/memoryview, objects with .read(),
  async iterables of bytes or str chunks
- Bytes are decoded as UTF-8; a leading byte order mark is dropped from
  bytes and text alike
- Chunks are joined BEFORE decoding, so a multi-byte character or a
  "\\r\\n" pair split across two chunks is reassembled intact
- Anything else raises SourceTypeError
"""

from __future__ import annotations

import logging
from typing import Any, Union

logger = logging.getLogger(__name__)

_BYTES_TYPES = (bytes, bytearray, memoryview)


class SourceTypeError(TypeError):
    """Raised when a parse source is not one of the recognized shapes.

    WHY: An unsupported input is a programming error on the caller's
    side. It must fail immediately, before a parse handle is returned,
    rather than surface later as an empty result.

    RULES:
    - Raised synchronously by check_source() / parse()
    - Message names the offending type
    """

    def __init__(self, source: Any) -> None:
        self.source_type = type(source).__name__
        super().__init__(
            "Unsupported MEDLINE source type {!r}: expected str, bytes, "
            "a readable file object, or an async iterable of chunks".format(
                self.source_type
            )
        )


def _decode(data: Union[bytes, bytearray, memoryview]) -> str:
    return bytes(data).decode("utf-8-sig")


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith("\ufeff") else text


def check_source(source: Any) -> None:
    """Raise SourceTypeError unless source is a supported input shape."""
    if isinstance(source, (str,) + _BYTES_TYPES):
        return
    if hasattr(source, "__aiter__"):
        return
    if callable(getattr(source, "read", None)):
        return
    raise SourceTypeError(source)


async def read_source(source: Any) -> str:
    """Collect the complete text of a source.

    Args:
        source: Any shape accepted by check_source().

    Returns:
        The decoded, not yet newline-normalized text.
    """
    check_source(source)

    if isinstance(source, str):
        return _strip_bom(source)
    if isinstance(source, _BYTES_TYPES):
        return _decode(source)

    if hasattr(source, "__aiter__"):
        buffer = bytearray()
        chunks = 0
        async for chunk in source:
            if isinstance(chunk, str):
                buffer.extend(chunk.encode("utf-8"))
            else:
                buffer.extend(chunk)
            chunks += 1
        logger.debug("Read %d chunk(s), %d bytes from stream source", chunks, len(buffer))
        return _decode(buffer)

    data = source.read()
    if isinstance(data, str):
        return _strip_bom(data)
    return _decode(data)
