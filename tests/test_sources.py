"""Unit tests for parse source handling.

WHY: The parser must see identical text whether the export arrives as
a str, bytes, a file, or a chunked stream. Chunk boundaries are the
classic place for CRLF pairs and multi-byte characters to break.
"""

import asyncio
import io

import pytest

from medline_converter.core.parser import parse_text
from medline_converter.core.sources import SourceTypeError, check_source, read_source


async def _chunks(*parts):
    for part in parts:
        yield part


def _read(source):
    return asyncio.run(read_source(source))


class TestAcceptedSources:
    """Every supported shape reduces to the same text."""

    def test_str(self):
        assert _read("PMID- 1\n") == "PMID- 1\n"

    def test_bytes(self):
        assert _read(b"PMID- 1\n") == "PMID- 1\n"

    def test_bytearray_and_memoryview(self):
        assert _read(bytearray(b"PMID- 1")) == "PMID- 1"
        assert _read(memoryview(b"PMID- 1")) == "PMID- 1"

    def test_bytes_with_bom(self):
        assert _read(b"\xef\xbb\xbfPMID- 1") == "PMID- 1"

    def test_str_with_bom(self):
        assert _read("\ufeffPMID- 1") == "PMID- 1"

    def test_text_file_with_bom(self):
        assert _read(io.StringIO("\ufeffPMID- 1\nTI  - X")) == "PMID- 1\nTI  - X"

    def test_bom_does_not_hide_first_tag(self):
        records = parse_text(_read("\ufeffPMID- 42\nTI  - First"))
        assert records == [{"recNo": "42", "title": "First", "type": "unknown"}]

    def test_binary_file(self):
        assert _read(io.BytesIO("TI  - Café".encode("utf-8"))) == "TI  - Café"

    def test_text_file(self):
        assert _read(io.StringIO("PMID- 1")) == "PMID- 1"

    def test_async_byte_chunks(self):
        assert _read(_chunks(b"PMID", b"- 1\n", b"TI  - X")) == "PMID- 1\nTI  - X"

    def test_async_str_chunks(self):
        assert _read(_chunks("PMID- ", "1")) == "PMID- 1"


class TestChunkBoundaries:
    """Joining happens before decoding and newline normalization."""

    def test_crlf_split_across_chunks(self):
        text = _read(_chunks(b"PMID- 1\r", b"\n\r", b"\nPMID- 2\r\n"))
        records = parse_text(text)
        assert [r["recNo"] for r in records] == ["1", "2"]

    def test_multibyte_character_split_across_chunks(self):
        encoded = "TI  - Grüße".encode("utf-8")
        split = encoded.index(b"\xc3") + 1
        text = _read(_chunks(encoded[:split], encoded[split:]))
        assert parse_text(text)[0]["title"] == "Grüße"


class TestRejectedSources:
    """Unsupported shapes fail immediately."""

    @pytest.mark.parametrize("source", [None, 42, 3.5, ["PMID- 1"], {"PMID": "1"}])
    def test_rejected(self, source):
        with pytest.raises(SourceTypeError):
            check_source(source)

    def test_error_is_a_type_error(self):
        with pytest.raises(TypeError, match="list"):
            check_source(["PMID- 1"])
