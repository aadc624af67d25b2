"""Tests for streaming MEDLINE exports over HTTP.

WHY: The HTTP source is the real-world push-based byte stream: chunk
boundaries are arbitrary and errors arrive as status codes.

HOW: httpx.MockTransport serves the sample export, so no network is
needed. The caller-supplied client path is exercised directly.
"""

import asyncio

import httpx
import pytest

from medline_converter.fetch import fetch_records


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _run(url, handler, **kwargs):
    async def _go():
        async with _client(handler) as client:
            return await fetch_records(url, client=client, **kwargs)

    return asyncio.run(_go())


class TestFetchRecords:
    """fetch_records() downloads and parses an export."""

    def test_parses_response_body(self, sample_bytes, sample_records):
        def handler(request):
            assert request.url.path == "/export.nbib"
            return httpx.Response(200, content=sample_bytes)

        records = _run("https://example.org/export.nbib", handler)
        assert records == sample_records

    def test_crlf_body(self, sample_text_crlf, sample_records):
        def handler(request):
            return httpx.Response(200, content=sample_text_crlf.encode("utf-8"))

        assert _run("https://example.org/crlf.nbib", handler) == sample_records

    def test_on_ref_callback(self, sample_bytes):
        seen = []

        def handler(request):
            return httpx.Response(200, content=sample_bytes)

        _run("https://example.org/x", handler, on_ref=lambda r: seen.append(r["recNo"]))
        assert seen == ["280219", "31415926"]

    def test_http_error_raises(self):
        def handler(request):
            return httpx.Response(404, text="not found")

        with pytest.raises(httpx.HTTPStatusError):
            _run("https://example.org/missing", handler)

    def test_supplied_client_left_open(self, sample_bytes):
        def handler(request):
            return httpx.Response(200, content=sample_bytes)

        async def _go():
            client = _client(handler)
            await fetch_records("https://example.org/a", client=client)
            assert not client.is_closed
            await client.aclose()

        asyncio.run(_go())
