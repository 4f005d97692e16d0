"""Tests for the outbound HTTP helpers, using httpx.MockTransport."""

import httpx
import pytest

from core import http


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_json_returns_decoded_body():
    def handler(request):
        assert request.url.params["limit"] == "5"
        return httpx.Response(200, json={"count": 5})

    async with _client(handler) as client:
        data = await http.get_json("https://api.test/items", params={"limit": 5}, client=client)
    assert data == {"count": 5}


@pytest.mark.asyncio
async def test_404_becomes_not_found_upstream_error():
    async with _client(lambda request: httpx.Response(404, text="nope")) as client:
        with pytest.raises(http.UpstreamError) as excinfo:
            await http.get_json("https://api.test/pokemon/missingno", client=client)
    assert excinfo.value.not_found
    assert excinfo.value.status_code == 404
    assert excinfo.value.url == "https://api.test/pokemon/missingno"


@pytest.mark.asyncio
async def test_server_error_is_not_not_found():
    async with _client(lambda request: httpx.Response(503, text="down")) as client:
        with pytest.raises(http.UpstreamError) as excinfo:
            await http.get_bytes("https://api.test/page", client=client)
    assert not excinfo.value.not_found
    assert "503" in str(excinfo.value)


@pytest.mark.asyncio
async def test_timeout_becomes_upstream_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with _client(handler) as client:
        with pytest.raises(http.UpstreamError) as excinfo:
            await http.get_text("https://api.test/slow", client=client)
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_invalid_json_becomes_upstream_error():
    async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(http.UpstreamError):
            await http.get_json("https://api.test/html", client=client)


@pytest.mark.asyncio
async def test_post_json_sends_payload():
    seen = {}

    def handler(request):
        seen["body"] = request.content
        seen["method"] = request.method
        return httpx.Response(200, json={"ok": True})

    async with _client(handler) as client:
        data = await http.post_json("https://api.test/search", {"query": "x"}, client=client)
    assert data == {"ok": True}
    assert seen["method"] == "POST"
    assert b'"query"' in seen["body"]


@pytest.mark.asyncio
async def test_get_bytes_keeps_raw_content():
    raw = "שלום".encode("cp1255")
    async with _client(lambda request: httpx.Response(200, content=raw)) as client:
        assert await http.get_bytes("https://api.test/legacy", client=client) == raw


@pytest.mark.asyncio
async def test_gather_best_effort_keeps_order_and_uses_fallback():
    async def worker(item):
        if item == 2:
            raise KeyError("missing")
        return item * 10

    results = await http.gather_best_effort([1, 2, 3], worker, lambda item, exc: f"failed:{item}")
    assert results == [10, "failed:2", 30]


@pytest.mark.asyncio
async def test_gather_best_effort_propagates_unexpected_errors():
    async def worker(item):
        raise ZeroDivisionError

    with pytest.raises(ZeroDivisionError):
        await http.gather_best_effort([1], worker, lambda item, exc: None)
