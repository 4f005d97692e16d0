"""
Outbound HTTP helpers (httpx, async).

Every upstream call goes through `_request`, which applies a fixed timeout and
turns transport errors, timeouts and non-2xx responses into `UpstreamError`.
Routes decide what that means for the client (404 vs 502).

Pass `client=` to reuse a connection pool or to inject an
`httpx.MockTransport` in tests; otherwise a short-lived client is opened per call.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_TIMEOUT_S = 10.0

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


# Upstream failures are explicit and separable from bugs in our own code.
class UpstreamError(RuntimeError):
    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


# Errors a single fan-out item may fail with without taking the batch down.
# Shape errors cover upstream JSON that lacks fields we index into.
FANOUT_ERRORS = (UpstreamError, KeyError, TypeError, AttributeError, ValueError)


async def _request(
    method: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    json: Any = None,
    headers: dict[str, str] | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    try:
        if client is not None:
            resp = await client.request(
                method, url, params=params, json=json, headers=headers, timeout=timeout_s
            )
        else:
            async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True) as own_client:
                resp = await own_client.request(method, url, params=params, json=json, headers=headers)
    except httpx.HTTPError as exc:
        raise UpstreamError(f"{method} {url} failed: {exc!r}", url=url) from exc

    if not 200 <= resp.status_code < 300:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:300]
        raise UpstreamError(
            f"{method} {url} returned {resp.status_code}: {body}",
            url=url,
            status_code=resp.status_code,
        )
    return resp


def _decode_json(resp: httpx.Response, url: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise UpstreamError(f"{url} returned invalid JSON.", url=url, status_code=resp.status_code) from exc


async def get_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    client: httpx.AsyncClient | None = None,
) -> Any:
    resp = await _request("GET", url, params=params, headers=headers, timeout_s=timeout_s, client=client)
    return _decode_json(resp, url)


async def post_json(
    url: str,
    payload: Any,
    *,
    headers: dict[str, str] | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    client: httpx.AsyncClient | None = None,
) -> Any:
    resp = await _request("POST", url, json=payload, headers=headers, timeout_s=timeout_s, client=client)
    return _decode_json(resp, url)


async def get_bytes(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """
    Raw response body, for sources whose encoding we decode ourselves.
    """
    resp = await _request("GET", url, headers=headers, timeout_s=timeout_s, client=client)
    return resp.content


async def get_text(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Response body decoded by httpx (declared charset, UTF-8 otherwise).
    """
    resp = await _request("GET", url, headers=headers, timeout_s=timeout_s, client=client)
    return resp.text


async def gather_best_effort(
    items: Iterable[T],
    worker: Callable[[T], Awaitable[R]],
    fallback: Callable[[T, Exception], R],
) -> list[R]:
    """
    Run `worker` over `items` concurrently, keeping input order.

    A failing item is replaced by `fallback(item, exc)`; it never aborts the batch.
    """

    async def _one(item: T) -> R:
        try:
            return await worker(item)
        except FANOUT_ERRORS as exc:
            logger.warning("fanout_item_failed item=%r error=%s", item, exc)
            return fallback(item, exc)

    return list(await asyncio.gather(*(_one(item) for item in items)))
