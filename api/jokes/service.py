"""
Jokes service: fetch yo-yoo.co.il pages, decode them, parse them.

Pages are served in windows-1255, so they are fetched as raw bytes and decoded
with `core.legacy_encoding`. Category names go back out through the matching
encoder. Decoded pages are cached for 30 minutes, keyed by URL.
"""

from __future__ import annotations

import dataclasses
import logging
import random

from core import http
from core.cache import TimedCache, fetch_cached
from core.extraction import RawDocument
from core.legacy_encoding import encode_legacy_param

from . import parsing
from .catalog import Category
from .parsing import JOKES_BASE, JokeRecord, joke_url

logger = logging.getLogger(__name__)

SOURCE = "yo-yoo.co.il"

# Approximate highest joke id on the site.
MAX_JOKE_ID = 4033

FETCH_TIMEOUT_S = 10.0
PAGE_CACHE_TTL_S = 30 * 60

HEADERS = {
    "User-Agent": http.BROWSER_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "he-IL,he;q=0.9,en;q=0.8",
}

page_cache = TimedCache(PAGE_CACHE_TTL_S, name="jokes_pages")


def latest_url() -> str:
    return f"{JOKES_BASE}/new.php"


def category_url(category: Category, page: int = 1) -> str:
    url = f"{JOKES_BASE}/?cat={encode_legacy_param(category.param)}"
    if page > 1:
        url += f"&page={page}"
    return url


async def fetch_page(url: str) -> str:
    """
    Decoded page text for `url`. Raises `http.UpstreamError` on any fetch failure.
    """

    async def _fetch() -> str:
        content = await http.get_bytes(url, headers=HEADERS, timeout_s=FETCH_TIMEOUT_S)
        return RawDocument.from_legacy_bytes(url, content).text

    return await fetch_cached(page_cache, url, _fetch)


async def get_joke(joke_id: int) -> JokeRecord:
    html = await fetch_page(joke_url(joke_id))
    return parsing.parse_joke_page(html, joke_id)


async def random_jokes(count: int, *, rng: random.Random | None = None) -> list[JokeRecord]:
    """
    Probe random ids until `count` non-empty jokes are found or `count * 5`
    attempts are used up. Missing ids are skipped.
    """
    rng = rng or random.Random()
    jokes: list[JokeRecord] = []
    tried: set[int] = set()
    attempts = 0

    while len(jokes) < count and attempts < count * 5:
        attempts += 1
        joke_id = rng.randint(1, MAX_JOKE_ID)
        if joke_id in tried:
            continue
        tried.add(joke_id)

        try:
            record = await get_joke(joke_id)
        except http.UpstreamError as exc:
            logger.info("joke_unavailable id=%s error=%s", joke_id, exc)
            continue
        if record.body and len(record.body) > 3:
            jokes.append(record)

    return jokes


async def _with_full_text(links: list[JokeRecord]) -> list[JokeRecord]:
    """
    Fetch every listed joke concurrently. A failed page keeps the listing
    entry (title, url) with an empty body.
    """

    async def _load(link: JokeRecord) -> JokeRecord:
        record = await get_joke(link.id)
        if record.title is None and link.title:
            record = dataclasses.replace(record, title=link.title)
        return record

    return await http.gather_best_effort(links, _load, lambda link, _exc: link)


async def latest_jokes(limit: int) -> list[JokeRecord]:
    html = await fetch_page(latest_url())
    links = parsing.parse_listing_page(html)[:limit]
    return await _with_full_text(links)


async def category_jokes(category: Category, *, limit: int, page: int = 1) -> list[JokeRecord]:
    html = await fetch_page(category_url(category, page))
    links = parsing.parse_listing_page(html)[:limit]
    return await _with_full_text(links)
