"""
Bible service: Hebrew and English Tanakh text from the Sefaria API.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from core import http
from core.extraction import strip_markup

from .catalog import ALL_BOOKS, Book

SOURCE = "Sefaria.org"
SEFARIA_BASE = "https://www.sefaria.org/api"

TEXT_TIMEOUT_S = 10.0
SEARCH_TIMEOUT_S = 15.0

_VERSE_RANGE_RE = re.compile(r"^\s*(?P<start>\d+)\s*(?:-\s*(?P<end>\d+))?\s*$")
_REF_BOOK_RE = re.compile(r"^(?P<book>.+?)[\s.]+\d")


@dataclass(frozen=True)
class VerseRange:
    start: int
    end: int

    def __str__(self) -> str:
        return str(self.start) if self.start == self.end else f"{self.start}-{self.end}"


def parse_verse_range(value: str) -> VerseRange | None:
    """
    "3" -> 3..3, "1-5" -> 1..5. None for anything else (including 5-1).
    """
    match = _VERSE_RANGE_RE.match(value or "")
    if not match:
        return None
    start = int(match.group("start"))
    end = int(match.group("end") or start)
    if start < 1 or end < start:
        return None
    return VerseRange(start, end)


def clean_text(value: Any) -> Any:
    """
    Strip Sefaria's inline markup from a verse or a (nested) list of verses.
    """
    if isinstance(value, list):
        return [clean_text(item) for item in value]
    if isinstance(value, str):
        return strip_markup(value)
    return value


def build_ref(book: Book, chapter: int | None = None, verses: VerseRange | None = None) -> str:
    ref = book.ref
    if chapter is not None:
        ref += f".{chapter}"
        if verses is not None:
            ref += f".{verses}"
    return ref


async def fetch_text(ref: str) -> dict[str, Any]:
    return await http.get_json(
        f"{SEFARIA_BASE}/texts/{quote(ref, safe='')}",
        params={"context": 0},
        timeout_s=TEXT_TIMEOUT_S,
    )


def pair_verses(hebrew: Any, english: Any, *, first_verse: int = 1) -> list[dict[str, Any]]:
    """
    Zip Hebrew and English verse lists into numbered verse records.

    A single verse comes back from Sefaria as a bare string, not a list.
    """
    if isinstance(hebrew, str):
        hebrew = [hebrew]
    if isinstance(english, str):
        english = [english]
    english = english if isinstance(english, list) else []

    return [
        {
            "verse": first_verse + i,
            "hebrew": he,
            "english": (english[i] if i < len(english) else None) or None,
        }
        for i, he in enumerate(hebrew or [])
    ]


async def get_text(book: Book, chapter: int | None, verses: VerseRange | None) -> dict[str, Any]:
    data = await fetch_text(build_ref(book, chapter, verses))
    hebrew = clean_text(data.get("he"))
    english = clean_text(data.get("text"))

    result: dict[str, Any] = {
        "source": SOURCE,
        "ref": data.get("ref"),
        "book": book.ref,
        "bookHebrew": book.he,
        "chapter": chapter,
        "totalChapters": book.chapters,
    }

    if chapter is None:
        # Whole-book overview: raw per-chapter verse lists.
        result["totalVerses"] = len(hebrew) if isinstance(hebrew, list) else None
        result["verses"] = None
        result["hebrew"] = hebrew
        result["english"] = english
        return result

    paired = pair_verses(hebrew, english, first_verse=verses.start if verses else 1)
    result["totalVerses"] = len(paired)
    result["verses"] = paired
    return result


def ref_book(ref: str | None) -> str | None:
    """
    "I Samuel 3:4" -> "I Samuel", "Genesis.1.1" -> "Genesis".
    """
    if not ref:
        return None
    match = _REF_BOOK_RE.match(ref)
    return match.group("book") if match else ref


def _search_hit(hit: dict) -> dict[str, Any]:
    src = hit.get("_source") or {}
    ref = src.get("ref")
    return {
        "ref": ref,
        "book": ref_book(ref),
        "hebrew": clean_text(src.get("hebrew") or src.get("he")),
        "english": clean_text(src.get("english") or src.get("text")),
    }


async def search(query: str, *, language: str, size: int) -> list[dict[str, Any]]:
    payload = {
        "query": query,
        "type": "text",
        "field": language,
        "filters": ["Tanakh"],
        "size": size,
        "sort_type": "relevance",
    }
    data = await http.post_json(f"{SEFARIA_BASE}/search-wrapper", payload, timeout_s=SEARCH_TIMEOUT_S)
    hits = ((data or {}).get("hits") or {}).get("hits") or []
    return [_search_hit(hit) for hit in hits]


async def random_verse(book: Book | None = None, *, rng: random.Random | None = None) -> dict[str, Any]:
    """
    A random verse: random book (unless given), random chapter, then a random
    verse from that chapter's text. Empty chapters yield a "try again" message.
    """
    rng = rng or random.Random()
    target = book or rng.choice(ALL_BOOKS)
    chapter = rng.randint(1, target.chapters)

    data = await fetch_text(build_ref(target, chapter))
    hebrew = data.get("he") or []
    english = data.get("text") or []
    if not hebrew:
        return {"source": SOURCE, "message": "No verses found. Try again."}

    index = rng.randrange(len(hebrew))
    return {
        "source": SOURCE,
        "ref": f"{target.ref} {chapter}:{index + 1}",
        "book": target.ref,
        "bookHebrew": target.he,
        "chapter": chapter,
        "verse": index + 1,
        "hebrew": clean_text(hebrew[index]),
        "english": clean_text(english[index]) if index < len(english) and english[index] else None,
    }
