"""
Joke page and listing page parsing for yo-yoo.co.il.

The site has no stable markup for the joke body, so it is found by an ordered
strategy chain (`BODY_STRATEGIES`). Each strategy takes a decoded
`RawDocument` and returns text or None. Swap or reorder strategies here
without touching the callers.

Known gap: the paragraph fallback joins every non-boilerplate <p> on the page,
so on pages with many unrelated paragraphs it over-collects.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import Tag

from core import extraction, legacy_encoding
from core.extraction import RawDocument

JOKES_BASE = "https://www.yo-yoo.co.il/jokes"

# Site name and "share with friends" prompts show up in paragraphs and meta tags.
BOILERPLATE_PHRASES = ("שתפו", "יויו")

# "<label> : <title> - <site>", e.g. "בדיחה : Chicken Joke - יויו בדיחות"
TITLE_RE = re.compile(r"^(?P<label>[^:]+?)\s*:\s*(?P<title>.+?)\s+-\s+(?P<site>[^-]+)$")

# openSharePopup(`<joke>`, `<extra>`) with backtick, single or double quotes.
# A backslash only ever starts an escape pair, so an unterminated literal
# fails in linear time.
SHARE_POPUP_RE = re.compile(
    r"openSharePopup\(\s*(?P<quote>[`'\"])(?P<body>(?:\\.|(?!(?P=quote))[^\\])*)(?P=quote)",
    re.DOTALL,
)

JOKE_HREF_RE = re.compile(r"joke\.php\?(?:[^#]*?&)?id=(?P<id>\d+)")
CATEGORY_HREF_RE = re.compile(r"[?&]cat=(?P<cat>[^&#]+)")

_JS_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_JS_ESCAPES = {"n": "\n", "t": " ", "r": ""}


@dataclass(frozen=True)
class JokeRecord:
    id: int
    url: str
    title: str | None = None
    body: str | None = None
    category: str | None = None


def joke_url(joke_id: int) -> str:
    return f"{JOKES_BASE}/joke.php?id={joke_id}"


def _unescape_js(literal: str) -> str:
    return _JS_ESCAPE_RE.sub(lambda m: _JS_ESCAPES.get(m.group(1), m.group(1)), literal)


def _has_boilerplate(text: str) -> bool:
    return any(phrase in text for phrase in BOILERPLATE_PHRASES)


def body_from_share_popup(doc: RawDocument) -> str | None:
    match = SHARE_POPUP_RE.search(doc.text)
    if not match:
        return None
    return extraction.strip_markup(_unescape_js(match.group("body"))) or None


def body_from_meta(doc: RawDocument) -> str | None:
    for content in (
        extraction.meta_content(doc.soup, name="description"),
        extraction.meta_content(doc.soup, prop="og:description"),
    ):
        if content and not _has_boilerplate(content):
            return content
    return None


def body_from_paragraphs(doc: RawDocument) -> str | None:
    texts = extraction.paragraph_texts(doc.soup, min_chars=5, exclude=BOILERPLATE_PHRASES)
    return "\n".join(texts) or None


BODY_STRATEGIES = (body_from_share_popup, body_from_meta, body_from_paragraphs)


def title_from_document(doc: RawDocument) -> str | None:
    return extraction.title_from_pattern(doc.soup, TITLE_RE)


def category_from_document(doc: RawDocument) -> str | None:
    """
    First `?cat=` link on the page (the breadcrumb), decoded from windows-1255.
    """
    for anchor in doc.soup.find_all("a", href=True):
        if not isinstance(anchor, Tag):
            continue
        href = anchor.get("href")
        if not isinstance(href, str):
            continue
        match = CATEGORY_HREF_RE.search(href)
        if match:
            return legacy_encoding.decode_legacy_param(match.group("cat")).strip() or None
    return None


def parse_joke_page(html: str, joke_id: int, *, strategies=BODY_STRATEGIES) -> JokeRecord:
    """
    Parse a decoded joke page. Missing fields come back as None; this never raises
    for absent markers.
    """
    url = joke_url(joke_id)
    doc = RawDocument.from_text(url, html or "")
    return JokeRecord(
        id=int(joke_id),
        url=url,
        title=title_from_document(doc),
        body=extraction.first_result(strategies, doc),
        category=category_from_document(doc),
    )


def parse_listing_page(html: str) -> list[JokeRecord]:
    """
    Joke links on a listing page (latest / category), one per id, first-seen order.
    """
    doc = RawDocument.from_text(JOKES_BASE, html or "")
    return [
        JokeRecord(id=link.id, url=joke_url(link.id), title=link.title)
        for link in extraction.numbered_links(doc.soup, JOKE_HREF_RE)
    ]
