"""
Building blocks for pulling structured fields out of loosely structured HTML.

Scraped sites change markup without notice, so each field is extracted by an
ordered list of small strategies. A strategy returns a value or None, and
never raises for a missing marker. `first_result` walks the list and stops at
the first hit. Callers decide whether an all-None record is a 404.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Iterable, TypeVar

from bs4 import BeautifulSoup, Tag

from . import legacy_encoding

S = TypeVar("S")

Strategy = Callable[[S], "str | None"]


@dataclass(frozen=True)
class RawDocument:
    """
    One fetched page. Lives only for the duration of a single ingestion call.
    """

    url: str
    content: bytes
    text: str

    @classmethod
    def from_legacy_bytes(cls, url: str, content: bytes) -> "RawDocument":
        return cls(url=url, content=content, text=legacy_encoding.decode_legacy(content))

    @classmethod
    def from_text(cls, url: str, text: str) -> "RawDocument":
        return cls(url=url, content=text.encode("utf-8"), text=text)

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.text, "html.parser")


@dataclass(frozen=True)
class NumberedLink:
    id: int
    title: str | None
    href: str


def first_result(strategies: Iterable[Strategy[S]], source: S) -> str | None:
    for strategy in strategies:
        value = strategy(source)
        if value:
            return value
    return None


def collapse_whitespace(text: str) -> str:
    """
    Collapse runs of spaces inside each line and drop blank lines.
    """
    lines = (" ".join(line.split()) for line in (text or "").splitlines())
    return "\n".join(line for line in lines if line)


def strip_markup(fragment: str) -> str:
    """
    Turn an HTML fragment into plain text: <br> becomes a newline, other tags
    are dropped, entities are decoded.
    """
    if not fragment:
        return ""
    soup = BeautifulSoup(fragment, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    return collapse_whitespace(soup.get_text())


def meta_content(soup: BeautifulSoup, *, name: str | None = None, prop: str | None = None) -> str | None:
    attrs = {"name": name} if name else {"property": prop}
    tag = soup.find("meta", attrs=attrs)
    if not isinstance(tag, Tag):
        return None
    content = tag.get("content")
    if not isinstance(content, str):
        return None
    return collapse_whitespace(content) or None


def title_from_pattern(soup: BeautifulSoup, pattern: re.Pattern[str]) -> str | None:
    """
    Match the <title> text against `pattern` and return its `title` group.
    """
    if soup.title is None:
        return None
    text = " ".join(soup.title.get_text().split())
    match = pattern.match(text)
    if not match:
        return None
    return match.group("title").strip() or None


def numbered_links(soup: BeautifulSoup, href_pattern: re.Pattern[str]) -> list[NumberedLink]:
    """
    All <a> elements whose href matches `href_pattern` (which must have an
    `id` group with digits), deduplicated by id in first-seen order.

    The title is the first non-empty anchor text seen for that id.
    """
    hrefs: dict[int, str] = {}
    titles: dict[int, str | None] = {}

    for anchor in soup.find_all("a", href=True):
        href = anchor.get("href")
        if not isinstance(href, str):
            continue
        match = href_pattern.search(href)
        if not match:
            continue
        link_id = int(match.group("id"))
        text = " ".join(anchor.get_text().split()) or None
        if link_id not in hrefs:
            hrefs[link_id] = href
            titles[link_id] = text
        elif titles[link_id] is None and text:
            titles[link_id] = text

    return [NumberedLink(id=link_id, title=titles[link_id], href=href) for link_id, href in hrefs.items()]


def paragraph_texts(
    soup: BeautifulSoup,
    *,
    min_chars: int = 0,
    exclude: Iterable[str] = (),
) -> list[str]:
    """
    Visible <p> texts longer than `min_chars`, skipping any containing a
    boilerplate phrase from `exclude`.
    """
    phrases = tuple(exclude)
    texts: list[str] = []
    for paragraph in soup.find_all("p"):
        text = collapse_whitespace(paragraph.get_text("\n"))
        if len(text) <= min_chars:
            continue
        if any(phrase in text for phrase in phrases):
            continue
        texts.append(text)
    return texts
