"""
HTML parsing for pocketmonsters.co.il (the Israeli Pokemon fan site).

Three page kinds:
- the name dictionary: one big table, rows of  number | hebrew | english | image
- a tag page (`/?tag=0025`) linking to the Pokedex post for that number
- the Pokedex post: descriptions table, species ("זן") column, trivia list

Every parser returns empty results for unexpected markup instead of raising.
"""

from __future__ import annotations

import re
from typing import Any

from bs4 import BeautifulSoup, Tag

from core.extraction import collapse_whitespace

from .names import normalize_name_for_api

POCKETMONSTERS_BASE = "https://pocketmonsters.co.il"

POKEDEX_LINK_MARKER = "פוקידע"
DESCRIPTIONS_WORD = "תיאורי"
DESCRIPTIONS_HEADING = "תיאורי פוקידע"
TRIVIA_HEADING = "פרטי טריוויה"
SPECIES_HEADER = "זן"

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def _cell_text(cell: Tag) -> str:
    return collapse_whitespace(cell.get_text(" "))


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT_RE.match(text or "")
    return int(match.group(1)) if match else None


def parse_name_dictionary(html: str) -> dict[str, str]:
    """
    PokeAPI name -> Hebrew name, from the dictionary page.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    names: dict[str, str] = {}

    for row in soup.select("table tr"):
        cells = row.find_all("td")
        if len(cells) < 3:
            continue
        number = _leading_int(_cell_text(cells[0]))
        hebrew = _cell_text(cells[1])
        english = _cell_text(cells[2])
        if not (number and hebrew and english):
            continue
        api_name = normalize_name_for_api(english)
        if api_name:
            names[api_name] = hebrew

    return names


def find_pokedex_post_url(html: str, padded_id: str) -> str | None:
    """
    The tag page lists posts; the Pokedex entry is the link whose text mentions
    both "פוקידע" and the zero-padded number.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    for anchor in soup.find_all("a", href=True):
        href = anchor.get("href")
        if not isinstance(href, str) or not href:
            continue
        text = anchor.get_text()
        if POKEDEX_LINK_MARKER in text and padded_id in text:
            return href if href.startswith("http") else f"{POCKETMONSTERS_BASE}{href}"
    return None


def _element_after_text(soup: BeautifulSoup, marker: str, tag_name: str) -> Tag | None:
    heading = soup.find(string=lambda s: isinstance(s, str) and marker in s)
    if heading is None:
        return None
    found = heading.find_next(tag_name)
    return found if isinstance(found, Tag) else None


def _descriptions(soup: BeautifulSoup) -> list[dict[str, str]]:
    table = _element_after_text(soup, DESCRIPTIONS_HEADING, "table")
    if table is None:
        return []
    descriptions: list[dict[str, str]] = []
    for row in table.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) < 2:
            continue
        game = _cell_text(cells[0])
        text = _cell_text(cells[1])
        if game and text:
            descriptions.append({"game": game, "text": text})
    return descriptions


def _species(soup: BeautifulSoup) -> str | None:
    """
    The info table has "זן" in its header row; the value sits in the same
    column of the next row.
    """
    for table in soup.find_all("table"):
        text = table.get_text()
        if SPECIES_HEADER not in text or DESCRIPTIONS_WORD in text:
            continue
        rows = table.find_all("tr")
        if len(rows) < 2:
            continue
        headers = [_cell_text(cell) for cell in rows[0].find_all(["td", "th"])]
        if SPECIES_HEADER not in headers:
            continue
        column = headers.index(SPECIES_HEADER)
        data_cells = rows[1].find_all(["td", "th"])
        if column < len(data_cells):
            value = _cell_text(data_cells[column])
            if value:
                return value
    return None


def _trivia(soup: BeautifulSoup) -> list[str]:
    listing = _element_after_text(soup, TRIVIA_HEADING, "ul")
    if listing is None:
        return []
    items = (_cell_text(item) for item in listing.find_all("li"))
    return [item for item in items if item]


def parse_pokedex_post(html: str) -> dict[str, Any] | None:
    """
    Hebrew descriptions, species and trivia from a Pokedex post.

    Returns None when the page has neither descriptions nor trivia.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    result: dict[str, Any] = {
        "source": "pocketmonsters.co.il",
        "descriptions": _descriptions(soup),
        "species": _species(soup),
        "trivia": _trivia(soup),
    }
    if not result["descriptions"] and not result["trivia"]:
        return None
    return result
