"""Tests for the Tanakh catalog, Sefaria service and /bible routes."""

import random

import pytest

from bible import catalog, service
from core.http import UpstreamError


def test_catalog_has_all_books():
    assert len(catalog.ALL_BOOKS) == 39
    assert [s.he for s in catalog.TANAKH] == ["תורה", "נביאים", "כתובים"]


@pytest.mark.parametrize(
    "query, expected",
    [
        ("genesis", "Genesis"),
        ("בראשית", "Genesis"),
        ("sam", "I Samuel"),
        ("Song", "Song of Songs"),
    ],
)
def test_find_book(query, expected):
    assert catalog.find_book(query).ref == expected


def test_find_book_unknown():
    assert catalog.find_book("Maccabees") is None
    assert catalog.find_book("  ") is None


def test_parse_verse_range():
    assert service.parse_verse_range("3") == service.VerseRange(3, 3)
    assert service.parse_verse_range("1-5") == service.VerseRange(1, 5)
    assert service.parse_verse_range("5-1") is None
    assert service.parse_verse_range("abc") is None
    assert str(service.VerseRange(2, 4)) == "2-4"


def test_build_ref():
    genesis = catalog.find_book("Genesis")
    assert service.build_ref(genesis) == "Genesis"
    assert service.build_ref(genesis, 1) == "Genesis.1"
    assert service.build_ref(genesis, 1, service.VerseRange(1, 3)) == "Genesis.1.1-3"


def test_clean_text_strips_nested_markup():
    assert service.clean_text(["<b>א</b>", ["<i>ב</i>"]]) == ["א", ["ב"]]
    assert service.clean_text(None) is None


def test_pair_verses_handles_single_string_and_offset():
    assert service.pair_verses("א", "A", first_verse=3) == [{"verse": 3, "hebrew": "א", "english": "A"}]
    assert service.pair_verses(["א", "ב"], ["A"]) == [
        {"verse": 1, "hebrew": "א", "english": "A"},
        {"verse": 2, "hebrew": "ב", "english": None},
    ]


@pytest.mark.asyncio
async def test_random_verse_from_given_book(monkeypatch):
    async def fake_fetch_text(ref):
        assert ref == "Obadiah.1"
        return {"he": ["א", "ב", "ג"], "text": ["A", "B", "C"]}

    monkeypatch.setattr(service, "fetch_text", fake_fetch_text)

    result = await service.random_verse(catalog.find_book("Obadiah"), rng=random.Random(3))
    index = result["verse"] - 1
    assert result["chapter"] == 1
    assert result["hebrew"] == ["א", "ב", "ג"][index]
    assert result["english"] == ["A", "B", "C"][index]
    assert result["ref"] == f"Obadiah 1:{result['verse']}"


@pytest.mark.asyncio
async def test_random_verse_empty_chapter(monkeypatch):
    async def fake_fetch_text(ref):
        return {"he": [], "text": []}

    monkeypatch.setattr(service, "fetch_text", fake_fetch_text)

    result = await service.random_verse(rng=random.Random(0))
    assert result["message"] == "No verses found. Try again."


@pytest.mark.asyncio
async def test_search_posts_tanakh_query(monkeypatch):
    seen = {}

    async def fake_post_json(url, payload, **kwargs):
        seen["url"] = url
        seen["payload"] = payload
        return {
            "hits": {
                "hits": [
                    {"_source": {"ref": "Genesis 1:1", "he": "<b>בראשית</b>", "text": "In the beginning"}}
                ]
            }
        }

    monkeypatch.setattr(service.http, "post_json", fake_post_json)

    results = await service.search("beginning", language="english", size=5)
    assert seen["url"].endswith("/search-wrapper")
    assert seen["payload"]["filters"] == ["Tanakh"]
    assert seen["payload"]["size"] == 5
    assert results == [
        {"ref": "Genesis 1:1", "book": "Genesis", "hebrew": "בראשית", "english": "In the beginning"}
    ]


def test_books_route(client):
    body = client.get("/bible/books").json()
    assert body["totalBooks"] == 39
    assert body["sections"][0]["books"][0] == {"name": "Genesis", "nameHebrew": "בראשית", "chapters": 50}


def test_text_route_validation(client):
    assert client.get("/bible/text").status_code == 400
    assert client.get("/bible/text?book=Maccabees").status_code == 404
    assert client.get("/bible/text?book=Genesis&chapter=51").status_code == 400
    assert client.get("/bible/text?book=Genesis&chapter=1&verse=x").status_code == 400


def test_text_route_pairs_verses(client, monkeypatch):
    async def fake_fetch_text(ref):
        assert ref == "Genesis.1.2-3"
        return {"ref": "Genesis 1:2-3", "he": ["<b>ב</b>", "ג"], "text": ["Two", "Three"]}

    monkeypatch.setattr(service, "fetch_text", fake_fetch_text)

    body = client.get("/bible/text?book=בראשית&chapter=1&verse=2-3").json()
    assert body["ref"] == "Genesis 1:2-3"
    assert body["totalVerses"] == 2
    assert body["verses"][0] == {"verse": 2, "hebrew": "ב", "english": "Two"}


def test_text_route_reference_not_found(client, monkeypatch):
    async def fake_fetch_text(ref):
        raise UpstreamError("nope", url="x", status_code=404)

    monkeypatch.setattr(service, "fetch_text", fake_fetch_text)

    resp = client.get("/bible/text?book=Genesis&chapter=1")
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == 'Reference not found: "Genesis.1"'


def test_search_route_requires_query(client):
    assert client.get("/bible/search").status_code == 400
