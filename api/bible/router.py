"""
Hebrew Bible API endpoints (Sefaria).
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core import errors
from core.http import UpstreamError
from core.pagination import clamp

from . import catalog, service

router = APIRouter()

BOOK_HINT = "Use /bible/books to see all valid book names."


def _book_or_404(name: str) -> catalog.Book:
    book = catalog.find_book(name)
    if book is None:
        raise errors.not_found(f'Book not found: "{name}"', hint=BOOK_HINT)
    return book


@router.get("/books")
async def list_books() -> dict:
    return {
        "source": service.SOURCE,
        "totalBooks": len(catalog.ALL_BOOKS),
        "sections": [
            {
                "section": section.name,
                "sectionHebrew": section.he,
                "books": [{"name": b.ref, "nameHebrew": b.he, "chapters": b.chapters} for b in section.books],
            }
            for section in catalog.TANAKH
        ],
    }


@router.get("/text")
async def get_text(
    book: str | None = Query(default=None),
    chapter: str | None = Query(default=None),
    verse: str | None = Query(default=None),
) -> dict:
    """
    Text of a book, a chapter, or a verse range ("1" or "1-5") in Hebrew and English.
    """
    if not book:
        raise errors.bad_request(
            "Missing required query param: book",
            example="/bible/text?book=Genesis&chapter=1&verse=1",
        )
    found = _book_or_404(book)

    chapter_no: int | None = None
    verses: service.VerseRange | None = None
    if chapter:
        chapter_no = int(chapter) if chapter.strip().isdigit() else 0
        if not 1 <= chapter_no <= found.chapters:
            raise errors.bad_request(
                f"Invalid chapter {chapter} for {found.ref}. Valid range: 1-{found.chapters}"
            )
        if verse:
            verses = service.parse_verse_range(verse)
            if verses is None:
                raise errors.bad_request(f'Invalid verse "{verse}". Use a number or a range like 1-5.')

    ref = service.build_ref(found, chapter_no, verses)
    try:
        return await service.get_text(found, chapter_no, verses)
    except UpstreamError as exc:
        raise errors.from_upstream(
            exc,
            error="Failed to fetch text from Sefaria",
            not_found_detail={
                "error": f'Reference not found: "{ref}"',
                "hint": "Check book name, chapter and verse numbers.",
            },
        ) from exc


@router.get("/search")
async def search(
    q: str | None = Query(default=None),
    lang: str | None = Query(default=None),
    limit: int | None = Query(default=None),
) -> dict:
    if not q:
        raise errors.bad_request(
            "Missing required query param: q",
            example="/bible/search?q=in the beginning&lang=en",
        )
    language = "hebrew" if lang == "he" else "english"
    size = clamp(limit, default=20, minimum=1, maximum=100)

    try:
        results = await service.search(q, language=language, size=size)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to search Sefaria") from exc

    return {
        "source": service.SOURCE,
        "query": q,
        "language": language,
        "count": len(results),
        "results": results,
    }


@router.get("/random")
async def random_verse(book: str | None = Query(default=None)) -> dict:
    target = _book_or_404(book) if book else None
    try:
        return await service.random_verse(target)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch random verse") from exc
