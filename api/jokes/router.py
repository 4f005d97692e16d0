"""
Hebrew jokes API endpoints (scraped from yo-yoo.co.il).
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core import errors
from core.http import UpstreamError
from core.pagination import clamp

from . import catalog, schemas, service

router = APIRouter()


@router.get("/categories")
async def list_categories() -> dict:
    return {
        "source": service.SOURCE,
        "count": len(catalog.CATEGORIES),
        "categories": [schemas.CategoryOut(slug=c.slug, nameHebrew=c.he) for c in catalog.CATEGORIES],
    }


@router.get("/random")
async def random_jokes(count: int | None = Query(default=None)) -> dict:
    """
    One or more random jokes (count 1-10).
    """
    count = clamp(count, default=1, minimum=1, maximum=10)
    records = await service.random_jokes(count)
    return {
        "source": service.SOURCE,
        "count": len(records),
        "jokes": [schemas.Joke.from_record(r) for r in records],
    }


@router.get("/latest")
async def latest_jokes(limit: int | None = Query(default=None)) -> dict:
    limit = clamp(limit, default=10, minimum=1, maximum=20)
    try:
        records = await service.latest_jokes(limit)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch latest jokes") from exc
    return {
        "source": service.SOURCE,
        "count": len(records),
        "jokes": [schemas.Joke.from_record(r) for r in records],
    }


@router.get("/category/{slug}")
async def category_jokes(
    slug: str,
    limit: int | None = Query(default=None),
    page: int | None = Query(default=None),
) -> dict:
    limit = clamp(limit, default=10, minimum=1, maximum=20)
    page = clamp(page, default=1, minimum=1)

    category = catalog.find_category(slug)
    if category is None:
        raise errors.not_found(
            f'Category not found: "{slug.strip().lower()}"',
            hint="Use /jokes/categories to see all valid category slugs.",
            validSlugs=[c.slug for c in catalog.CATEGORIES],
        )

    try:
        records = await service.category_jokes(category, limit=limit, page=page)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch category jokes") from exc

    return {
        "source": service.SOURCE,
        "category": category.slug,
        "categoryHebrew": category.he,
        "page": page,
        "count": len(records),
        "jokes": [schemas.Joke.from_record(r) for r in records],
    }


@router.get("/{joke_id}")
async def get_joke(joke_id: str) -> dict:
    try:
        parsed_id = int(joke_id)
    except ValueError:
        parsed_id = 0
    if parsed_id < 1:
        raise errors.bad_request("Invalid joke ID. Must be a positive number.", example="/jokes/4033")

    try:
        record = await service.get_joke(parsed_id)
    except UpstreamError as exc:
        raise errors.from_upstream(
            exc,
            error="Failed to fetch joke",
            not_found_detail={"error": f"Joke not found: id={parsed_id}"},
        ) from exc

    if not record.body:
        raise errors.not_found(
            f"Joke not found or empty: id={parsed_id}",
            hint="Try /jokes/random for a random joke or /jokes/latest for recent ones.",
        )

    return {"source": service.SOURCE, **schemas.Joke.from_record(record).model_dump()}
