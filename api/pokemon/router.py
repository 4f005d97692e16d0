"""
Pokemon API endpoints: PokeAPI data in English and Hebrew.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from core import errors
from core.http import UpstreamError
from core.pagination import clamp, has_next

from . import formatting, service
from . import translations as tr
from .dependencies import get_normalizer
from .names import NameNormalizer

router = APIRouter()

SEARCH_HINT = "Use /pokemon/list or /pokemon/search to find valid names or IDs."


def _page_params(limit: int | None, offset: int | None) -> tuple[int, int]:
    return (
        clamp(limit, default=20, minimum=1, maximum=50),
        clamp(offset, default=0, minimum=0),
    )


@router.get("/list")
async def list_pokemon(
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
    normalizer: NameNormalizer = Depends(get_normalizer),
) -> dict:
    limit, offset = _page_params(limit, offset)
    try:
        total, pokemon = await service.list_pokemon(limit=limit, offset=offset, normalizer=normalizer)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch Pokemon list") from exc

    return {
        "source": service.SOURCE,
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(pokemon),
        "hasNext": has_next(total, offset=offset, limit=limit),
        "pokemon": pokemon,
    }


@router.get("/detail/{id_or_name}")
async def pokemon_detail(id_or_name: str, normalizer: NameNormalizer = Depends(get_normalizer)) -> dict:
    """
    Full record for one Pokemon. Accepts an id, an English name or an exact
    Hebrew name.
    """
    query = id_or_name.strip()
    key = await service.resolve_query(query, normalizer)
    if key is None:
        raise errors.not_found(f'פוקימון לא נמצא: "{query}"', hint="Use /pokemon/search to find valid names.")

    try:
        pokemon = await service.pokemon_detail(key, normalizer)
    except UpstreamError as exc:
        raise errors.from_upstream(
            exc,
            error="Failed to fetch Pokemon details",
            not_found_detail={"error": f'Pokemon not found: "{key}"', "hint": SEARCH_HINT},
        ) from exc

    return {"source": service.SOURCE_WITH_HEBREW, "pokemon": pokemon}


@router.get("/types")
async def list_types() -> dict:
    try:
        types = await service.list_types()
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch types") from exc
    return {"source": service.SOURCE, "count": len(types), "types": types}


@router.get("/type/{type_name}")
async def pokemon_by_type(
    type_name: str,
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
    normalizer: NameNormalizer = Depends(get_normalizer),
) -> dict:
    type_name = type_name.strip().lower()
    limit, offset = _page_params(limit, offset)
    try:
        type_data, pokemon = await service.pokemon_by_type(
            type_name, limit=limit, offset=offset, normalizer=normalizer
        )
    except UpstreamError as exc:
        raise errors.from_upstream(
            exc,
            error="Failed to fetch Pokemon by type",
            not_found_detail={
                "error": f'Type not found: "{type_name}"',
                "hint": "Use /pokemon/types to see all valid types.",
            },
        ) from exc

    total = len(type_data.get("pokemon") or [])
    return {
        "source": service.SOURCE,
        "type": type_name,
        "typeEnglish": formatting.localized_name(type_data.get("names"), "en") or type_name,
        "typeHebrew": formatting.localized_name(type_data.get("names"), "he")
        or tr.translate(tr.TYPE_HE, type_name),
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(pokemon),
        "hasNext": has_next(total, offset=offset, limit=limit),
        "pokemon": pokemon,
    }


@router.get("/generation/{generation}")
async def pokemon_by_generation(
    generation: str,
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
    normalizer: NameNormalizer = Depends(get_normalizer),
) -> dict:
    limit, offset = _page_params(limit, offset)
    try:
        gen_data, pokemon = await service.pokemon_by_generation(
            generation, limit=limit, offset=offset, normalizer=normalizer
        )
    except UpstreamError as exc:
        raise errors.from_upstream(
            exc,
            error="Failed to fetch generation",
            not_found_detail={
                "error": f'Generation not found: "{generation}"',
                "hint": "Use a number 1-9 or a name like 'generation-i'.",
            },
        ) from exc

    total = len(gen_data.get("pokemon_species") or [])
    region = (gen_data.get("main_region") or {}).get("name")
    return {
        "source": service.SOURCE,
        "generation": gen_data.get("name"),
        "generationHebrew": tr.translate(tr.GENERATION_HE, gen_data.get("name")),
        "region": region,
        "regionHebrew": tr.translate(tr.REGION_HE, region),
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(pokemon),
        "hasNext": has_next(total, offset=offset, limit=limit),
        "pokemon": pokemon,
    }


@router.get("/evolution/{id_or_name}")
async def evolution_chain(id_or_name: str, normalizer: NameNormalizer = Depends(get_normalizer)) -> dict:
    key = id_or_name.strip().lower()
    try:
        chain = await service.evolution_chain(key, normalizer)
    except UpstreamError as exc:
        raise errors.from_upstream(
            exc,
            error="Failed to fetch evolution chain",
            not_found_detail={"error": f'Pokemon not found: "{key}"', "hint": SEARCH_HINT},
        ) from exc

    if chain == []:
        return {"source": service.SOURCE, "chain": []}
    return {"source": service.SOURCE, "pokemon": key, "chain": chain}


@router.get("/search")
async def search_pokemon(
    q: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    normalizer: NameNormalizer = Depends(get_normalizer),
) -> dict:
    """
    Partial-name search in English or Hebrew across all generations.
    """
    if not q:
        raise errors.bad_request(
            "Missing required query param: q",
            example="/pokemon/search?q=pika or /pokemon/search?q=פיקאצ'ו",
        )
    limit = clamp(limit, default=20, minimum=1, maximum=50)

    try:
        language, pokemon = await service.search_pokemon(q, limit=limit, normalizer=normalizer)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to search Pokemon") from exc

    return {
        "source": service.SOURCE_WITH_HEBREW,
        "query": q,
        "searchLanguage": language,
        "count": len(pokemon),
        "pokemon": pokemon,
    }
