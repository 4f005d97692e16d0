"""
Soccer scores endpoints (ESPN).

Failures here are reported as 500, matching what existing clients expect.
"""

from __future__ import annotations

import re

from fastapi import APIRouter, Query

from core import errors
from core.http import UpstreamError

from . import catalog, service

router = APIRouter()

LEAGUES_HINT = "Use /soccer/leagues to list all available leagues."

_COMPACT_DATE_RE = re.compile(r"^\d{8}$")


def _league_or_404(slug: str, *, hint: bool = True) -> catalog.League:
    league = catalog.find_league(slug)
    if league is None:
        extra = {"hint": LEAGUES_HINT} if hint else {}
        raise errors.not_found(f"Unknown league slug: {slug}", **extra)
    return league


@router.get("/leagues")
async def list_leagues() -> dict:
    return {
        "count": len(catalog.LEAGUES),
        "leagues": [{"slug": l.slug, "name": l.name, "country": l.country} for l in catalog.LEAGUES],
    }


@router.get("/today")
async def today() -> dict:
    return await service.today()


@router.get("/league/{slug}")
async def league_matches(slug: str, date: str | None = Query(default=None)) -> dict:
    """
    Matches for one league; `date` is YYYYMMDD.
    """
    league = _league_or_404(slug)
    if date and not _COMPACT_DATE_RE.match(date):
        raise errors.bad_request(f'Invalid date "{date}". Use YYYYMMDD.', example="/soccer/league/eng.1?date=20240519")
    return await service.league_matches(league, date)


@router.get("/match/{slug}/{match_id}")
async def match_detail(slug: str, match_id: str) -> dict:
    league = _league_or_404(slug, hint=False)
    try:
        match = await service.match_detail(league, match_id)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch match details", status_code=500) from exc
    if match is None:
        raise errors.not_found(f"Match not found: {match_id}")
    return {"source": service.SOURCE, "match": match}


@router.get("/standings/{slug}")
async def standings(slug: str) -> dict:
    league = _league_or_404(slug)
    try:
        return await service.standings(league)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch standings", status_code=500) from exc
