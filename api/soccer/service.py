"""
Soccer service: live scores, fixtures and standings from ESPN's public API.

A league that fails to load contributes no matches instead of failing the
whole scoreboard. Today's cross-league scoreboard is cached for CACHE_MS,
standings for five minutes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from core import config, http
from core.cache import TimedCache, fetch_cached

from . import parsing
from .catalog import LEAGUES, League

logger = logging.getLogger(__name__)

SOURCE = "ESPN"
ESPN_BASE = "https://site.api.espn.com/apis/site/v2/sports/soccer"
ESPN_STANDINGS = "https://site.api.espn.com/apis/v2/sports/soccer"

FETCH_TIMEOUT_S = 10.0
STANDINGS_TTL_S = 5 * 60

HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; SoccerAPI/2.0)"}

scores_cache = TimedCache(config.soccer_cache_seconds(), name="soccer_scores")
standings_cache = TimedCache(STANDINGS_TTL_S, name="soccer_standings")


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def compact_date_to_iso(date: str) -> str:
    """
    "20240519" -> "2024-05-19".
    """
    return f"{date[:4]}-{date[4:6]}-{date[6:8]}"


async def fetch_league(league: League, date: str | None = None, *, full: bool = False) -> list[dict[str, Any]]:
    """
    Scoreboard for one league; `date` is YYYYMMDD (default: ESPN's current matchday).
    Any failure yields an empty list.
    """
    params = {"dates": date} if date else None
    try:
        data = await http.get_json(
            f"{ESPN_BASE}/{league.slug}/scoreboard",
            params=params,
            headers=HEADERS,
            timeout_s=FETCH_TIMEOUT_S,
        )
        return parsing.parse_scoreboard(data, league, full=full)
    except http.FANOUT_ERRORS as exc:
        logger.warning("league_scoreboard_failed league=%s error=%s", league.slug, exc)
        return []


async def today() -> dict[str, Any]:
    async def _fetch() -> dict[str, Any]:
        per_league = await http.gather_best_effort(LEAGUES, fetch_league, lambda _league, _exc: [])
        matches = [match for league_matches in per_league for match in league_matches]
        return {"source": SOURCE, "dateISO": today_iso(), "count": len(matches), "matches": matches}

    return await fetch_cached(scores_cache, "today", _fetch)


async def league_matches(league: League, date: str | None = None) -> dict[str, Any]:
    matches = await fetch_league(league, date, full=True)
    return {
        "source": SOURCE,
        "league": league.name,
        "country": league.country,
        "dateISO": compact_date_to_iso(date) if date else today_iso(),
        "count": len(matches),
        "matches": matches,
    }


async def _find_match(league: League, match_id: str) -> dict[str, Any] | None:
    matches = await fetch_league(league, full=True)
    return next((m for m in matches if str(m.get("id")) == match_id), None)


async def match_detail(league: League, match_id: str) -> dict[str, Any] | None:
    """
    Scoreboard record for a match, enriched from the summary endpoint when
    that responds. None when the match is not on the current scoreboard.

    Raises the summary's `UpstreamError` only when the summary failed and the
    scoreboard has no such match either.
    """
    summary: dict | None = None
    summary_error: http.UpstreamError | None = None
    try:
        summary = await http.get_json(
            f"{ESPN_BASE}/{league.slug}/summary",
            params={"event": match_id},
            headers=HEADERS,
            timeout_s=FETCH_TIMEOUT_S,
        )
    except http.UpstreamError as exc:
        logger.warning("match_summary_failed league=%s id=%s error=%s", league.slug, match_id, exc)
        summary_error = exc

    match = await _find_match(league, match_id)
    if match is None:
        if summary_error is not None:
            raise summary_error
        return None
    return parsing.enrich_with_summary(match, summary) if summary else match


async def standings(league: League) -> dict[str, Any]:
    async def _fetch() -> dict[str, Any]:
        data = await http.get_json(
            f"{ESPN_STANDINGS}/{league.slug}/standings",
            headers=HEADERS,
            timeout_s=FETCH_TIMEOUT_S,
        )
        return parsing.parse_standings(data or {}, league.slug)

    return await fetch_cached(standings_cache, league.slug, _fetch)
