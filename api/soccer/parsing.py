"""
ESPN soccer JSON -> compact match and standings records.

Parsers are pure: they take decoded JSON and return dicts, skipping events
that lack a competition or either side.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .catalog import League

_FIXED_STATUS = {
    "STATUS_FULL_TIME": "FT",
    "STATUS_FINAL": "FT",
    "STATUS_HALFTIME": "HT",
    "STATUS_POSTPONED": "Postponed",
    "STATUS_CANCELED": "Cancelled",
    "STATUS_SUSPENDED": "Suspended",
    "STATUS_DELAYED": "Delayed",
    "STATUS_ABANDONED": "Abandoned",
    "STATUS_SCHEDULED": "Scheduled",
    "STATUS_END_OF_EXTRATIME": "AET",
    "STATUS_FULL_TIME_EXTRA_TIME": "AET",
    "STATUS_PENALTIES": "PEN",
    "STATUS_END_OF_PENALTIES": "PEN",
}

_LIVE_STATUS = {"STATUS_IN_PROGRESS", "STATUS_FIRST_HALF", "STATUS_SECOND_HALF"}


def map_status(status_type: dict | None, status_detail: str | None) -> str:
    """
    ESPN status -> short label ("FT", "HT", "PEN", ...). Live matches show
    ESPN's own detail (e.g. "67'").
    """
    name = (status_type or {}).get("name")
    detail = (status_detail or "").strip()
    if name in _FIXED_STATUS:
        return _FIXED_STATUS[name]
    if name in _LIVE_STATUS:
        return detail or "Live"
    return detail or name or "Unknown"


def _score(value: Any) -> int | float | None:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else number


def _number(value: Any, default: int | float | None = 0) -> int | float | None:
    number = _score(value)
    return number if number else default


def parse_team(competitor: dict | None) -> dict[str, Any] | None:
    if not competitor:
        return None
    team = competitor.get("team") or {}
    records = competitor.get("records") or []
    return {
        "id": team.get("id"),
        "name": team.get("displayName") or team.get("shortDisplayName") or "Unknown",
        "shortName": team.get("shortDisplayName") or team.get("abbreviation"),
        "abbreviation": team.get("abbreviation"),
        "logo": team.get("logo"),
        "color": f"#{team['color']}" if team.get("color") else None,
        "score": _score(competitor.get("score")),
        "form": competitor.get("form"),
        "record": records[0].get("summary") if records else None,
        "winner": bool(competitor.get("winner")),
    }


def parse_details(details: list[dict] | None, home_id: Any, away_id: Any) -> tuple[list[dict], list[dict]]:
    """
    Goals and cards from a competition's incident list.
    """
    goals: list[dict] = []
    cards: list[dict] = []
    for detail in details or []:
        minute = (detail.get("clock") or {}).get("displayValue")
        athletes = detail.get("athletesInvolved") or []
        player = athletes[0].get("displayName") if athletes else None
        team_id = (detail.get("team") or {}).get("id")
        side = "home" if team_id == home_id else "away" if team_id == away_id else None

        if detail.get("scoringPlay"):
            goals.append(
                {
                    "minute": minute,
                    "player": player,
                    "side": side,
                    "ownGoal": bool(detail.get("ownGoal")),
                    "penalty": bool(detail.get("penaltyKick")),
                }
            )
        if detail.get("yellowCard") or detail.get("redCard"):
            cards.append(
                {
                    "minute": minute,
                    "player": player,
                    "side": side,
                    "type": "red" if detail.get("redCard") else "yellow",
                }
            )
    return goals, cards


def parse_match_stats(competitors: list[dict]) -> dict[str, dict[str, str]] | None:
    result: dict[str, dict[str, str]] = {}
    for competitor in competitors:
        stats = {s["name"]: s.get("displayValue") for s in competitor.get("statistics") or [] if "name" in s}
        if stats:
            result[competitor.get("homeAway")] = stats
    return result or None


def kickoff_time(date_utc: str | None) -> str | None:
    """
    "HH:MM" in UTC from ESPN's ISO timestamp ("2024-05-19T15:00Z").
    """
    if not date_utc:
        return None
    try:
        moment = datetime.fromisoformat(date_utc.replace("Z", "+00:00"))
    except ValueError:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%H:%M")


def parse_event(event: dict, league: League, *, full: bool = False) -> dict[str, Any] | None:
    """
    One ESPN scoreboard event as a match record; `full` adds goals, cards,
    statistics and headlines.
    """
    competitions = event.get("competitions") or []
    if not competitions:
        return None
    competition = competitions[0]
    competitors = competition.get("competitors") or []
    home_comp = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away_comp = next((c for c in competitors if c.get("homeAway") == "away"), None)
    if not home_comp or not away_comp:
        return None

    home = parse_team(home_comp)
    away = parse_team(away_comp)

    status_obj = competition.get("status") or event.get("status") or {}
    status_type = status_obj.get("type") or {}
    status_detail = status_type.get("shortDetail") or status_type.get("detail") or ""
    venue = competition.get("venue")
    has_score = home["score"] is not None and away["score"] is not None

    match: dict[str, Any] = {
        "id": event.get("id"),
        "country": league.country,
        "league": league.name,
        "leagueSlug": league.slug,
        "dateUTC": event.get("date"),
        "time": kickoff_time(event.get("date")),
        "status": map_status(status_type, status_detail),
        "statusDetail": status_detail,
        "clock": status_obj.get("displayClock"),
        "period": status_obj.get("period") or None,
        "home": home["name"],
        "away": away["name"],
        "homeShort": home["shortName"],
        "awayShort": away["shortName"],
        "homeLogo": home["logo"],
        "awayLogo": away["logo"],
        "homeColor": home["color"],
        "awayColor": away["color"],
        "score": f"{home['score']} - {away['score']}" if has_score else None,
        "homeScore": home["score"],
        "awayScore": away["score"],
        "homeForm": home["form"],
        "awayForm": away["form"],
        "homeRecord": home["record"],
        "awayRecord": away["record"],
        "venue": (
            {
                "name": venue.get("fullName"),
                "city": (venue.get("address") or {}).get("city"),
                "country": (venue.get("address") or {}).get("country"),
            }
            if venue
            else None
        ),
        "attendance": competition.get("attendance") or None,
        "broadcasts": [name for b in competition.get("broadcasts") or [] for name in b.get("names") or []],
    }

    if full:
        goals, cards = parse_details(
            competition.get("details"),
            (home_comp.get("team") or {}).get("id"),
            (away_comp.get("team") or {}).get("id"),
        )
        match["goals"] = goals
        match["cards"] = cards
        match["statistics"] = parse_match_stats(competitors)
        match["headlines"] = [
            {"type": h.get("type"), "text": h.get("shortLinkText") or h.get("description")}
            for h in competition.get("headlines") or []
        ]

    return match


def parse_scoreboard(data: dict | None, league: League, *, full: bool = False) -> list[dict[str, Any]]:
    events = (data or {}).get("events") or []
    matches = (parse_event(event, league, full=full) for event in events)
    return [match for match in matches if match is not None]


def _standing_row(entry: dict) -> dict[str, Any]:
    team = entry.get("team") or {}
    stats = {s["name"]: s.get("displayValue") or s.get("value") for s in entry.get("stats") or [] if "name" in s}
    logos = team.get("logos") or []
    note = entry.get("note") or {}
    return {
        "rank": _number(stats.get("rank"), None),
        "team": team.get("displayName") or team.get("name") or "Unknown",
        "abbreviation": team.get("abbreviation"),
        "logo": logos[0].get("href") if logos else None,
        "played": _number(stats.get("gamesPlayed")),
        "wins": _number(stats.get("wins")),
        "draws": _number(stats.get("ties")),
        "losses": _number(stats.get("losses")),
        "goalsFor": _number(stats.get("pointsFor")),
        "goalsAgainst": _number(stats.get("pointsAgainst")),
        "goalDifference": stats.get("pointDifferential") or "0",
        "points": _number(stats.get("points")),
        "form": stats.get("overall"),
        "note": note.get("description"),
        "noteColor": note.get("color"),
    }


# Unranked rows sort after any real rank.
UNRANKED = 99


def parse_standings(data: dict, league_slug: str) -> dict[str, Any]:
    groups = data.get("children") or []
    entries = ((groups[0].get("standings") or {}).get("entries") or []) if groups else []
    table = sorted((_standing_row(e) for e in entries), key=lambda row: row["rank"] or UNRANKED)
    return {
        "source": "ESPN",
        "league": data.get("name") or league_slug,
        "season": (data.get("season") or {}).get("displayName"),
        "count": len(table),
        "table": table,
    }


def summary_statistics(boxscore: dict) -> dict[str, dict[str, str]] | None:
    result: dict[str, dict[str, str]] = {}
    for team in boxscore.get("teams") or []:
        stats = {
            s.get("label") or s.get("name"): s.get("displayValue")
            for s in team.get("statistics") or []
            if s.get("label") or s.get("name")
        }
        if stats:
            result[team.get("homeAway")] = stats
    return result or None


def summary_lineups(rosters: list[dict]) -> list[dict[str, Any]]:
    return [
        {
            "side": roster.get("homeAway"),
            "team": (roster.get("team") or {}).get("displayName"),
            "formation": roster.get("formation"),
            "players": [
                {
                    "name": (p.get("athlete") or {}).get("displayName"),
                    "jersey": p.get("jersey"),
                    "position": (p.get("position") or {}).get("abbreviation"),
                    "starter": bool(p.get("starter")),
                    "subbedIn": bool(p.get("subbedIn")),
                    "subbedOut": bool(p.get("subbedOut")),
                }
                for p in roster.get("roster") or []
            ],
        }
        for roster in rosters
    ]


def summary_key_events(key_events: list[dict]) -> list[dict[str, Any]]:
    events = []
    for event in key_events:
        participants = event.get("participants") or []
        events.append(
            {
                "clock": (event.get("clock") or {}).get("displayValue"),
                "text": event.get("text"),
                "type": (event.get("type") or {}).get("text"),
                "team": (event.get("team") or {}).get("displayName"),
                "player": (participants[0].get("athlete") or {}).get("displayName") if participants else None,
            }
        )
    return events


def enrich_with_summary(match: dict[str, Any], summary: dict) -> dict[str, Any]:
    """
    Overlay boxscore statistics, lineups and key events from the match
    summary endpoint onto a scoreboard match.
    """
    enriched = dict(match)
    if summary.get("boxscore"):
        statistics = summary_statistics(summary["boxscore"])
        if statistics:
            enriched["statistics"] = statistics
    if summary.get("rosters"):
        enriched["lineups"] = summary_lineups(summary["rosters"])
    if summary.get("keyEvents"):
        enriched["keyEvents"] = summary_key_events(summary["keyEvents"])
    return enriched
