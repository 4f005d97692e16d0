"""Tests for ESPN parsing, the soccer service and /soccer routes."""

import pytest

from core.http import UpstreamError
from soccer import catalog, parsing, service

PREMIER = catalog.find_league("eng.1")


def _competitor(side, team_id, name, score, **extra):
    return {
        "homeAway": side,
        "score": score,
        "team": {"id": team_id, "displayName": name, "abbreviation": name[:3].upper(), "color": "ff0000"},
        **extra,
    }


def _event(event_id="401", status="STATUS_FULL_TIME", detail="FT", **competition):
    return {
        "id": event_id,
        "date": "2024-05-19T15:00Z",
        "competitions": [
            {
                "competitors": [
                    _competitor("home", "1", "Arsenal", "2"),
                    _competitor("away", "2", "Everton", "1"),
                ],
                "status": {"type": {"name": status, "shortDetail": detail}, "displayClock": "90'"},
                **competition,
            }
        ],
    }


@pytest.mark.parametrize(
    "name, detail, expected",
    [
        ("STATUS_FULL_TIME", "FT", "FT"),
        ("STATUS_HALFTIME", "HT", "HT"),
        ("STATUS_FIRST_HALF", "34'", "34'"),
        ("STATUS_SECOND_HALF", "", "Live"),
        ("STATUS_END_OF_PENALTIES", "", "PEN"),
        ("STATUS_WEIRD", "", "STATUS_WEIRD"),
        (None, "", "Unknown"),
    ],
)
def test_map_status(name, detail, expected):
    assert parsing.map_status({"name": name}, detail) == expected


def test_kickoff_time():
    assert parsing.kickoff_time("2024-05-19T15:00Z") == "15:00"
    assert parsing.kickoff_time("garbage") is None
    assert parsing.kickoff_time(None) is None


def test_parse_event_compact_record():
    match = parsing.parse_event(_event(), PREMIER)
    assert match["league"] == "English Premier League"
    assert match["home"] == "Arsenal"
    assert match["score"] == "2 - 1"
    assert match["homeColor"] == "#ff0000"
    assert match["time"] == "15:00"
    assert match["status"] == "FT"
    assert "goals" not in match


def test_parse_event_full_adds_goals_and_cards():
    details = [
        {
            "scoringPlay": True,
            "penaltyKick": True,
            "clock": {"displayValue": "12'"},
            "team": {"id": "1"},
            "athletesInvolved": [{"displayName": "Saka"}],
        },
        {
            "redCard": True,
            "clock": {"displayValue": "70'"},
            "team": {"id": "2"},
            "athletesInvolved": [{"displayName": "Tarkowski"}],
        },
    ]
    match = parsing.parse_event(_event(details=details), PREMIER, full=True)
    assert match["goals"] == [{"minute": "12'", "player": "Saka", "side": "home", "ownGoal": False, "penalty": True}]
    assert match["cards"] == [{"minute": "70'", "player": "Tarkowski", "side": "away", "type": "red"}]
    assert match["statistics"] is None


def test_parse_scoreboard_skips_incomplete_events():
    data = {"events": [_event(), {"id": "402", "competitions": []}, {"id": "403"}]}
    assert [m["id"] for m in parsing.parse_scoreboard(data, PREMIER)] == ["401"]


def _entry(name, rank, points):
    stats = [{"name": "points", "value": points}, {"name": "gamesPlayed", "value": 38}]
    if rank is not None:
        stats.append({"name": "rank", "value": rank})
    return {"team": {"displayName": name}, "stats": stats}


def test_parse_standings_sorts_by_rank():
    data = {
        "name": "Premier League",
        "season": {"displayName": "2023-24"},
        "children": [
            {"standings": {"entries": [_entry("Everton", None, 40), _entry("Arsenal", 2, 89), _entry("City", 1, 91)]}}
        ],
    }
    result = parsing.parse_standings(data, "eng.1")
    assert [row["team"] for row in result["table"]] == ["City", "Arsenal", "Everton"]
    assert result["table"][0]["points"] == 91
    assert result["table"][2]["rank"] is None
    assert result["season"] == "2023-24"
    assert result["count"] == 3


def test_parse_standings_without_groups():
    assert parsing.parse_standings({}, "eng.1")["league"] == "eng.1"


def test_enrich_with_summary():
    match = {"id": "401", "statistics": None}
    summary = {
        "boxscore": {
            "teams": [{"homeAway": "home", "statistics": [{"label": "Possession", "displayValue": "61%"}]}]
        },
        "rosters": [
            {
                "homeAway": "home",
                "team": {"displayName": "Arsenal"},
                "formation": "4-3-3",
                "roster": [{"athlete": {"displayName": "Raya"}, "jersey": "22", "starter": True}],
            }
        ],
        "keyEvents": [{"clock": {"displayValue": "12'"}, "text": "Goal!", "type": {"text": "Goal"}}],
    }
    enriched = parsing.enrich_with_summary(match, summary)
    assert enriched["statistics"] == {"home": {"Possession": "61%"}}
    assert enriched["lineups"][0]["players"][0]["starter"] is True
    assert enriched["keyEvents"][0]["player"] is None
    assert match["statistics"] is None


def test_compact_date_to_iso():
    assert service.compact_date_to_iso("20240519") == "2024-05-19"


@pytest.mark.asyncio
async def test_fetch_league_failure_is_empty(monkeypatch):
    async def broken(url, **kwargs):
        raise UpstreamError("down", url=url, status_code=503)

    monkeypatch.setattr(service.http, "get_json", broken)
    assert await service.fetch_league(PREMIER) == []


@pytest.mark.asyncio
async def test_today_queries_every_league_once(monkeypatch):
    calls = []

    async def fake_fetch_league(league, date=None, *, full=False):
        calls.append(league.slug)
        return [{"id": league.slug}] if league.slug == "eng.1" else []

    monkeypatch.setattr(service, "fetch_league", fake_fetch_league)

    first = await service.today()
    second = await service.today()
    assert first is second
    assert len(calls) == len(catalog.LEAGUES)
    assert first["count"] == 1


@pytest.mark.asyncio
async def test_match_detail_summary_failure_with_match(monkeypatch):
    async def broken(url, **kwargs):
        raise UpstreamError("down", url=url, status_code=503)

    async def fake_fetch_league(league, date=None, *, full=False):
        return [{"id": "401", "home": "Arsenal"}]

    monkeypatch.setattr(service.http, "get_json", broken)
    monkeypatch.setattr(service, "fetch_league", fake_fetch_league)

    assert await service.match_detail(PREMIER, "401") == {"id": "401", "home": "Arsenal"}
    with pytest.raises(UpstreamError):
        await service.match_detail(PREMIER, "999")


@pytest.mark.asyncio
async def test_match_detail_missing_match_is_none(monkeypatch):
    async def fake_get_json(url, **kwargs):
        return {}

    async def fake_fetch_league(league, date=None, *, full=False):
        return []

    monkeypatch.setattr(service.http, "get_json", fake_get_json)
    monkeypatch.setattr(service, "fetch_league", fake_fetch_league)

    assert await service.match_detail(PREMIER, "401") is None


def test_leagues_route(client):
    body = client.get("/soccer/leagues").json()
    assert body["count"] == len(catalog.LEAGUES)
    assert body["leagues"][0] == {"slug": "eng.1", "name": "English Premier League", "country": "England"}


def test_unknown_league_is_404(client):
    resp = client.get("/soccer/league/xyz.9")
    assert resp.status_code == 404
    assert resp.json()["detail"]["hint"] == "Use /soccer/leagues to list all available leagues."


def test_league_route_rejects_bad_date(client):
    assert client.get("/soccer/league/eng.1?date=2024-05-19").status_code == 400


def test_league_route_passes_date(client, monkeypatch):
    seen = {}

    async def fake_fetch_league(league, date=None, *, full=False):
        seen.update(slug=league.slug, date=date, full=full)
        return []

    monkeypatch.setattr(service, "fetch_league", fake_fetch_league)

    body = client.get("/soccer/league/eng.1?date=20240519").json()
    assert seen == {"slug": "eng.1", "date": "20240519", "full": True}
    assert body["dateISO"] == "2024-05-19"


def test_match_route_not_found(client, monkeypatch):
    async def fake_detail(league, match_id):
        return None

    monkeypatch.setattr(service, "match_detail", fake_detail)

    resp = client.get("/soccer/match/eng.1/401")
    assert resp.status_code == 404
    assert resp.json()["detail"] == {"error": "Match not found: 401"}


def test_match_route_upstream_failure_is_500(client, monkeypatch):
    async def fake_detail(league, match_id):
        raise UpstreamError("down", url="x", status_code=503)

    monkeypatch.setattr(service, "match_detail", fake_detail)

    resp = client.get("/soccer/match/eng.1/401")
    assert resp.status_code == 500
    assert resp.json()["detail"]["error"] == "Failed to fetch match details"


def test_standings_route_upstream_failure_is_500(client, monkeypatch):
    async def broken(url, **kwargs):
        raise UpstreamError("down", url=url, status_code=503)

    monkeypatch.setattr(service.http, "get_json", broken)

    resp = client.get("/soccer/standings/eng.1")
    assert resp.status_code == 500
    assert resp.json()["detail"]["error"] == "Failed to fetch standings"
