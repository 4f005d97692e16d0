"""Tests for the Israel transit catalog, rail/bus parsing and /israel-transit routes."""

from datetime import datetime, timezone

import pytest

from core.http import UpstreamError
from transit import catalog, service


@pytest.mark.parametrize(
    "query, expected",
    [
        ("3700", "3700"),
        ("lod", "5000"),
        ("  Ben Gurion Airport ", "8600"),
        ("Jerusalem", "6500"),
        ("Atlantis", None),
        ("", None),
    ],
)
def test_find_station_id(query, expected):
    assert catalog.find_station_id(query) == expected


def test_station_name_falls_back_to_id():
    assert catalog.station_name(3700) == "Tel Aviv-Savidor Center"
    assert catalog.station_name("1234") == "1234"


def test_operator_name():
    assert catalog.operator_name(3) == "Egged"
    assert catalog.operator_name("5", "דן") == "Dan"
    assert catalog.operator_name(999, "מפעיל") == "מפעיל"
    assert catalog.operator_name(None, "מפעיל") == "מפעיל"


def test_israel_time_crosses_midnight():
    now = datetime(2024, 1, 1, 22, 30, tzinfo=timezone.utc)
    assert service.today_in_israel(now) == "2024-01-02"
    assert service.hour_in_israel(now) == "00:30"


def _travel(*legs):
    return {
        "trains": [
            {
                "trainNumber": number,
                "orignStation": origin,
                "destinationStation": destination,
                "departureTime": dep,
                "arrivalTime": arr,
                "originPlatform": 1,
                "destPlatform": 2,
                "stopStations": [],
            }
            for number, origin, destination, dep, arr in legs
        ]
    }


def test_parse_train_route_with_change():
    route = service.parse_train_route(
        _travel(
            (101, 3700, 5000, "08:00", "08:20"),
            (202, 5000, 6500, "08:30", "09:10"),
        )
    )
    assert route["departureTime"] == "08:00"
    assert route["arrivalTime"] == "09:10"
    assert route["changes"] == 1
    assert route["trains"][0]["originStation"] == "Tel Aviv-Savidor Center"
    assert route["trains"][1]["destinationStationId"] == "6500"
    assert route["trains"][1]["destinationPlatform"] == 2


def test_parse_train_route_without_trains():
    assert service.parse_train_route({}) == {
        "departureTime": None,
        "arrivalTime": None,
        "changes": 0,
        "trains": [],
    }


def test_visible_travels_window():
    result = {"travels": list("abcdef"), "startFromIndex": 2, "numOfResultsToShow": 3}
    assert service.visible_travels(result) == ["c", "d", "e"]
    assert service.visible_travels({"travels": ["a", "b"]}) == ["a", "b"]


@pytest.mark.asyncio
async def test_search_trains_posts_timetable_query(monkeypatch):
    monkeypatch.setenv("RAIL_API_KEY", "test-key")
    seen = {}

    async def fake_post_json(url, payload, **kwargs):
        seen.update(url=url, payload=payload, headers=kwargs["headers"])
        return {
            "result": {
                "travels": [_travel((101, 3700, 6500, "08:00", "08:40"))],
                "startFromIndex": 0,
                "numOfResultsToShow": 1,
            }
        }

    monkeypatch.setattr(service.http, "post_json", fake_post_json)

    result = await service.search_trains("3700", "6500", date="2026-02-12", hour="08:00")
    assert seen["url"].endswith("/timetable/searchTrain")
    assert seen["payload"]["fromStation"] == "3700"
    assert seen["payload"]["hour"] == "08:00"
    assert seen["headers"]["ocp-apim-subscription-key"] == "test-key"
    assert result["count"] == 1
    assert result["to"] == {"id": "6500", "name": "Jerusalem-Biblical Zoo"}
    assert result["routes"][0]["changes"] == 0


@pytest.mark.asyncio
async def test_search_trains_without_result(monkeypatch):
    async def fake_post_json(url, payload, **kwargs):
        return {"result": None}

    monkeypatch.setattr(service.http, "post_json", fake_post_json)

    result = await service.search_trains("3700", "6500", date="2026-02-12", hour="08:00")
    assert result == {"routes": [], "count": 0, "message": "No results from Israel Rail."}


@pytest.mark.asyncio
async def test_bus_rides_maps_nested_records(monkeypatch):
    seen = {}

    async def fake_get_json(url, **kwargs):
        seen.update(url=url, params=kwargs["params"])
        return [
            {
                "id": 1,
                "journey_ref": "j1",
                "siri_route": {"line_ref": 7, "operator_ref": 3},
                "gtfs_ride": None,
                "gtfs_route": {"route_short_name": "480", "agency_name": "אגד"},
            }
        ]

    monkeypatch.setattr(service.http, "get_json", fake_get_json)

    rides = await service.bus_rides("480", date="2026-02-12", operator="3", limit=5)
    assert seen["url"].endswith("/siri_rides/list")
    assert seen["params"]["gtfs_route__operator_refs"] == "3"
    assert rides[0]["gtfsRide"] is None
    assert rides[0]["siriRoute"] == {"lineRef": 7, "operatorRef": 3}
    assert rides[0]["gtfsRoute"]["agencyName"] == "Egged"
    assert rides[0]["gtfsRoute"]["agencyNameHebrew"] == "אגד"


def test_stations_route(client):
    body = client.get("/israel-transit/trains/stations").json()
    assert body["count"] == len(catalog.TRAIN_STATIONS)
    assert {"id": "5000", "name": "Lod"} in body["stations"]


def test_routes_route_validation(client):
    assert client.get("/israel-transit/trains/routes?from=Lod").status_code == 400

    resp = client.get("/israel-transit/trains/routes?from=Lod&to=Atlantis")
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == 'Station not found: "Atlantis"'


def test_routes_route_resolves_station_names(client, monkeypatch):
    seen = {}

    async def fake_search(from_id, to_id, *, date, hour):
        seen.update(from_id=from_id, to_id=to_id, date=date, hour=hour)
        return {"count": 0, "routes": []}

    monkeypatch.setattr(service, "search_trains", fake_search)

    resp = client.get("/israel-transit/trains/routes?from=lod&to=Jerusalem&date=2026-02-12&hour=07:30")
    assert resp.status_code == 200
    assert seen == {"from_id": "5000", "to_id": "6500", "date": "2026-02-12", "hour": "07:30"}


def test_routes_route_upstream_failure(client, monkeypatch):
    async def fake_search(from_id, to_id, *, date, hour):
        raise UpstreamError("timeout", url=service.RAIL_API_BASE)

    monkeypatch.setattr(service, "search_trains", fake_search)

    resp = client.get("/israel-transit/trains/routes?from=lod&to=Jerusalem")
    assert resp.status_code == 502
    assert resp.json()["detail"]["error"] == "Failed to fetch train schedule from Israel Rail"


def test_bus_routes_requires_line(client):
    resp = client.get("/israel-transit/buses/routes")
    assert resp.status_code == 400
    assert resp.json()["detail"]["example"] == "/israel-transit/buses/routes?line=480"


def test_bus_routes_defaults(client, monkeypatch):
    seen = {}

    async def fake_routes(line, *, date, operator, limit):
        seen.update(line=line, date=date, operator=operator, limit=limit)
        return [{"id": 1}]

    monkeypatch.setattr(service, "bus_routes", fake_routes)
    monkeypatch.setattr(service, "today_in_israel", lambda: "2026-02-12")

    body = client.get("/israel-transit/buses/routes?line=480").json()
    assert seen == {"line": "480", "date": "2026-02-12", "operator": None, "limit": 50}
    assert body["count"] == 1
    assert body["source"] == service.BUS_SOURCE
