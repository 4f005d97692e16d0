"""
Israel transit service: Israel Rail timetables and Open Bus Stride data.

Dates and hours default to "now" in Israel time, whatever the server's zone.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from core import config, http

from .catalog import TRAIN_STATIONS, operator_name, station_name

RAIL_SOURCE = "Israel Rail (rail.co.il)"
BUS_SOURCE = "Open Bus Stride API"

RAIL_API_BASE = "https://rail-api.rail.co.il/rjpa/api/v1"
BUS_API_BASE = "https://open-bus-stride-api.hasadna.org.il"

ISRAEL_TZ = ZoneInfo("Asia/Jerusalem")

RAIL_TIMEOUT_S = 15.0
BUS_TIMEOUT_S = 10.0
RIDES_TIMEOUT_S = 15.0

DEFAULT_BUS_LIMIT = 50


def _israel_now(now: datetime | None = None) -> datetime:
    return (now or datetime.now(tz=ISRAEL_TZ)).astimezone(ISRAEL_TZ)


def today_in_israel(now: datetime | None = None) -> str:
    return _israel_now(now).strftime("%Y-%m-%d")


def hour_in_israel(now: datetime | None = None) -> str:
    return _israel_now(now).strftime("%H:%M")


def rail_headers() -> dict[str, str]:
    return {
        "User-Agent": http.BROWSER_USER_AGENT,
        "ocp-apim-subscription-key": config.rail_api_key(),
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def _stop(stop: dict) -> dict[str, Any]:
    return {
        "station": station_name(stop.get("stationId")),
        "stationId": str(stop.get("stationId")),
        "arrivalTime": stop.get("arrivalTime"),
        "departureTime": stop.get("departureTime"),
        "platform": stop.get("platform"),
    }


def _train(train: dict) -> dict[str, Any]:
    # "orignStation" is the rail API's own spelling.
    origin = str(train.get("orignStation"))
    destination = str(train.get("destinationStation"))
    return {
        "trainNumber": train.get("trainNumber"),
        "originStation": station_name(origin),
        "originStationId": origin,
        "destinationStation": station_name(destination),
        "destinationStationId": destination,
        "departureTime": train.get("departureTime"),
        "arrivalTime": train.get("arrivalTime"),
        "originPlatform": train.get("originPlatform"),
        "destinationPlatform": train.get("destPlatform"),
        "stopStations": [_stop(stop) for stop in train.get("stopStations") or []],
    }


def parse_train_route(travel: dict) -> dict[str, Any]:
    """
    One itinerary: its legs plus overall departure, arrival and number of changes.
    """
    trains = [_train(t) for t in travel.get("trains") or []]
    return {
        "departureTime": trains[0]["departureTime"] if trains else None,
        "arrivalTime": trains[-1]["arrivalTime"] if trains else None,
        "changes": max(0, len(trains) - 1),
        "trains": trains,
    }


def visible_travels(result: dict) -> list[dict]:
    """
    The window of travels the rail site itself would display.
    """
    travels = result.get("travels") or []
    size = result.get("numOfResultsToShow") or len(travels)
    start = result.get("startFromIndex") or 0
    return travels[start : start + size]


async def search_trains(from_id: str, to_id: str, *, date: str, hour: str) -> dict[str, Any]:
    payload = {
        "fromStation": from_id,
        "toStation": to_id,
        "date": date,
        "hour": hour,
        "scheduleType": "ByDeparture",
        "systemType": "2",
        "languageId": "English",
    }
    data = await http.post_json(
        f"{RAIL_API_BASE}/timetable/searchTrain",
        payload,
        headers=rail_headers(),
        timeout_s=RAIL_TIMEOUT_S,
    )
    result = (data or {}).get("result")
    if not result:
        return {"routes": [], "count": 0, "message": "No results from Israel Rail."}

    routes = [parse_train_route(travel) for travel in visible_travels(result)]
    return {
        "source": RAIL_SOURCE,
        "date": date,
        "from": {"id": from_id, "name": TRAIN_STATIONS[from_id]},
        "to": {"id": to_id, "name": TRAIN_STATIONS[to_id]},
        "count": len(routes),
        "routes": routes,
    }


async def bus_agencies() -> list[dict[str, Any]]:
    data = await http.get_json(f"{BUS_API_BASE}/gtfs_agencies/list", params={"limit": 100}, timeout_s=BUS_TIMEOUT_S)
    return [
        {
            "operatorRef": a.get("operator_ref"),
            "nameHebrew": a.get("agency_name"),
            "name": operator_name(a.get("operator_ref"), a.get("agency_name")),
            "url": a.get("agency_url") or None,
        }
        for a in data or []
    ]


async def bus_routes(line: str, *, date: str, operator: str | None, limit: int) -> list[dict[str, Any]]:
    params: dict[str, Any] = {
        "route_short_name": line,
        "date_from": date,
        "date_to": date,
        "limit": limit,
        "order_by": "date desc",
    }
    if operator:
        params["operator_ref"] = operator

    data = await http.get_json(f"{BUS_API_BASE}/gtfs_routes/list", params=params, timeout_s=BUS_TIMEOUT_S)
    return [
        {
            "id": r.get("id"),
            "date": r.get("date"),
            "lineRef": r.get("line_ref"),
            "operatorRef": r.get("operator_ref"),
            "routeShortName": r.get("route_short_name"),
            "routeLongName": r.get("route_long_name"),
            "routeDirection": r.get("route_direction"),
            "routeAlternative": r.get("route_alternative"),
            "agencyName": operator_name(r.get("operator_ref"), r.get("agency_name")),
            "agencyNameHebrew": r.get("agency_name"),
            "routeType": r.get("route_type"),
        }
        for r in data or []
    ]


def _ride(ride: dict) -> dict[str, Any]:
    siri_route = ride.get("siri_route")
    gtfs_ride = ride.get("gtfs_ride")
    gtfs_route = ride.get("gtfs_route")
    return {
        "siriRideId": ride.get("id"),
        "journeyRef": ride.get("journey_ref"),
        "scheduledStartTime": ride.get("scheduled_start_time"),
        "vehicleRef": ride.get("vehicle_ref"),
        "siriRoute": (
            {"lineRef": siri_route.get("line_ref"), "operatorRef": siri_route.get("operator_ref")}
            if siri_route
            else None
        ),
        "gtfsRide": (
            {
                "gtfsRouteId": gtfs_ride.get("gtfs_route_id"),
                "startTime": gtfs_ride.get("start_time"),
                "journeyRef": gtfs_ride.get("journey_ref"),
            }
            if gtfs_ride
            else None
        ),
        "gtfsRoute": (
            {
                "routeShortName": gtfs_route.get("route_short_name"),
                "routeLongName": gtfs_route.get("route_long_name"),
                "agencyName": operator_name(
                    (siri_route or {}).get("operator_ref"), gtfs_route.get("agency_name")
                ),
                "agencyNameHebrew": gtfs_route.get("agency_name"),
                "routeDirection": gtfs_route.get("route_direction"),
            }
            if gtfs_route
            else None
        ),
    }


async def bus_rides(line: str, *, date: str, operator: str | None, limit: int) -> list[dict[str, Any]]:
    params: dict[str, Any] = {
        "gtfs_route__route_short_name": line,
        "gtfs_route__date_from": date,
        "gtfs_route__date_to": date,
        "limit": limit,
        "order_by": "gtfs_ride__start_time_from asc",
    }
    if operator:
        params["gtfs_route__operator_refs"] = operator

    data = await http.get_json(f"{BUS_API_BASE}/siri_rides/list", params=params, timeout_s=RIDES_TIMEOUT_S)
    return [_ride(r) for r in data or []]
