"""
Israel transit endpoints: trains (Israel Rail) and buses (Open Bus Stride).
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core import errors
from core.http import UpstreamError
from core.pagination import clamp

from . import catalog, service

router = APIRouter()

STATIONS_HINT = "Use /israel-transit/trains/stations to see all valid stations."


@router.get("/trains/stations")
async def train_stations() -> dict:
    stations = [{"id": station_id, "name": name} for station_id, name in catalog.TRAIN_STATIONS.items()]
    return {"count": len(stations), "stations": stations}


@router.get("/trains/routes")
async def train_routes(
    from_: str | None = Query(default=None, alias="from"),
    to: str | None = Query(default=None),
    date: str | None = Query(default=None),
    hour: str | None = Query(default=None),
) -> dict:
    """
    Train itineraries between two stations (ids or name fragments).
    `date` is YYYY-MM-DD and `hour` HH:MM, both defaulting to now in Israel.
    """
    if not from_ or not to:
        raise errors.bad_request(
            "Missing required query params: from, to",
            example="/israel-transit/trains/routes?from=Tel Aviv&to=Jerusalem&date=2026-02-12&hour=08:00",
        )

    from_id = catalog.find_station_id(from_)
    if from_id is None:
        raise errors.not_found(f'Station not found: "{from_}"', hint=STATIONS_HINT)
    to_id = catalog.find_station_id(to)
    if to_id is None:
        raise errors.not_found(f'Station not found: "{to}"', hint=STATIONS_HINT)

    try:
        return await service.search_trains(
            from_id,
            to_id,
            date=date or service.today_in_israel(),
            hour=hour or service.hour_in_israel(),
        )
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch train schedule from Israel Rail") from exc


@router.get("/buses/agencies")
async def bus_agencies() -> dict:
    try:
        agencies = await service.bus_agencies()
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch bus agencies") from exc
    return {"source": service.BUS_SOURCE, "count": len(agencies), "agencies": agencies}


@router.get("/buses/routes")
async def bus_routes(
    line: str | None = Query(default=None),
    operator: str | None = Query(default=None),
    date: str | None = Query(default=None),
    limit: int | None = Query(default=None),
) -> dict:
    if not line:
        raise errors.bad_request(
            "Missing required query param: line",
            example="/israel-transit/buses/routes?line=480",
        )
    date = date or service.today_in_israel()
    limit = clamp(limit, default=service.DEFAULT_BUS_LIMIT, minimum=1)

    try:
        routes = await service.bus_routes(line, date=date, operator=operator, limit=limit)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch bus routes") from exc

    return {"source": service.BUS_SOURCE, "line": line, "date": date, "count": len(routes), "routes": routes}


@router.get("/buses/rides")
async def bus_rides(
    line: str | None = Query(default=None),
    operator: str | None = Query(default=None),
    date: str | None = Query(default=None),
    limit: int | None = Query(default=None),
) -> dict:
    """
    Scheduled and real-time (SIRI) rides for a bus line on one day.
    """
    if not line:
        raise errors.bad_request(
            "Missing required query param: line",
            example="/israel-transit/buses/rides?line=480",
        )
    date = date or service.today_in_israel()
    limit = clamp(limit, default=service.DEFAULT_BUS_LIMIT, minimum=1)

    try:
        rides = await service.bus_rides(line, date=date, operator=operator, limit=limit)
    except UpstreamError as exc:
        raise errors.from_upstream(exc, error="Failed to fetch bus rides") from exc

    return {"source": service.BUS_SOURCE, "line": line, "date": date, "count": len(rides), "rides": rides}
