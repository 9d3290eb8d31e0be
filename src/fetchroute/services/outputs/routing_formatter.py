"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Any, Optional

from ...models.domain import Coordinate, StartingPoint
from ..routing.models import RouteResult, Stop, Waypoint


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _coordinate_to_json(coordinate: Optional[Coordinate]) -> Optional[dict]:
    if coordinate is None:
        return None
    return {"latitude": coordinate.latitude, "longitude": coordinate.longitude}


def starting_point_to_json(point: StartingPoint) -> dict:
    return {
        "name": point.name,
        "address": point.address,
        "coordinates": _coordinate_to_json(point.coordinates),
    }


def stop_to_json(stop: Stop) -> dict:
    return {
        "id": stop.stop_id,
        "appointment_id": stop.appointment_id,
        "client_id": stop.client_id,
        "client_name": stop.client_name,
        "pet_id": stop.pet_id,
        "service_type": stop.service_type,
        "address": stop.address,
        "coordinates": _coordinate_to_json(stop.coordinates),
        "time": _iso(stop.scheduled_time),
        "duration": stop.duration,
    }


def waypoint_to_json(waypoint: Waypoint) -> dict[str, Any]:
    if waypoint.stop is not None:
        payload = stop_to_json(waypoint.stop)
    elif waypoint.place is not None:
        payload = starting_point_to_json(waypoint.place)
    else:
        payload = {}
    payload.update(
        {
            "type": waypoint.type.value,
            "arrival_time": _iso(waypoint.arrival_time),
            "departure_time": _iso(waypoint.departure_time),
        }
    )
    return payload


def route_result_to_json(result: RouteResult) -> dict:
    return {
        "waypoints": [waypoint_to_json(waypoint) for waypoint in result.waypoints],
        "optimized_route": [stop_to_json(stop) for stop in result.optimized_route],
        "appointment_ids": list(result.appointment_ids),
        "total_distance_km": result.total_distance_km,
        "estimated_travel_time_min": result.estimated_travel_time_min,
        "start_point": starting_point_to_json(result.start_point),
        "end_point": starting_point_to_json(result.end_point),
    }


def route_result_to_csv(result: RouteResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "type",
        "appointment_id",
        "name",
        "address",
        "latitude",
        "longitude",
        "arrival_time",
        "departure_time",
        "duration",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for sequence, waypoint in enumerate(result.waypoints):
        stop = waypoint.stop
        place = waypoint.place
        coordinates = stop.coordinates if stop else (place.coordinates if place else None)
        writer.writerow(
            {
                "sequence": sequence,
                "type": waypoint.type.value,
                "appointment_id": stop.appointment_id if stop else "",
                "name": stop.client_name if stop else (place.name if place else ""),
                "address": stop.address if stop else (place.address if place else ""),
                "latitude": coordinates.latitude if coordinates else "",
                "longitude": coordinates.longitude if coordinates else "",
                "arrival_time": _iso(waypoint.arrival_time) or "",
                "departure_time": _iso(waypoint.departure_time) or "",
                "duration": stop.duration if stop else "",
            }
        )
    return buffer.getvalue()
