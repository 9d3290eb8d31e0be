"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from ...models.domain import Coordinate, StartingPoint


@dataclass(frozen=True, slots=True)
class Stop:
    stop_id: str
    appointment_id: Optional[str]
    client_id: Optional[str]
    client_name: str
    pet_id: Optional[str]
    service_type: Optional[str]
    address: str
    coordinates: Coordinate
    scheduled_time: Optional[datetime]
    duration: Optional[int] = 60


@dataclass(frozen=True, slots=True)
class Tour:
    stops: tuple[Stop, ...]
    total_distance_km: float


class WaypointType(str, Enum):
    START = "start"
    APPOINTMENT = "appointment"
    END = "end"


@dataclass(frozen=True, slots=True)
class Waypoint:
    type: WaypointType
    arrival_time: Optional[datetime]
    departure_time: Optional[datetime]
    stop: Optional[Stop] = None
    place: Optional[StartingPoint] = None


@dataclass(frozen=True, slots=True)
class RouteResult:
    waypoints: tuple[Waypoint, ...]
    optimized_route: tuple[Stop, ...]
    appointment_ids: tuple[Optional[str], ...]
    total_distance_km: float
    estimated_travel_time_min: int
    start_point: StartingPoint
    end_point: StartingPoint


@dataclass(frozen=True, slots=True)
class DailyRoute:
    """A planned day: the computed route plus where it was stored."""

    user_id: str
    route_date: date
    result: RouteResult
    route_id: Optional[str] = None
    run_directory: Optional[Path] = None
