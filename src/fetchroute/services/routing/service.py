"""Routing orchestration service."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

from ...config import settings
from ...models.domain import Appointment, Coordinate, StartingPoint
from ...persistence.filesystem import FileStorage
from ..outputs.routing_formatter import route_result_to_csv, route_result_to_json
from .base import AppointmentProvider, RouteStore
from .errors import ErrorKind, RouteValidationError
from .models import DailyRoute, RouteResult, Stop
from .schedule import synthesize_schedule
from .tour import build_tour

ADDRESS_NOT_AVAILABLE = "Address not available"


def default_starting_point() -> StartingPoint:
    """Home/office location configured for the provider."""
    return StartingPoint(
        name=settings.default_start_name,
        address=settings.default_start_address,
        coordinates=Coordinate(
            latitude=settings.default_start_latitude,
            longitude=settings.default_start_longitude,
        ),
    )


def _appointment_label(appointment: Appointment) -> str:
    if appointment.appointment_id:
        return f"appointment '{appointment.appointment_id}'"
    if appointment.date is not None:
        return f"appointment at {appointment.date.isoformat()}"
    return "appointment with no id or date"


def _check_coordinate(
    coordinate: Optional[Coordinate],
    *,
    label: str,
    appointment_id: Optional[str],
    field: str,
) -> Coordinate:
    if coordinate is None:
        raise RouteValidationError(
            ErrorKind.MISSING_COORDINATES,
            f"Missing coordinates for {label}.",
            appointment_id=appointment_id,
            field=field,
        )
    if not coordinate.is_valid():
        raise RouteValidationError(
            ErrorKind.INVALID_COORDINATES,
            f"Coordinates out of range for {label}: "
            f"({coordinate.latitude}, {coordinate.longitude}).",
            appointment_id=appointment_id,
            field=field,
        )
    return coordinate


def build_stops(
    appointments: Iterable[Appointment],
    *,
    default_duration: Optional[int] = None,
) -> list[Stop]:
    """Adapt appointment records (with nested clients) into routing stops.

    Raises:
        RouteValidationError: an appointment's client has no geocoded address.
    """
    fallback_duration = default_duration if default_duration is not None else settings.default_duration_minutes
    stops: list[Stop] = []
    for index, appointment in enumerate(appointments, start=1):
        client = appointment.client
        address = client.address if client else None
        coordinates = _check_coordinate(
            address.coordinates if address else None,
            label=_appointment_label(appointment),
            appointment_id=appointment.appointment_id,
            field="client.address.coordinates",
        )
        stops.append(
            Stop(
                stop_id=appointment.appointment_id or f"stop-{index}",
                appointment_id=appointment.appointment_id,
                client_id=appointment.client_id or (client.client_id if client else None),
                client_name=client.name if client else "",
                pet_id=appointment.pet_id,
                service_type=appointment.service_type,
                address=(address.formatted if address and address.formatted else ADDRESS_NOT_AVAILABLE),
                coordinates=coordinates,
                scheduled_time=appointment.date,
                duration=appointment.duration if appointment.duration is not None else fallback_duration,
            )
        )
    return stops


def optimize_route(
    appointments: Iterable[Appointment],
    starting_point: StartingPoint,
    *,
    average_speed_kmh: Optional[float] = None,
    max_stops: Optional[int] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> RouteResult:
    """Compute the day's visiting order and schedule.

    The tour starts and ends at ``starting_point``. Either a complete
    ``RouteResult`` is returned or ``RouteValidationError`` is raised.
    """
    start = _check_coordinate(
        starting_point.coordinates if starting_point else None,
        label="starting point",
        appointment_id=None,
        field="starting_point.coordinates",
    )

    appointment_list = list(appointments)
    limit = max_stops if max_stops is not None else settings.max_stops_per_route
    if limit is not None and len(appointment_list) > limit:
        raise RouteValidationError(
            ErrorKind.TOO_MANY_STOPS,
            f"{len(appointment_list)} appointments exceed the limit of {limit} stops per route.",
            field="appointments",
        )

    stops = build_stops(appointment_list)
    tour = build_tour(start, stops)
    speed = average_speed_kmh if average_speed_kmh is not None else settings.average_speed_kmh
    waypoints, travel_minutes = synthesize_schedule(
        tour,
        starting_point,
        average_speed_kmh=speed,
        now=now,
    )

    logging.info(
        f"Optimized route over {len(tour.stops)} stops: "
        f"{tour.total_distance_km:.3f} km, ~{travel_minutes} min travel"
    )

    return RouteResult(
        waypoints=tuple(waypoints),
        optimized_route=tour.stops,
        appointment_ids=tuple(stop.appointment_id for stop in tour.stops),
        total_distance_km=tour.total_distance_km,
        estimated_travel_time_min=travel_minutes,
        start_point=starting_point,
        end_point=starting_point,
    )


def plan_daily_route(
    user_id: str,
    route_date: date,
    *,
    provider: AppointmentProvider,
    store: RouteStore,
    starting_point: Optional[StartingPoint] = None,
    storage: Optional[FileStorage] = None,
    average_speed_kmh: Optional[float] = None,
) -> DailyRoute:
    """Build and store the route for one user's scheduled appointments on a day.

    A failure to store the route is logged and leaves ``route_id`` unset, and a
    failure to write run outputs leaves ``run_directory`` unset. The computed
    route is still returned in both cases.
    """
    appointments = list(provider.get_appointments_for_routing(user_id, route_date))
    logging.info(f"Loaded {len(appointments)} appointments for user '{user_id}' on {route_date.isoformat()}")
    if not appointments:
        raise RouteValidationError(
            ErrorKind.NO_APPOINTMENTS,
            f"There are no appointments scheduled on {route_date.isoformat()} to create a route.",
            field="appointments",
        )

    result = optimize_route(
        appointments,
        starting_point or default_starting_point(),
        average_speed_kmh=average_speed_kmh,
    )

    route_id: Optional[str] = None
    try:
        route_id = store.create_route(user_id, route_date, result)
    except Exception as exc:
        logging.error(f"Failed to save route for user '{user_id}' on {route_date.isoformat()}: {exc}")

    run_directory = None
    if storage is not None:
        try:
            run_directory = storage.save_route(
                f"route_{user_id}_{route_date.isoformat()}",
                route_result_to_json(result),
                route_result_to_csv(result),
            )
        except OSError as exc:
            logging.error(f"Failed to write route outputs for user '{user_id}' on {route_date.isoformat()}: {exc}")

    return DailyRoute(
        user_id=user_id,
        route_date=route_date,
        result=result,
        route_id=route_id,
        run_directory=run_directory,
    )


def get_route_for_date(user_id: str, route_date: date, *, store: RouteStore) -> Optional[dict[str, Any]]:
    return store.get_route_by_date(user_id, route_date)
