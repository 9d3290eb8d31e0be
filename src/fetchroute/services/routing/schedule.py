"""Schedule synthesis for a computed tour.

Turns a visiting order into arrival/departure timestamps for every waypoint,
including the synthetic departure from and return to the starting point.

Travel time is estimated from the tour distance at a constant average speed
and split evenly across the legs, not in proportion to each leg's length.
The first appointment always keeps its own scheduled time.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ...models.domain import StartingPoint
from .errors import ErrorKind, RouteValidationError
from .models import Stop, Tour, Waypoint, WaypointType

DEFAULT_AVERAGE_SPEED_KMH = 30.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def estimate_travel_minutes(total_distance_km: float, average_speed_kmh: float) -> int:
    """Total travel time in whole minutes at a constant speed."""
    if average_speed_kmh <= 0:
        raise RouteValidationError(
            ErrorKind.INVALID_SPEED,
            f"Average speed must be positive, got {average_speed_kmh}.",
            field="average_speed_kmh",
        )
    # halves round up, never to even
    return math.floor(total_distance_km / average_speed_kmh * 60 + 0.5)


def _validate_stop(stop: Stop) -> None:
    if stop.scheduled_time is None:
        raise RouteValidationError(
            ErrorKind.MISSING_SCHEDULED_TIME,
            f"Stop '{stop.stop_id}' has no scheduled time.",
            appointment_id=stop.appointment_id or stop.stop_id,
            field="scheduled_time",
        )
    if stop.duration is None or stop.duration <= 0:
        raise RouteValidationError(
            ErrorKind.INVALID_DURATION,
            f"Stop '{stop.stop_id}' has an invalid duration: {stop.duration!r}.",
            appointment_id=stop.appointment_id or stop.stop_id,
            field="duration",
        )


def synthesize_schedule(
    tour: Tour,
    starting_point: StartingPoint,
    *,
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH,
    now: Optional[Callable[[], datetime]] = None,
) -> tuple[list[Waypoint], int]:
    """Attach arrival/departure estimates to ``tour``.

    Returns:
        The waypoint list (start, one per stop, end) and the estimated total
        travel time in minutes.

    Raises:
        RouteValidationError: a stop lacks a scheduled time or a positive
            duration, or the speed is not positive.
    """
    travel_minutes = estimate_travel_minutes(tour.total_distance_km, average_speed_kmh)

    if not tour.stops:
        current = (now or _utc_now)()
        return [
            Waypoint(WaypointType.START, arrival_time=None, departure_time=current, place=starting_point),
            Waypoint(WaypointType.END, arrival_time=current, departure_time=None, place=starting_point),
        ], travel_minutes

    for stop in tour.stops:
        _validate_stop(stop)

    leg_share = timedelta(minutes=travel_minutes / len(tour.stops))

    waypoints = [
        Waypoint(
            WaypointType.START,
            arrival_time=None,
            departure_time=tour.stops[0].scheduled_time - leg_share,
            place=starting_point,
        )
    ]

    previous_departure: Optional[datetime] = None
    for stop in tour.stops:
        if previous_departure is None:
            arrival = stop.scheduled_time
        else:
            arrival = previous_departure + leg_share
        departure = arrival + timedelta(minutes=stop.duration)
        waypoints.append(
            Waypoint(WaypointType.APPOINTMENT, arrival_time=arrival, departure_time=departure, stop=stop)
        )
        previous_departure = departure

    waypoints.append(
        Waypoint(
            WaypointType.END,
            arrival_time=previous_departure + leg_share,
            departure_time=None,
            place=starting_point,
        )
    )
    return waypoints, travel_minutes
