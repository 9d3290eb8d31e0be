"""Validation errors raised by the routing engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    MISSING_COORDINATES = "missing_coordinates"
    INVALID_COORDINATES = "invalid_coordinates"
    MISSING_SCHEDULED_TIME = "missing_scheduled_time"
    INVALID_DURATION = "invalid_duration"
    INVALID_SPEED = "invalid_speed"
    TOO_MANY_STOPS = "too_many_stops"
    NO_APPOINTMENTS = "no_appointments"


class RouteValidationError(ValueError):
    """Input cannot be turned into a complete route.

    Subclasses ``ValueError`` so API handlers treat it as a client error.
    ``appointment_id`` identifies the offending appointment or stop when one
    is involved; ``field`` names the missing or invalid attribute.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        appointment_id: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.appointment_id = appointment_id
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "appointment_id": self.appointment_id,
            "field": self.field,
        }
