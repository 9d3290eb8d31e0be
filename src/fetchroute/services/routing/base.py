"""Collaborator contracts consumed by the routing service."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol, Sequence

from ...models.domain import Appointment
from .models import RouteResult


class AppointmentProvider(Protocol):
    """Source of a user's scheduled appointments, joined with client records."""

    def get_appointments_for_routing(self, user_id: str, route_date: date) -> Sequence[Appointment]:
        ...


class RouteStore(Protocol):
    """Persistence for computed routes, retrievable by date."""

    def create_route(self, user_id: str, route_date: date, result: RouteResult) -> Optional[str]:
        ...

    def get_route_by_date(self, user_id: str, route_date: date) -> Optional[dict[str, Any]]:
        ...

    def get_routes(self, user_id: str) -> list[dict[str, Any]]:
        ...

    def get_route(self, route_id: str) -> Optional[dict[str, Any]]:
        ...

    def delete_route(self, route_id: str) -> bool:
        ...
