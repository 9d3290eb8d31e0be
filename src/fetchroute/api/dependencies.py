"""FastAPI dependency providers for routing collaborators."""

from __future__ import annotations

from functools import lru_cache
from typing import Callable

from ..data.appointments_repository import SupabaseAppointmentProvider
from ..persistence.database import SupabaseRouteStore
from ..persistence.filesystem import FileStorage
from ..services.routing.base import AppointmentProvider, RouteStore


@lru_cache(maxsize=1)
def get_appointment_provider() -> AppointmentProvider:
    return SupabaseAppointmentProvider()


@lru_cache(maxsize=1)
def get_route_store() -> RouteStore:
    return SupabaseRouteStore()


def get_storage_factory() -> Callable[[], FileStorage]:
    """Run-output storage is created lazily, only when a request asks to persist."""
    return FileStorage
