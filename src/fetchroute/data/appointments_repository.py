"""Data access helpers for loading appointments with their client records."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from typing import Any, Mapping, Optional, Sequence

from ..db.supabase import get_supabase_client
from ..models.domain import Address, Appointment, Client, Coordinate

_SHORT_FRACTION = re.compile(r"(\.\d{1,5})(?=[+-]|$)")


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    # Postgres timestamptz may come back with a trailing Z
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # Postgres trims trailing zeros from microseconds; fromisoformat on 3.10 wants six digits
    text = _SHORT_FRACTION.sub(lambda match: match.group(1).ljust(7, "0"), text)
    return datetime.fromisoformat(text)


def parse_coordinate(payload: Any) -> Optional[Coordinate]:
    if not isinstance(payload, Mapping):
        return None
    lat = _coerce_float(payload.get("latitude", payload.get("lat")))
    lon = _coerce_float(payload.get("longitude", payload.get("lng", payload.get("lon"))))
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=lat, longitude=lon)


def parse_client(row: Mapping[str, Any]) -> Client:
    raw_address = row.get("address")
    address: Optional[Address] = None
    if isinstance(raw_address, Mapping):
        address = Address(
            formatted=(raw_address.get("formatted") or "").strip() or None,
            coordinates=parse_coordinate(raw_address.get("coordinates")),
        )
    elif isinstance(raw_address, str) and raw_address.strip():
        address = Address(formatted=raw_address.strip())
    return Client(
        client_id=str(row.get("id") or ""),
        name=(row.get("name") or "").strip(),
        address=address,
        phone=row.get("phone") or None,
        email=row.get("email") or None,
    )


def parse_appointment(row: Mapping[str, Any], client: Optional[Client] = None) -> Appointment:
    duration = row.get("duration")
    return Appointment(
        appointment_id=str(row["id"]) if row.get("id") is not None else None,
        date=_parse_datetime(row.get("date")),
        duration=int(duration) if duration not in (None, "") else None,
        client_id=row.get("client_id"),
        pet_id=row.get("pet_id"),
        service_type=row.get("service_type"),
        status=row.get("status") or "scheduled",
        notes=row.get("notes") or "",
        client=client,
    )


def day_bounds(route_date: date) -> tuple[datetime, datetime]:
    """First and last instant of ``route_date``."""
    return datetime.combine(route_date, time.min), datetime.combine(route_date, time.max)


class SupabaseAppointmentProvider:
    """Reads scheduled appointments for a day from the ``appointments`` table."""

    def __init__(self, client: Any = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        return self._client if self._client is not None else get_supabase_client()

    def get_appointments_for_routing(self, user_id: str, route_date: date) -> list[Appointment]:
        supabase = self.client
        if not supabase:
            logging.warning("Database not configured - cannot fetch appointments for routing")
            return []

        start, end = day_bounds(route_date)
        try:
            response = (
                supabase.table("appointments")
                .select("*")
                .eq("user_id", user_id)
                .gte("date", start.isoformat())
                .lte("date", end.isoformat())
                .eq("status", "scheduled")
                .order("date")
                .execute()
            )
            rows: Sequence[Mapping[str, Any]] = response.data or []

            client_ids = sorted({row["client_id"] for row in rows if row.get("client_id")})
            clients: dict[str, Client] = {}
            if client_ids:
                client_response = supabase.table("clients").select("*").in_("id", client_ids).execute()
                for client_row in client_response.data or []:
                    parsed = parse_client(client_row)
                    clients[parsed.client_id] = parsed
        except Exception:
            logging.exception(f"Failed to load appointments for user '{user_id}' on {route_date.isoformat()}")
            raise

        appointments: list[Appointment] = []
        for row in rows:
            client = clients.get(str(row.get("client_id")))
            if client is None:
                logging.warning(f"Client {row.get('client_id')} for appointment {row.get('id')} not found, skipping")
                continue
            appointments.append(parse_appointment(row, client))
        return appointments
