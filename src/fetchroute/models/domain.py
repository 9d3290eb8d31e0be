"""Domain models for appointment, client and location records."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Geographic position in decimal degrees."""

    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


@dataclass(slots=True)
class Address:
    formatted: Optional[str] = None
    coordinates: Optional[Coordinate] = None


@dataclass(slots=True)
class Client:
    """Client record as needed for routing (name and geocoded address)."""

    client_id: str
    name: str
    address: Optional[Address] = None
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass(slots=True)
class Appointment:
    """A scheduled service visit, optionally joined with its client."""

    appointment_id: Optional[str]
    date: Optional[datetime]
    duration: Optional[int] = None
    client_id: Optional[str] = None
    pet_id: Optional[str] = None
    service_type: Optional[str] = None
    status: str = "scheduled"
    notes: str = ""
    client: Optional[Client] = None


@dataclass(frozen=True, slots=True)
class StartingPoint:
    """Origin of the day's tour; the tour also returns here."""

    name: str
    address: str
    coordinates: Optional[Coordinate]
