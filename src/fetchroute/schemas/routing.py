"""Routing request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CoordinateModel(BaseModel):
    latitude: float
    longitude: float


class AddressModel(BaseModel):
    formatted: Optional[str] = None
    coordinates: Optional[CoordinateModel] = None


class ClientModel(BaseModel):
    id: Optional[str] = None
    name: str = ""
    address: Optional[AddressModel] = None


class AppointmentModel(BaseModel):
    """Appointment record joined with its client, as supplied by callers."""

    id: Optional[str] = None
    date: Optional[datetime] = Field(default=None, description="Scheduled start of the appointment.")
    duration: Optional[int] = Field(default=None, description="Minutes; the configured default applies when omitted.")
    client_id: Optional[str] = None
    pet_id: Optional[str] = None
    service_type: Optional[str] = None
    status: str = "scheduled"
    notes: str = ""
    client: Optional[ClientModel] = None


class StartingPointModel(BaseModel):
    name: str = "Home/Office"
    address: str = "Default Location"
    coordinates: Optional[CoordinateModel] = None


class OptimizeRouteRequest(BaseModel):
    appointments: List[AppointmentModel] = Field(default_factory=list)
    starting_point: Optional[StartingPointModel] = Field(
        default=None,
        description="Tour origin and return point. Defaults to the configured home/office location.",
    )
    average_speed_kmh: Optional[float] = Field(default=None, gt=0)


class DailyRouteRequest(BaseModel):
    user_id: str
    route_date: date
    starting_point: Optional[StartingPointModel] = None
    average_speed_kmh: Optional[float] = Field(default=None, gt=0)
    persist: bool = Field(default=False, description="Also write summary.json and waypoints.csv under the data root.")


class StopModel(BaseModel):
    id: str
    appointment_id: Optional[str] = None
    client_id: Optional[str] = None
    client_name: str = ""
    pet_id: Optional[str] = None
    service_type: Optional[str] = None
    address: str
    coordinates: CoordinateModel
    time: Optional[datetime] = None
    duration: Optional[int] = None


class WaypointModel(BaseModel):
    type: Literal["start", "appointment", "end"]
    arrival_time: Optional[datetime] = None
    departure_time: Optional[datetime] = None
    name: Optional[str] = None
    address: Optional[str] = None
    coordinates: Optional[CoordinateModel] = None
    id: Optional[str] = None
    appointment_id: Optional[str] = None
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    pet_id: Optional[str] = None
    service_type: Optional[str] = None
    time: Optional[datetime] = None
    duration: Optional[int] = None


class RouteResponse(BaseModel):
    route_id: Optional[str] = None
    waypoints: List[WaypointModel]
    optimized_route: List[StopModel]
    appointment_ids: List[Optional[str]]
    total_distance_km: float
    estimated_travel_time_min: int
    start_point: StartingPointModel
    end_point: StartingPointModel
