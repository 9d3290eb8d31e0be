"""Routing endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...models.domain import Address, Appointment, Client, Coordinate, StartingPoint
from ...persistence.filesystem import FileStorage
from ...schemas.routing import (
    AppointmentModel,
    CoordinateModel,
    DailyRouteRequest,
    OptimizeRouteRequest,
    RouteResponse,
    StartingPointModel,
)
from ...services.outputs.routing_formatter import route_result_to_json
from ...services.routing.base import AppointmentProvider, RouteStore
from ...services.routing.errors import RouteValidationError
from ...services.routing.models import RouteResult
from ...services.routing.service import (
    default_starting_point,
    get_route_for_date,
    optimize_route,
    plan_daily_route,
)
from ..dependencies import get_appointment_provider, get_route_store, get_storage_factory

router = APIRouter(prefix="/routes", tags=["routes"])


def _coordinate(model: Optional[CoordinateModel]) -> Optional[Coordinate]:
    if model is None:
        return None
    return Coordinate(latitude=model.latitude, longitude=model.longitude)


def _to_appointment(model: AppointmentModel) -> Appointment:
    client = None
    if model.client is not None:
        address = None
        if model.client.address is not None:
            address = Address(
                formatted=model.client.address.formatted,
                coordinates=_coordinate(model.client.address.coordinates),
            )
        client = Client(client_id=model.client.id or model.client_id or "", name=model.client.name, address=address)
    return Appointment(
        appointment_id=model.id,
        date=model.date,
        duration=model.duration,
        client_id=model.client_id,
        pet_id=model.pet_id,
        service_type=model.service_type,
        status=model.status,
        notes=model.notes,
        client=client,
    )


def _to_starting_point(model: Optional[StartingPointModel]) -> StartingPoint:
    if model is None:
        return default_starting_point()
    return StartingPoint(name=model.name, address=model.address, coordinates=_coordinate(model.coordinates))


def _to_response(result: RouteResult, route_id: Optional[str] = None) -> RouteResponse:
    return RouteResponse(route_id=route_id, **route_result_to_json(result))


def _bad_request(exc: ValueError) -> HTTPException:
    if isinstance(exc, RouteValidationError):
        detail: Any = exc.to_dict()
    else:
        detail = str(exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.post("/optimize", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizeRouteRequest) -> RouteResponse:
    try:
        result = optimize_route(
            [_to_appointment(appointment) for appointment in payload.appointments],
            _to_starting_point(payload.starting_point),
            average_speed_kmh=payload.average_speed_kmh,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc
    return _to_response(result)


@router.post("/daily", response_model=RouteResponse, status_code=status.HTTP_201_CREATED)
def create_daily_route(
    payload: DailyRouteRequest,
    provider: AppointmentProvider = Depends(get_appointment_provider),
    store: RouteStore = Depends(get_route_store),
    storage_factory: Callable[[], FileStorage] = Depends(get_storage_factory),
) -> RouteResponse:
    """Plan and store the route for a user's scheduled appointments on a day."""
    try:
        daily = plan_daily_route(
            payload.user_id,
            payload.route_date,
            provider=provider,
            store=store,
            starting_point=_to_starting_point(payload.starting_point),
            storage=storage_factory() if payload.persist else None,
            average_speed_kmh=payload.average_speed_kmh,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    except Exception as exc:
        logging.exception(f"Error planning daily route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan route: {str(exc)}",
        ) from exc
    return _to_response(daily.result, daily.route_id)


@router.get("/users/{user_id}", status_code=status.HTTP_200_OK)
def list_routes(user_id: str, store: RouteStore = Depends(get_route_store)) -> list[dict]:
    return store.get_routes(user_id)


@router.get("/users/{user_id}/{route_date}", status_code=status.HTTP_200_OK)
def get_route_by_date(
    user_id: str,
    route_date: date,
    store: RouteStore = Depends(get_route_store),
) -> dict:
    route = get_route_for_date(user_id, route_date, store=store)
    if route is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No route planned for user '{user_id}' on {route_date.isoformat()}",
        )
    return route


@router.get("/{route_id}", status_code=status.HTTP_200_OK)
def get_route(route_id: str, store: RouteStore = Depends(get_route_store)) -> dict:
    route = store.get_route(route_id)
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Route not found")
    return route


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_route(route_id: str, store: RouteStore = Depends(get_route_store)) -> Response:
    if not store.delete_route(route_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Route not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
