"""Database persistence for computed routes."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..db.supabase import get_supabase_client
from ..services.outputs.routing_formatter import route_result_to_json
from ..services.routing.models import RouteResult

ROUTES_TABLE = "routes"


def route_result_to_record(user_id: str, route_date: date, result: RouteResult) -> dict[str, Any]:
    """Row payload for the ``routes`` table."""
    payload = route_result_to_json(result)
    return {
        "route_date": route_date.isoformat(),
        "user_id": user_id,
        "appointment_ids": payload["appointment_ids"],
        "waypoints": payload["waypoints"],
        "optimized_path": payload["optimized_route"],
        "start_point": payload["start_point"],
        "end_point": payload["end_point"],
        "total_distance": payload["total_distance_km"],
        "total_duration": payload["estimated_travel_time_min"],
    }


class SupabaseRouteStore:
    """Stores one route per user and day in the Supabase ``routes`` table."""

    def __init__(self, client: Any = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        return self._client if self._client is not None else get_supabase_client()

    def create_route(self, user_id: str, route_date: date, result: RouteResult) -> Optional[str]:
        """Insert a computed route and return its database id.

        Returns None when Supabase is not configured.
        """
        if not user_id:
            raise ValueError("User ID is required")
        if not result.appointment_ids:
            raise ValueError("At least one appointment is required for a route")

        supabase = self.client
        if not supabase:
            logging.warning("Supabase not configured - route will not be stored")
            return None

        record = route_result_to_record(user_id, route_date, result)
        response = supabase.table(ROUTES_TABLE).insert(record).execute()
        if not response.data:
            logging.error(f"Route insert for user '{user_id}' on {route_date.isoformat()} returned no rows")
            return None
        route_id = response.data[0].get("id")
        logging.info(f"Saved route {route_id} for user '{user_id}' on {route_date.isoformat()}")
        return str(route_id) if route_id is not None else None

    def get_route_by_date(self, user_id: str, route_date: date) -> Optional[dict[str, Any]]:
        supabase = self.client
        if not supabase:
            return None
        try:
            response = (
                supabase.table(ROUTES_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .eq("route_date", route_date.isoformat())
                .limit(1)
                .execute()
            )
        except Exception as e:
            logging.warning(f"Failed to retrieve route for user '{user_id}' on {route_date.isoformat()}: {e}")
            return None
        return response.data[0] if response.data else None

    def get_routes(self, user_id: str) -> list[dict[str, Any]]:
        supabase = self.client
        if not supabase:
            return []
        try:
            response = (
                supabase.table(ROUTES_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("route_date", desc=True)
                .execute()
            )
        except Exception as e:
            logging.warning(f"Failed to retrieve routes for user '{user_id}': {e}")
            return []
        return list(response.data or [])

    def get_route(self, route_id: str) -> Optional[dict[str, Any]]:
        supabase = self.client
        if not supabase:
            return None
        try:
            response = supabase.table(ROUTES_TABLE).select("*").eq("id", route_id).limit(1).execute()
        except Exception as e:
            logging.warning(f"Failed to retrieve route {route_id}: {e}")
            return None
        return response.data[0] if response.data else None

    def delete_route(self, route_id: str) -> bool:
        supabase = self.client
        if not supabase:
            return False
        try:
            response = supabase.table(ROUTES_TABLE).delete().eq("id", route_id).execute()
        except Exception as e:
            logging.error(f"Failed to delete route {route_id}: {e}")
            return False
        return bool(response.data)
