"""Liveness and datastore checks."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    return {"status": "ok"}


def _probe_routes_table(supabase: Any) -> dict:
    from ...persistence.database import ROUTES_TABLE

    try:
        supabase.table(ROUTES_TABLE).select("id").limit(1).execute()
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Could not read the '{ROUTES_TABLE}' table: {exc}",
        }
    return {"configured": True, "connected": True, "message": f"'{ROUTES_TABLE}' table reachable."}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Report whether Supabase is configured and the routes table answers."""
    # resolved per call so a misconfigured datastore never blocks startup
    from ...db import supabase as supabase_db

    supabase = supabase_db.get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Set FETCHROUTE_SUPABASE_URL and FETCHROUTE_SUPABASE_KEY to enable route storage.",
        }
    return _probe_routes_table(supabase)
