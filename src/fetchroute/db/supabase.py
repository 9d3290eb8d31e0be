"""Shared Supabase client for appointment reads and route storage."""

import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from ..config import settings


def supabase_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache(maxsize=1)
def get_supabase_client() -> Optional[Client]:
    """Client for the configured project, or None without credentials.

    Creating the client does not contact the server; the first query does,
    so callers still handle network errors on ``execute()``.
    """
    if not supabase_configured():
        logging.warning("FETCHROUTE_SUPABASE_URL / FETCHROUTE_SUPABASE_KEY not set - routes will not be stored")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Could not create Supabase client for {settings.supabase_url}: {e}")
        return None
    logging.info(f"Supabase client ready for {settings.supabase_url}")
    return client
