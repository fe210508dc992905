"""Supabase client service."""

import logging
from functools import lru_cache

from supabase import create_client, Client

from meal_planner.config import get_settings
from meal_planner.errors import PersistenceError

logger = logging.getLogger(__name__)

NOT_CONFIGURED_CODE = "SUPABASE_NOT_CONFIGURED"

# Table names (match the frontend's Supabase project)
TABLES = {
    "plans": "plans",
}


@lru_cache
def _create_client(url: str, key: str) -> Client:
    return create_client(url, key)


def get_supabase_client() -> Client:
    """Get Supabase client, preferring the service role key."""
    settings = get_settings()
    if not settings.persistence_enabled:
        raise PersistenceError(
            "Supabase is not configured. Please set up your environment variables.",
            code=NOT_CONFIGURED_CODE,
        )
    return _create_client(settings.supabase_url, settings.supabase_key)
