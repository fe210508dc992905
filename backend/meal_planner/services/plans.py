"""
Meal plan persistence service.

Stores one plan per (user, week) in the Supabase ``plans`` table. The
caller passes ``user_id`` explicitly; the frontend authenticates against
Supabase and forwards the id.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from postgrest.exceptions import APIError as PostgrestAPIError

from meal_planner.errors import PersistenceError
from meal_planner.models.meals import Meal
from meal_planner.models.plans import Plan
from meal_planner.services.supabase import get_supabase_client, TABLES
from meal_planner.services.weeks import current_monday, format_week_start, monday_of_week

logger = logging.getLogger(__name__)


def _database_error(action: str, error: PostgrestAPIError) -> PersistenceError:
    return PersistenceError(
        f"Failed to {action}: {error.message}",
        code=error.code,
        details=error.details,
    )


def _unexpected_error(action: str, error: Exception) -> PersistenceError:
    return PersistenceError(
        f"Unexpected error {action}: {error}",
        code="UNEXPECTED_ERROR",
    )


async def save_plan(user_id: str, week_start: date, meals: list[Meal]) -> Plan:
    """Create or replace the plan for the week containing ``week_start``."""
    client = get_supabase_client()
    week_key = format_week_start(monday_of_week(week_start))
    now = datetime.now(timezone.utc).isoformat()

    try:
        existing = (
            client.table(TABLES["plans"])
            .select("id,created_at")
            .eq("user_id", user_id)
            .eq("week_start", week_key)
            .limit(1)
            .execute()
        )
        created_at = existing.data[0]["created_at"] if existing.data else now

        result = (
            client.table(TABLES["plans"])
            .upsert(
                {
                    "user_id": user_id,
                    "week_start": week_key,
                    "meals": [meal.to_wire() for meal in meals],
                    "created_at": created_at,
                    "updated_at": now,
                },
                on_conflict="user_id,week_start",
            )
            .execute()
        )
    except PostgrestAPIError as e:
        raise _database_error("save meal plan", e) from e
    except Exception as e:
        raise _unexpected_error("saving meal plan", e) from e

    if not result.data:
        raise PersistenceError("Failed to save meal plan: no row returned", code="NO_DATA")

    logger.info(f"Saved plan for {user_id[:8]} week {week_key} ({len(meals)} meals)")
    return Plan.model_validate(result.data[0])


async def get_plan_by_week(user_id: str, week_start: date) -> Optional[Plan]:
    """Load the plan for the week containing ``week_start``, if any."""
    client = get_supabase_client()
    week_key = format_week_start(monday_of_week(week_start))

    try:
        result = (
            client.table(TABLES["plans"])
            .select("*")
            .eq("user_id", user_id)
            .eq("week_start", week_key)
            .limit(1)
            .execute()
        )
    except PostgrestAPIError as e:
        raise _database_error("load meal plan", e) from e
    except Exception as e:
        raise _unexpected_error("loading meal plan", e) from e

    if not result.data:
        return None
    return Plan.model_validate(result.data[0])


async def get_current_week_plan(user_id: str) -> Optional[Plan]:
    return await get_plan_by_week(user_id, current_monday())


async def get_user_plans(user_id: str) -> list[Plan]:
    """All plans for a user, newest week first."""
    client = get_supabase_client()

    try:
        result = (
            client.table(TABLES["plans"])
            .select("*")
            .eq("user_id", user_id)
            .order("week_start", desc=True)
            .execute()
        )
    except PostgrestAPIError as e:
        raise _database_error("load meal plans", e) from e
    except Exception as e:
        raise _unexpected_error("loading meal plans", e) from e

    return [Plan.model_validate(row) for row in (result.data or [])]


async def delete_plan(user_id: str, plan_id: str) -> None:
    """Delete a plan. Scoped to ``user_id`` so users only delete their own."""
    client = get_supabase_client()

    try:
        (
            client.table(TABLES["plans"])
            .delete()
            .eq("id", plan_id)
            .eq("user_id", user_id)
            .execute()
        )
    except PostgrestAPIError as e:
        raise _database_error("delete meal plan", e) from e
    except Exception as e:
        raise _unexpected_error("deleting meal plan", e) from e

    logger.info(f"Deleted plan {plan_id} for {user_id[:8]}")
