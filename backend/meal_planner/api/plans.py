"""
Meal plan persistence endpoints.

One plan per (user, week); weeks are identified by any date inside them
and stored under their Monday.
"""

from datetime import date

from fastapi import APIRouter, Depends

from meal_planner.api.deps import get_current_user_id
from meal_planner.models.plans import PlanListResponse, PlanResponse, SavePlanRequest
from meal_planner.services.plans import (
    delete_plan,
    get_current_week_plan,
    get_plan_by_week,
    get_user_plans,
    save_plan,
)

router = APIRouter(prefix="/api/plans", tags=["plans"])


@router.get("", response_model=PlanListResponse)
async def list_plans(user_id: str = Depends(get_current_user_id)) -> PlanListResponse:
    """All saved plans for the user, newest week first."""
    return PlanListResponse(plans=await get_user_plans(user_id))


@router.get("/current", response_model=PlanResponse)
async def current_plan(user_id: str = Depends(get_current_user_id)) -> PlanResponse:
    """This week's plan, or ``{"plan": null}``."""
    return PlanResponse(plan=await get_current_week_plan(user_id))


@router.get("/week/{week_start}", response_model=PlanResponse)
async def plan_for_week(
    week_start: date,
    user_id: str = Depends(get_current_user_id),
) -> PlanResponse:
    """Plan for the week containing ``week_start``, or ``{"plan": null}``."""
    return PlanResponse(plan=await get_plan_by_week(user_id, week_start))


@router.put("/week/{week_start}", response_model=PlanResponse)
async def save_plan_for_week(
    week_start: date,
    request: SavePlanRequest,
    user_id: str = Depends(get_current_user_id),
) -> PlanResponse:
    """Create or replace the plan for the week containing ``week_start``."""
    plan = await save_plan(user_id, week_start, request.meals)
    return PlanResponse(plan=plan)


@router.delete("/{plan_id}")
async def remove_plan(
    plan_id: str,
    user_id: str = Depends(get_current_user_id),
) -> dict:
    """Delete one of the user's plans."""
    await delete_plan(user_id, plan_id)
    return {"success": True}
