"""Pydantic models for the meal planner API."""

from .meals import (
    Day,
    Ingredient,
    Meal,
    MealsPayload,
    HistoryEntry,
    GenerateMealsRequest,
    GenerateMealsResponse,
    RerollMealRequest,
    RerollMealResponse,
    MealIdeaResponse,
)
from .grocery import (
    GroceryItem,
    GroceryMeal,
    GroceryListRequest,
    GroceryListResponse,
)
from .plans import (
    Plan,
    SavePlanRequest,
    PlanResponse,
    PlanListResponse,
)

__all__ = [
    # Meals
    "Day",
    "Ingredient",
    "Meal",
    "MealsPayload",
    "HistoryEntry",
    "GenerateMealsRequest",
    "GenerateMealsResponse",
    "RerollMealRequest",
    "RerollMealResponse",
    "MealIdeaResponse",
    # Grocery
    "GroceryItem",
    "GroceryMeal",
    "GroceryListRequest",
    "GroceryListResponse",
    # Plans
    "Plan",
    "SavePlanRequest",
    "PlanResponse",
    "PlanListResponse",
]
