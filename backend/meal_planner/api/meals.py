"""
Meal generation endpoints - generate, reroll, diagnostic idea.

Paths match what the frontend calls directly (no /api prefix).
"""

from fastapi import APIRouter, Depends

from meal_planner.errors import ValidationInputError
from meal_planner.models.meals import (
    GenerateMealsRequest,
    GenerateMealsResponse,
    MealIdeaResponse,
    RerollMealRequest,
    RerollMealResponse,
)
from meal_planner.services.generation import MealGenerator, get_meal_generator
from meal_planner.services.history import ConversationHistory

router = APIRouter(tags=["meals"])

PROMPT_MIN_LENGTH = 10
PROMPT_MAX_LENGTH = 500


def validate_prompt(prompt: str | None) -> str:
    """Check prompt presence and trimmed length; returns the trimmed prompt."""
    if not prompt or not prompt.strip():
        raise ValidationInputError("Prompt is required")

    trimmed = prompt.strip()
    if len(trimmed) < PROMPT_MIN_LENGTH:
        raise ValidationInputError(
            f"Prompt must be at least {PROMPT_MIN_LENGTH} characters long"
        )
    if len(trimmed) > PROMPT_MAX_LENGTH:
        raise ValidationInputError(
            f"Prompt must be {PROMPT_MAX_LENGTH} characters or less"
        )
    return trimmed


@router.post(
    "/generate-meals",
    response_model=GenerateMealsResponse,
    response_model_exclude_none=True,
)
async def generate_meals(
    body: GenerateMealsRequest,
    generator: MealGenerator = Depends(get_meal_generator),
):
    """Generate meals from a prompt, continuing the given conversation."""
    prompt = validate_prompt(body.prompt)
    history = ConversationHistory.from_wire(body.history)

    result = await generator.generate_meals(prompt, history)
    return GenerateMealsResponse(meals=result.meals, history=result.history.entries)


@router.post(
    "/reroll-meal",
    response_model=RerollMealResponse,
    response_model_exclude_none=True,
)
async def reroll_meal(
    body: RerollMealRequest,
    generator: MealGenerator = Depends(get_meal_generator),
):
    """Replace the meal for one day, avoiding meals already in the plan."""
    if not body.original_prompt or not body.original_prompt.strip():
        raise ValidationInputError("Original prompt is required")
    if not body.day_to_reroll or not body.day_to_reroll.strip():
        raise ValidationInputError("Day to reroll is required")
    if body.existing_meal_names is None:
        raise ValidationInputError("Existing meal names must be an array")

    result = await generator.reroll_meal(
        original_prompt=body.original_prompt,
        day=body.day_to_reroll,
        existing_meal_names=body.existing_meal_names,
    )
    return RerollMealResponse(meal=result.meal)


@router.get("/meal-poc", response_model=MealIdeaResponse)
async def meal_poc(generator: MealGenerator = Depends(get_meal_generator)):
    """Diagnostic passthrough to the model with a hardcoded prompt."""
    message = await generator.suggest_meal_idea()
    return MealIdeaResponse(message=message)
