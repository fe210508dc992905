"""Meal, ingredient and conversation-history models.

Field names on the wire are camelCase (``prepMinutes``); Python code uses
snake_case attributes with aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Validation context key set when checking raw model output
MODEL_OUTPUT_CONTEXT = "model_output"


class Day(str, Enum):
    """Days a dinner can be planned for."""

    SUN = "Sun"
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"


class Ingredient(BaseModel):
    """An ingredient with a free-text quantity such as "2 tbsp"."""

    item: str
    quantity: str


class Meal(BaseModel):
    """A single planned dinner.

    Input uses the camelCase keys only.
    """

    id: str  # Unique within a plan
    day: Day
    name: str
    description: str
    prep_minutes: float = Field(alias="prepMinutes", ge=0)
    cook_minutes: float = Field(alias="cookMinutes", ge=0)
    ingredients: list[Ingredient] = Field(min_length=1)
    steps: list[str] = Field(min_length=1)
    tags: Optional[list[str]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def tags_not_null(cls, value, info: ValidationInfo):
        # Stored and returned meals may carry tags=None; model output must omit the key
        if value is None and (info.context or {}).get(MODEL_OUTPUT_CONTEXT):
            raise ValueError("tags must be an array when present")
        return value

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class MealsPayload(BaseModel):
    """Top-level object the model is asked to return."""

    meals: list[Meal]


class HistoryEntry(BaseModel):
    """One turn of the conversation sent back to the model as context."""

    role: Literal["user", "assistant"]
    content: str


# ============================================================================
# Request/Response Models
# ============================================================================

class GenerateMealsRequest(BaseModel):
    """Request to generate a set of meals from a prompt."""
    prompt: Optional[str] = None
    history: Optional[list[HistoryEntry]] = None


class GenerateMealsResponse(BaseModel):
    """Validated meals plus the updated conversation history."""
    meals: list[Meal]
    history: list[HistoryEntry]


class RerollMealRequest(BaseModel):
    """Request to replace the meal planned for one day."""

    model_config = ConfigDict(populate_by_name=True)

    original_prompt: Optional[str] = Field(default=None, alias="originalPrompt")
    day_to_reroll: Optional[str] = Field(default=None, alias="dayToReroll")
    existing_meal_names: Optional[list[str]] = Field(default=None, alias="existingMealNames")


class RerollMealResponse(BaseModel):
    """The replacement meal."""
    meal: Meal


class MealIdeaResponse(BaseModel):
    """Free-text diagnostic response."""
    message: str
