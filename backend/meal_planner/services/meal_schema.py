"""
Output contract for meal generation.

The JSON schema below is sent to the model as a structured-output
constraint; ``parse_meals_output`` re-checks whatever text comes back,
since the service does not guarantee the constraint is honored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Union

from pydantic import ValidationError

from meal_planner.models.meals import MODEL_OUTPUT_CONTEXT, Day, Meal, MealsPayload


MEAL_INSTRUCTIONS = (
    "You are an expert meal-planning engine. Return ONLY JSON that matches the schema. "
    "Be concise but complete. Each meal needs: unique ID, day, name, description, "
    "prep/cook minutes, ingredients list, and cooking steps. "
    "You may optionally add a 'tags' array with relevant descriptive tags."
)

MEAL_JSON_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "meals": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "day": {"type": "string", "enum": [d.value for d in Day]},
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "prepMinutes": {"type": "number", "minimum": 0},
                    "cookMinutes": {"type": "number", "minimum": 0},
                    "ingredients": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "item": {"type": "string"},
                                "quantity": {"type": "string"},
                            },
                            "required": ["item", "quantity"],
                            "additionalProperties": False,
                        },
                        "minItems": 1,
                    },
                    "steps": {
                        "type": "array",
                        "items": {"type": "string"},
                        "minItems": 1,
                    },
                    "tags": {
                        "type": "array",
                        "items": {"type": "string"},
                    },
                },
                "required": [
                    "id", "day", "name", "description",
                    "prepMinutes", "cookMinutes", "ingredients", "steps",
                ],
                "additionalProperties": False,
            },
        },
    },
    "required": ["meals"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class MealsAccepted:
    """Output parsed and matched the meal schema."""
    meals: list[Meal] = field(default_factory=list)


@dataclass(frozen=True)
class MealsRejected:
    """Output was not JSON or did not match the meal schema."""
    reason: str


MealsParseResult = Union[MealsAccepted, MealsRejected]


def parse_meals_output(output_text: str) -> MealsParseResult:
    """Parse raw model output into meals. Never raises.

    Validation is strict: numbers must be JSON numbers, keys must be the
    camelCase names from MEAL_JSON_SCHEMA, and ``tags`` is omitted or an array.
    """
    try:
        json.loads(output_text)
    except (json.JSONDecodeError, TypeError) as e:
        return MealsRejected(reason=f"Invalid JSON: {e}")

    try:
        payload = MealsPayload.model_validate_json(
            output_text,
            strict=True,
            context={MODEL_OUTPUT_CONTEXT: True},
        )
    except ValidationError as e:
        return MealsRejected(reason=_summarize_errors(e))

    return MealsAccepted(meals=payload.meals)


def _summarize_errors(error: ValidationError) -> str:
    """Condense pydantic errors into one line for logs and error bodies."""
    parts = []
    for err in error.errors()[:5]:
        location = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{location}: {err['msg']}")
    extra = error.error_count() - len(parts)
    if extra > 0:
        parts.append(f"(+{extra} more)")
    return "Schema mismatch: " + "; ".join(parts)
