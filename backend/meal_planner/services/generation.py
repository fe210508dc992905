"""
Meal generation service - OpenAI integration for dinner planning.

Turns a free-text prompt (plus recent conversation history) into a list of
validated meals. Model output is checked against the meal schema; a bad
first answer gets exactly one retry with a "fix the JSON" prompt.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional

import openai
from openai import AsyncOpenAI

from meal_planner.config import get_settings
from meal_planner.errors import (
    ConfigurationError,
    ExternalServiceError,
    GenerationError,
    RerollError,
    SchemaValidationError,
)
from meal_planner.models.meals import Meal
from meal_planner.services.history import ConversationHistory
from meal_planner.services.meal_schema import (
    MEAL_INSTRUCTIONS,
    MEAL_JSON_SCHEMA,
    MealsAccepted,
    parse_meals_output,
)

logger = logging.getLogger(__name__)


FIX_JSON_PREFIX = "**Fix the JSON so it matches the schema exactly.**"

MEAL_IDEA_INSTRUCTIONS = (
    "You are a meal planning assistant that suggests thoughtful, creative meals "
    "based on the specific needs of the user"
)
MEAL_IDEA_PROMPT = (
    "Suggest 4 easy dinner meals for a family of 2 adults and 1 toddler. "
    "Moderately healthy, but primary emphasis on very fast prep time for family "
    "lacking time to cook."
)


class GenerationAttempt(str, Enum):
    """The two states a generation request can pass through."""

    FIRST = "first"
    RETRY = "retry"


@dataclass
class GenerationResult:
    meals: list[Meal]
    history: ConversationHistory
    attempts: int = 1


@dataclass
class RerollResult:
    meal: Meal
    day_matched: bool = True


def build_reroll_prompt(original_prompt: str, day: str, existing_meal_names: list[str]) -> str:
    """Prompt asking for one replacement meal on ``day``."""
    return (
        f"Replace the {day} meal with ONE different meal suggestion. "
        f'Original request: "{original_prompt}". '
        f"Avoid duplicating these existing meals: {', '.join(existing_meal_names)}. "
        f"Return exactly one meal for {day}."
    )


class MealGenerator:
    """OpenAI-backed meal generator."""

    def __init__(self, client: AsyncOpenAI, model: str = "gpt-4o-mini"):
        self.client = client
        self.model = model

    async def generate_meals(
        self,
        prompt: str,
        history: Optional[ConversationHistory] = None,
    ) -> GenerationResult:
        """Generate meals for a prompt.

        Process:
        1. Render recent history plus the prompt as the model input
        2. Ask for JSON matching MEAL_JSON_SCHEMA
        3. Validate; on a bad answer retry once with FIX_JSON_PREFIX
        4. Append the exchange to history (capped) and return both
        """
        history = history if history is not None else ConversationHistory()
        prompt = prompt.strip()
        started = time.monotonic()

        rejection = None
        for attempt_number, attempt in enumerate(GenerationAttempt, start=1):
            request_prompt = prompt
            if attempt is GenerationAttempt.RETRY:
                request_prompt = f"{FIX_JSON_PREFIX} {prompt}"

            output_text = await self._request_meals(history.build_input(request_prompt))
            result = parse_meals_output(output_text)

            if isinstance(result, MealsAccepted):
                elapsed_ms = (time.monotonic() - started) * 1000
                logger.info(
                    f"Generated {len(result.meals)} meals in {elapsed_ms:.0f}ms "
                    f"({attempt.value} attempt)"
                )
                return GenerationResult(
                    meals=result.meals,
                    history=history.with_exchange(prompt, output_text),
                    attempts=attempt_number,
                )

            rejection = result
            logger.warning(f"Meals JSON rejected on {attempt.value} attempt: {result.reason}")

        raise SchemaValidationError(
            "Failed to generate valid meal suggestions after retry",
            reason=rejection.reason if rejection else "",
        )

    async def reroll_meal(
        self,
        original_prompt: str,
        day: str,
        existing_meal_names: list[str],
    ) -> RerollResult:
        """Generate one replacement meal for ``day``.

        If the model answers with a meal for a different day, the first
        meal is used anyway and ``day_matched`` is False.
        """
        prompt = build_reroll_prompt(original_prompt, day, existing_meal_names)
        result = await self.generate_meals(prompt)

        if not result.meals:
            raise RerollError("No meal generated for reroll")

        for meal in result.meals:
            if meal.day.value == day:
                return RerollResult(meal=meal)

        fallback = result.meals[0]
        logger.warning(
            f"Reroll asked for {day} but got {[m.day.value for m in result.meals]}; "
            f"using '{fallback.name}' ({fallback.day.value})"
        )
        return RerollResult(meal=fallback, day_matched=False)

    async def suggest_meal_idea(self) -> str:
        """Free-text meal suggestion for a hardcoded prompt (diagnostic)."""
        try:
            response = await self.client.responses.create(
                model=self.model,
                instructions=MEAL_IDEA_INSTRUCTIONS,
                input=MEAL_IDEA_PROMPT,
            )
        except openai.APIError as e:
            logger.error(f"OpenAI meal idea request failed: {e}")
            raise ExternalServiceError("Failed to generate meal idea") from e

        return response.output_text or "No response generated"

    async def _request_meals(self, input_text: str) -> str:
        """Single structured-output call. Returns the raw output text."""
        try:
            response = await self.client.responses.create(
                model=self.model,
                instructions=MEAL_INSTRUCTIONS,
                text={
                    "format": {
                        "type": "json_schema",
                        "name": "meals",
                        "schema": MEAL_JSON_SCHEMA,
                    }
                },
                input=input_text,
            )
        except openai.APIError as e:
            logger.error(f"OpenAI meal request failed: {e}")
            raise ExternalServiceError(f"OpenAI request failed: {e}") from e

        output_text = response.output_text
        if not output_text:
            raise GenerationError("No output received from OpenAI")
        return output_text


class MealPlannerSession:
    """One client's planning conversation.

    Holds the running history so repeated prompts ("make Tuesday
    vegetarian") build on earlier answers.
    """

    def __init__(self, generator: MealGenerator):
        self.generator = generator
        self._history = ConversationHistory()

    async def generate_meals(self, prompt: str) -> list[Meal]:
        result = await self.generator.generate_meals(prompt, self._history)
        self._history = result.history
        return result.meals

    async def edit_meals(self, edit_prompt: str) -> list[Meal]:
        """Revise the current plan; the edit is read against prior turns."""
        return await self.generate_meals(edit_prompt)

    def get_history(self) -> ConversationHistory:
        return ConversationHistory(self._history.entries)

    def clear_history(self) -> None:
        self._history = ConversationHistory()


@lru_cache
def _build_generator(api_key: str, model: str, timeout: float, max_retries: int) -> MealGenerator:
    client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=max_retries)
    return MealGenerator(client, model=model)


def get_meal_generator() -> MealGenerator:
    """Get cached meal generator for the configured API key."""
    settings = get_settings()
    if not settings.openai_api_key:
        raise ConfigurationError("OpenAI API key not configured")
    return _build_generator(
        settings.openai_api_key,
        settings.openai_model,
        settings.openai_timeout_seconds,
        settings.openai_max_retries,
    )
