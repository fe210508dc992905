"""Error taxonomy for the meal planner API.

Every error carries the HTTP status it maps to; ``main.py`` registers a
single handler that renders them as ``{"error": message}``.
"""

from typing import Optional


class MealPlannerError(Exception):
    """Base exception for meal planner errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationInputError(MealPlannerError):
    """Bad prompt or request shape. Never retried."""

    status_code = 400


class ConfigurationError(MealPlannerError):
    """Missing API key or other required configuration."""
    pass


class ExternalServiceError(MealPlannerError):
    """Transport or API failure from the generation service."""
    pass


class GenerationError(MealPlannerError):
    """The generation service returned nothing usable."""
    pass


class SchemaValidationError(GenerationError):
    """Model output did not match the meal schema, even after the retry."""

    def __init__(self, message: str, reason: str = ""):
        super().__init__(message)
        self.reason = reason


class RerollError(GenerationError):
    """A reroll produced no meal to swap in."""
    pass


class PersistenceError(MealPlannerError):
    """A hosted-database operation failed."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        data = {"error": self.message}
        if self.code:
            data["code"] = self.code
        return data
