"""Grocery list Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .meals import Ingredient


class GroceryItem(BaseModel):
    """A single merged line on the grocery list.

    Rebuilt from the current meals on every request; never stored.
    """

    model_config = ConfigDict(populate_by_name=True)

    item: str  # Capitalized, case-normalized name
    quantity: str  # Merged display text, e.g. "3 tablespoons"
    original_quantities: list[str] = Field(
        default_factory=list, alias="originalQuantities"
    )


class GroceryMeal(BaseModel):
    """The part of a meal the grocery merge reads.

    Looser than ``Meal``: plans edited on the client may carry meals whose
    ingredient list was emptied.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    ingredients: list[Ingredient] = Field(default_factory=list)


class GroceryListRequest(BaseModel):
    """Request to build a grocery list from a set of meals."""
    meals: list[GroceryMeal]


class GroceryListResponse(BaseModel):
    """Merged grocery list."""
    items: list[GroceryItem] = Field(default_factory=list)
    items_count: int = Field(default=0, alias="itemsCount")
    meals_included: int = Field(default=0, alias="mealsIncluded")

    model_config = ConfigDict(populate_by_name=True)
