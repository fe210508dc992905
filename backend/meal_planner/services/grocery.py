"""
Grocery list generation service.

Merges the ingredients of a set of meals into one shopping list. Quantities
are free text written by the model ("2 tbsp", "1/2 cup", "a pinch"), so
parsing is best effort: anything with a recognized unit is summed, the rest
is listed as written.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from meal_planner.models.grocery import GroceryItem
from meal_planner.models.meals import Ingredient

logger = logging.getLogger(__name__)


# ============================================================================
# Unit Normalization
# ============================================================================

# Synonym -> canonical singular unit
UNIT_SYNONYMS: dict[str, str] = {
    "tbsp": "tablespoon",
    "tablespoons": "tablespoon",
    "tsp": "teaspoon",
    "teaspoons": "teaspoon",
    "cups": "cup",
    "c": "cup",
    "lbs": "lb",
    "pounds": "lb",
    "pound": "lb",
    "oz": "ounce",
    "ounces": "ounce",
    "cloves": "clove",
    "cans": "can",
    # Size and state words pass through as descriptors
    "medium": "medium",
    "large": "large",
    "small": "small",
    "whole": "whole",
    "sliced": "sliced",
    "cooked": "cooked",
}

# Units whose amounts can be added together
MEASURABLE_UNITS = frozenset({"cup", "tablespoon", "teaspoon", "lb", "ounce", "clove", "can"})

COMMON_FRACTIONS: dict[str, float] = {
    "1/4": 0.25,
    "1/3": 0.333,
    "1/2": 0.5,
    "2/3": 0.667,
    "3/4": 0.75,
    "1/8": 0.125,
    "3/8": 0.375,
    "5/8": 0.625,
    "7/8": 0.875,
}
FRACTION_TOLERANCE = 0.01

# Leading integer, fraction or decimal, then the rest
QUANTITY_PATTERN = re.compile(r"^(\d+(?:/\d+)?(?:\.\d+)?)?\s*(.+)$")


class HasIngredients(Protocol):
    ingredients: Sequence[Ingredient]


@dataclass(frozen=True)
class ParsedQuantity:
    amount: float
    unit: str
    original_text: str

    @property
    def is_measurable(self) -> bool:
        return self.unit in MEASURABLE_UNITS


def normalize_unit(unit: str) -> str:
    unit = unit.strip()
    return UNIT_SYNONYMS.get(unit, unit)


def parse_quantity(quantity: str) -> Optional[ParsedQuantity]:
    """Parse "2 tbsp" into (2.0, "tablespoon"). None for empty text."""
    normalized = quantity.lower().strip()
    match = QUANTITY_PATTERN.match(normalized)
    if not match:
        return None

    amount_text, unit_text = match.groups()
    if not amount_text:
        # No number: a descriptor like "to taste" or "a pinch"
        return ParsedQuantity(amount=1, unit=normalized, original_text=quantity)

    if "/" in amount_text:
        numerator, denominator = (float(part) for part in amount_text.split("/"))
        if denominator == 0:
            return ParsedQuantity(amount=1, unit=normalized, original_text=quantity)
        amount = numerator / denominator
    else:
        amount = float(amount_text)

    return ParsedQuantity(amount=amount, unit=normalize_unit(unit_text), original_text=quantity)


def decimal_to_fraction(value: float) -> Optional[str]:
    """Render a value as a common kitchen fraction, if it is close to one."""
    for fraction, fraction_value in COMMON_FRACTIONS.items():
        if abs(value - fraction_value) < FRACTION_TOLERANCE:
            return fraction
    return None


def format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return decimal_to_fraction(amount) or f"{amount:.2f}"


def combine_quantities(quantities: list[ParsedQuantity]) -> str:
    """Merge parsed quantities for one item into display text."""
    if not quantities:
        return ""
    if len(quantities) == 1:
        return quantities[0].original_text

    unit_totals: dict[str, float] = {}
    descriptors: list[str] = []

    for qty in quantities:
        if qty.is_measurable:
            unit_totals[qty.unit] = unit_totals.get(qty.unit, 0) + qty.amount
        else:
            descriptors.append(qty.original_text)

    parts = []
    for unit, total in unit_totals.items():
        unit_display = unit if total == 1 else f"{unit}s"
        parts.append(f"{format_amount(total)} {unit_display}")

    if descriptors:
        parts.append(", ".join(descriptors))

    return " + ".join(parts)


def collation_key(name: str) -> tuple[str, str]:
    """Accent- and case-insensitive sort key; "Éclair" sorts among the e's."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), decomposed.casefold())


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


# ============================================================================
# Main Generation
# ============================================================================

def create_grocery_list(meals: Iterable[HasIngredients]) -> list[GroceryItem]:
    """Build a deduplicated, sorted grocery list from meals.

    Process:
    1. Group raw quantities by lowercased, trimmed item name
    2. Parse each quantity and normalize its unit
    3. Sum measurable units, list the rest as written
    4. Sort by item name, ignoring accents and case
    """
    quantities_by_item: dict[str, list[str]] = {}
    for meal in meals:
        for ingredient in meal.ingredients:
            key = ingredient.item.lower().strip()
            quantities_by_item.setdefault(key, []).append(ingredient.quantity)

    grocery_items: list[GroceryItem] = []
    for item, quantities in quantities_by_item.items():
        parsed = [p for p in (parse_quantity(q) for q in quantities) if p is not None]
        grocery_items.append(GroceryItem(
            item=_capitalize(item),
            quantity=combine_quantities(parsed),
            original_quantities=list(quantities),
        ))

    grocery_items.sort(key=lambda x: collation_key(x.item))

    logger.debug(f"Built grocery list: {len(grocery_items)} items")
    return grocery_items
