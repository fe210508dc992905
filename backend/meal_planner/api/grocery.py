"""
Grocery list API endpoints.
"""

from fastapi import APIRouter

from meal_planner.models.grocery import GroceryListRequest, GroceryListResponse
from meal_planner.services.grocery import create_grocery_list

router = APIRouter(tags=["grocery"])


@router.post("/grocery-list", response_model=GroceryListResponse)
async def build_grocery_list(request: GroceryListRequest) -> GroceryListResponse:
    """Merge the ingredients of the given meals into one shopping list.

    Same-unit quantities are summed ("2 tbsp" + "1 tbsp" -> "3 tablespoons");
    anything else is listed as written.
    """
    items = create_grocery_list(request.meals)
    return GroceryListResponse(
        items=items,
        items_count=len(items),
        meals_included=len(request.meals),
    )
