"""Grocery list API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import CurrentPrincipal, get_grocery_service
from src.schemas.grocery import GroceryItemResponse, GroceryListRequest
from src.services.grocery_service import GroceryService
from src.shared.errors import InvalidInput

router = APIRouter(tags=["grocery"])


@router.post("/grocery-list", response_model=list[GroceryItemResponse])
def generate_grocery_list(
    grocery_request: GroceryListRequest,
    principal: CurrentPrincipal,
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Aggregate the ingredients of several recipes into one shopping list."""
    if not grocery_request.recipe_ids:
        raise InvalidInput("recipe_ids must not be empty")
    items = service.generate(grocery_request.recipe_ids)
    return [GroceryItemResponse.model_validate(item) for item in items]
