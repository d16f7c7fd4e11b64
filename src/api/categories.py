"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import PathId, get_recipe_service
from src.api.recipes import to_recipe_response
from src.schemas.category import CategoryResponse
from src.schemas.recipe import RecipeResponse, RecipeWithIngredientsResponse
from src.services.recipe_service import RecipeService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """List all recipe categories."""
    return service.list_categories()


@router.get(
    "/{category_id}/recipes",
    response_model=list[RecipeResponse] | list[RecipeWithIngredientsResponse],
)
def list_category_recipes(
    category_id: PathId,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    include_ingredients: bool = False,
):
    """List the recipes in a category."""
    recipes = service.list_by_category(category_id, include_ingredients)
    return [to_recipe_response(r) for r in recipes]
