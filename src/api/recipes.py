"""Recipe API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import CurrentPrincipal, PathId, get_recipe_service
from src.schemas.recipe import (
    RecipeCreate,
    RecipeResponse,
    RecipeUpdate,
    RecipeWithIngredientsResponse,
)
from src.services.query_parsing import parse_ingredient_ids
from src.services.recipe_service import RecipeDetail, RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])

RecipeOrDetail = RecipeResponse | RecipeWithIngredientsResponse


def to_recipe_response(item: Any) -> RecipeOrDetail:
    """Serialize a recipe, or a recipe with its composition."""
    if isinstance(item, RecipeDetail):
        return RecipeWithIngredientsResponse.model_validate(item)
    return RecipeResponse.model_validate(item)


# --- Static routes first (before /{recipe_id}) ---


@router.get("/search", response_model=list[RecipeResponse] | list[RecipeWithIngredientsResponse])
def search_recipes(
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    ingredient_ids: Annotated[str | None, Query()] = None,
    include_ingredients: bool = False,
):
    """Find recipes that contain all of the given ingredients."""
    ids = parse_ingredient_ids(ingredient_ids)
    return [to_recipe_response(r) for r in service.search_by_ingredients(ids, include_ingredients)]


@router.get("", response_model=list[RecipeResponse] | list[RecipeWithIngredientsResponse])
def list_recipes(
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    include_ingredients: bool = False,
):
    """List all recipes."""
    return [to_recipe_response(r) for r in service.list_recipes(include_ingredients)]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    recipe_data: RecipeCreate,
    principal: CurrentPrincipal,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Create a recipe owned by the caller."""
    return service.create_recipe(
        owner_user_id=principal.user_id,
        name=recipe_data.name,
        description=recipe_data.description,
        category_id=recipe_data.category_id,
        ingredients=recipe_data.ingredients,
    )


# --- Single recipe ---


@router.get("/{recipe_id}", response_model=RecipeOrDetail)
def get_recipe(
    recipe_id: PathId,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    include_ingredients: bool = False,
):
    """Get a recipe by ID."""
    return to_recipe_response(service.get_recipe(recipe_id, include_ingredients))


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: PathId,
    recipe_data: RecipeUpdate,
    principal: CurrentPrincipal,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Update a recipe (owner only)."""
    fields = recipe_data.model_dump(exclude_unset=True, exclude={"ingredients"})
    return service.update_recipe(
        principal.user_id, recipe_id, fields, ingredients=recipe_data.ingredients
    )


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: PathId,
    principal: CurrentPrincipal,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete a recipe and its ingredient rows (owner only)."""
    service.delete_recipe(principal.user_id, recipe_id)
