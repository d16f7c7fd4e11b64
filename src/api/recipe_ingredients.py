"""Recipe composition API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentPrincipal, PathId, get_ingredient_service
from src.schemas.recipe import (
    RecipeIngredientCreate,
    RecipeIngredientResponse,
    RecipeIngredientUpdate,
)
from src.services.ingredient_service import IngredientService

router = APIRouter(prefix="/recipes/{recipe_id}/ingredients", tags=["recipe-ingredients"])


@router.get("", response_model=list[RecipeIngredientResponse])
def get_recipe_ingredients(
    recipe_id: PathId,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """List the ingredients of a recipe."""
    return service.get_recipe_ingredients(recipe_id)


@router.post("", response_model=RecipeIngredientResponse, status_code=status.HTTP_201_CREATED)
def add_recipe_ingredient(
    recipe_id: PathId,
    item: RecipeIngredientCreate,
    principal: CurrentPrincipal,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Add an ingredient to a recipe (owner only)."""
    return service.add_recipe_ingredient(principal.user_id, recipe_id, item)


@router.put("", response_model=list[RecipeIngredientResponse])
def set_recipe_ingredients(
    recipe_id: PathId,
    items: list[RecipeIngredientCreate],
    principal: CurrentPrincipal,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Replace the whole ingredient list of a recipe (owner only)."""
    return service.set_recipe_ingredients(principal.user_id, recipe_id, items)


@router.put("/{ingredient_id}", response_model=RecipeIngredientResponse)
def update_recipe_ingredient(
    recipe_id: PathId,
    ingredient_id: PathId,
    item: RecipeIngredientUpdate,
    principal: CurrentPrincipal,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Change quantity, unit or notes of a recipe ingredient (owner only)."""
    return service.update_recipe_ingredient(
        principal.user_id, recipe_id, ingredient_id, item.quantity, item.unit, item.notes
    )


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_recipe_ingredient(
    recipe_id: PathId,
    ingredient_id: PathId,
    principal: CurrentPrincipal,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Remove an ingredient from a recipe (owner only)."""
    service.remove_recipe_ingredient(principal.user_id, recipe_id, ingredient_id)
