"""Ingredient API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentPrincipal, PathId, get_ingredient_service
from src.schemas.ingredient import IngredientCreate, IngredientResponse, IngredientUpdate
from src.schemas.recipe import RecipeResponse
from src.services.ingredient_service import IngredientService

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("", response_model=list[IngredientResponse])
def list_ingredients(
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
    search: str | None = None,
    category: str | None = None,
):
    """List ingredients, optionally by name search or category label."""
    return service.list_ingredients(search=search, category=category)


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    ingredient_data: IngredientCreate,
    principal: CurrentPrincipal,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Add an ingredient to the shared catalogue."""
    return service.create_ingredient(
        ingredient_data.name, ingredient_data.description, ingredient_data.category
    )


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(
    ingredient_id: PathId,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Get an ingredient by ID."""
    return service.get_ingredient(ingredient_id)


@router.get("/{ingredient_id}/recipes", response_model=list[RecipeResponse])
def get_ingredient_recipes(
    ingredient_id: PathId,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """List the recipes that use an ingredient."""
    return service.recipes_using(ingredient_id)


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: PathId,
    ingredient_data: IngredientUpdate,
    principal: CurrentPrincipal,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Update an ingredient."""
    return service.update_ingredient(ingredient_id, ingredient_data.model_dump(exclude_unset=True))


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: PathId,
    principal: CurrentPrincipal,
    service: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """Delete an ingredient that no recipe uses."""
    service.delete_ingredient(ingredient_id)
