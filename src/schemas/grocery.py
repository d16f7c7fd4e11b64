"""Grocery list schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.database import MAX_ID
from src.schemas.ingredient import IngredientResponse


class GroceryListRequest(BaseModel):
    """Recipes to build a grocery list from."""

    recipe_ids: list[Annotated[int, Field(gt=0, le=MAX_ID)]]


class GroceryItemResponse(BaseModel):
    """One aggregated line of a grocery list.

    ``total_quantity`` is -1 when the recipes disagree on the unit; the
    quantities then have to be reconciled by hand and ``unit_conflict`` is set.
    """

    model_config = ConfigDict(from_attributes=True)

    ingredient_id: int
    ingredient: IngredientResponse
    total_quantity: float
    unit: str
    recipes: list[str]
    unit_conflict: bool
