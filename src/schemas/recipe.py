"""Recipe and composition schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from src.database import MAX_ID
from src.schemas.category import CategoryResponse
from src.schemas.ingredient import IngredientResponse

# Trimmed before the length check so padding does not count against the limit
RecipeName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=200)]
Unit = Annotated[str, StringConstraints(strip_whitespace=True, max_length=20)]


class RecipeIngredientCreate(BaseModel):
    """Add an ingredient to a recipe."""

    ingredient_id: int = Field(..., le=MAX_ID)
    quantity: float
    unit: Unit
    notes: str | None = None


class RecipeIngredientUpdate(BaseModel):
    """Change the quantity, unit or notes of a recipe ingredient."""

    quantity: float
    unit: Unit
    notes: str | None = None


class RecipeIngredientResponse(BaseModel):
    """Recipe ingredient with the ingredient joined in."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    ingredient_id: int
    ingredient: IngredientResponse
    quantity: float
    unit: str
    notes: str | None = None
    created_at: datetime


class RecipeCreate(BaseModel):
    """Create a new recipe, optionally with its ingredients."""

    name: RecipeName
    description: str | None = None
    category_id: int | None = Field(None, le=MAX_ID)
    ingredients: list[RecipeIngredientCreate] | None = None


class RecipeUpdate(BaseModel):
    """Update a recipe. Supplying ingredients replaces the whole composition."""

    name: RecipeName | None = None
    description: str | None = None
    category_id: int | None = Field(None, le=MAX_ID)
    ingredients: list[RecipeIngredientCreate] | None = None


class RecipeResponse(BaseModel):
    """Recipe response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    category_id: int | None = None
    category: CategoryResponse | None = None
    owner_user_id: int
    created_at: datetime
    updated_at: datetime


class RecipeWithIngredientsResponse(BaseModel):
    """Recipe together with its composition."""

    model_config = ConfigDict(from_attributes=True)

    recipe: RecipeResponse
    ingredients: list[RecipeIngredientResponse]
