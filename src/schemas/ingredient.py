"""Ingredient schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

# Trimmed before the length check so padding does not count against the limit
IngredientName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]
IngredientCategory = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]


class IngredientCreate(BaseModel):
    """Create a new ingredient."""

    name: IngredientName
    description: str | None = None
    category: IngredientCategory | None = None


class IngredientUpdate(BaseModel):
    """Update an ingredient. Omitted fields are left unchanged."""

    name: IngredientName | None = None
    description: str | None = None
    category: IngredientCategory | None = None


class IngredientResponse(BaseModel):
    """Ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    category: str | None = None
    created_at: datetime
