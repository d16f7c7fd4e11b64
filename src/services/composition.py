"""Ownership checks and validation shared by recipe and ingredient services."""

import math
from collections.abc import Iterable
from typing import Protocol

from src.repositories.protocols import CompositionRow, IngredientRepository, RecipeRepository
from src.shared.errors import (
    Forbidden,
    IngredientNotFound,
    InvalidQuantity,
    InvalidUnit,
    RecipeIngredientExists,
    RecipeNotFound,
)

# recipe_ingredients.quantity is NUMERIC(8, 2)
MAX_QUANTITY = 999999.99
# Quantities are stored as NUMERIC(8, 2)
QUANTITY_DECIMALS = 2


class CompositionInput(Protocol):
    ingredient_id: int
    quantity: float
    unit: str
    notes: str | None


def ensure_recipe_owner(recipes: RecipeRepository, recipe_id: int, user_id: int) -> None:
    """Raise unless ``user_id`` owns the recipe.

    Only the owner column is fetched. A missing recipe is reported before a
    foreign one.
    """
    if recipe_id <= 0:
        raise RecipeNotFound()
    owner_id = recipes.get_owner_id(recipe_id)
    if owner_id is None:
        raise RecipeNotFound()
    if owner_id != user_id:
        raise Forbidden()


def clean_quantity_and_unit(quantity: float, unit: str) -> tuple[float, str]:
    if not math.isfinite(quantity) or quantity <= 0:
        raise InvalidQuantity()
    if quantity > MAX_QUANTITY:
        raise InvalidQuantity(f"quantity must not exceed {MAX_QUANTITY}")
    rounded = round(quantity, QUANTITY_DECIMALS)
    # Float noise such as 0.1 + 0.2 is tolerated, a real third decimal is not
    if abs(rounded - quantity) > 1e-9:
        raise InvalidQuantity(f"quantity must have at most {QUANTITY_DECIMALS} decimal places")
    unit = (unit or "").strip()
    if not unit:
        raise InvalidUnit()
    return rounded, unit


def clean_notes(notes: str | None) -> str | None:
    if notes is None:
        return None
    return notes.strip() or None


def build_row(item: CompositionInput) -> CompositionRow:
    """Validate one requested row without touching storage."""
    if item.ingredient_id <= 0:
        raise IngredientNotFound()
    quantity, unit = clean_quantity_and_unit(item.quantity, item.unit)
    return CompositionRow(
        ingredient_id=item.ingredient_id,
        quantity=quantity,
        unit=unit,
        notes=clean_notes(item.notes),
    )


def validate_composition(
    items: Iterable[CompositionInput], ingredients: IngredientRepository
) -> list[CompositionRow]:
    """Validate a full composition; nothing is written."""
    rows = [build_row(item) for item in items]

    seen: set[int] = set()
    for row in rows:
        if row.ingredient_id in seen:
            raise RecipeIngredientExists()
        seen.add(row.ingredient_id)

    if seen and ingredients.existing_ids(seen) != seen:
        raise IngredientNotFound()
    return rows
