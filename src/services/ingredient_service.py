"""Ingredient catalogue and recipe composition operations."""

import logging
from collections.abc import Sequence
from typing import Any

from src.repositories.protocols import (
    IngredientRepository,
    RecipeIngredientRepository,
    RecipeRepository,
    RowInUse,
    UniqueViolation,
)
from src.services.composition import (
    CompositionInput,
    build_row,
    clean_notes,
    clean_quantity_and_unit,
    ensure_recipe_owner,
    validate_composition,
)
from src.services.query_parsing import clean_text
from src.shared.errors import (
    CannotDeleteIngredient,
    IngredientExists,
    IngredientNotFound,
    NameRequired,
    RecipeIngredientExists,
    RecipeIngredientNotFound,
    RecipeNotFound,
)

logger = logging.getLogger(__name__)

INGREDIENT_NAME_REQUIRED = "ingredient name is required"


class IngredientService:
    """Service for the shared ingredient catalogue and recipe compositions.

    Catalogue mutations are open to any authenticated caller; composition
    mutations are limited to the owner of the recipe.
    """

    def __init__(
        self,
        ingredients: IngredientRepository,
        recipes: RecipeRepository,
        compositions: RecipeIngredientRepository,
    ):
        self.ingredients = ingredients
        self.recipes = recipes
        self.compositions = compositions

    # --- Catalogue ---

    def list_ingredients(self, search: str | None = None, category: str | None = None) -> list[Any]:
        """List ingredients, filtered by name substring or exact category.

        ``search`` takes precedence when both are given.
        """
        search = clean_text(search)
        category = clean_text(category)
        if search:
            return self.ingredients.search(search)
        if category:
            return self.ingredients.list_by_category(category)
        return self.ingredients.list_all()

    def get_ingredient(self, ingredient_id: int) -> Any:
        ingredient = self.ingredients.get(ingredient_id) if ingredient_id > 0 else None
        if ingredient is None:
            raise IngredientNotFound()
        return ingredient

    def recipes_using(self, ingredient_id: int) -> list[Any]:
        self.get_ingredient(ingredient_id)
        return self.recipes.list_using_ingredient(ingredient_id)

    def create_ingredient(
        self, name: str, description: str | None = None, category: str | None = None
    ) -> Any:
        name = _clean_name(name)
        try:
            ingredient = self.ingredients.create(
                name, clean_text(description), clean_text(category)
            )
        except UniqueViolation as e:
            raise IngredientExists() from e
        logger.info(f"Created ingredient {ingredient.id} ({ingredient.name})")
        return ingredient

    def update_ingredient(self, ingredient_id: int, fields: dict[str, Any]) -> Any:
        """Apply a partial update; ``fields`` holds only what the caller sent."""
        self.get_ingredient(ingredient_id)

        changes: dict[str, Any] = {}
        if "name" in fields:
            changes["name"] = _clean_name(fields["name"])
        if "description" in fields:
            changes["description"] = clean_text(fields["description"])
        if "category" in fields:
            changes["category"] = clean_text(fields["category"])

        try:
            ingredient = self.ingredients.update(ingredient_id, changes)
        except UniqueViolation as e:
            raise IngredientExists() from e
        if ingredient is None:
            raise IngredientNotFound()
        return ingredient

    def delete_ingredient(self, ingredient_id: int) -> None:
        self.get_ingredient(ingredient_id)
        if self.ingredients.is_referenced(ingredient_id):
            raise CannotDeleteIngredient()
        try:
            deleted = self.ingredients.delete(ingredient_id)
        except RowInUse as e:
            raise CannotDeleteIngredient() from e
        if not deleted:
            raise IngredientNotFound()
        logger.info(f"Deleted ingredient {ingredient_id}")

    # --- Composition ---

    def get_recipe_ingredients(self, recipe_id: int) -> list[Any]:
        if recipe_id <= 0 or self.recipes.get_owner_id(recipe_id) is None:
            raise RecipeNotFound()
        return self.compositions.list_for_recipes([recipe_id]).get(recipe_id, [])

    def add_recipe_ingredient(self, user_id: int, recipe_id: int, item: CompositionInput) -> Any:
        ensure_recipe_owner(self.recipes, recipe_id, user_id)
        row = build_row(item)
        if self.ingredients.get(row.ingredient_id) is None:
            raise IngredientNotFound()
        if self.compositions.exists(recipe_id, row.ingredient_id):
            raise RecipeIngredientExists()
        try:
            return self.compositions.add(recipe_id, row)
        except UniqueViolation as e:
            raise RecipeIngredientExists() from e

    def update_recipe_ingredient(
        self,
        user_id: int,
        recipe_id: int,
        ingredient_id: int,
        quantity: float,
        unit: str,
        notes: str | None = None,
    ) -> Any:
        ensure_recipe_owner(self.recipes, recipe_id, user_id)
        if ingredient_id <= 0:
            raise IngredientNotFound()
        quantity, unit = clean_quantity_and_unit(quantity, unit)
        updated = self.compositions.update(
            recipe_id, ingredient_id, quantity, unit, clean_notes(notes)
        )
        if updated is None:
            raise RecipeIngredientNotFound()
        return updated

    def remove_recipe_ingredient(self, user_id: int, recipe_id: int, ingredient_id: int) -> None:
        ensure_recipe_owner(self.recipes, recipe_id, user_id)
        if ingredient_id <= 0 or not self.compositions.remove(recipe_id, ingredient_id):
            raise RecipeIngredientNotFound()

    def set_recipe_ingredients(
        self, user_id: int, recipe_id: int, items: Sequence[CompositionInput]
    ) -> list[Any]:
        """Replace a recipe's whole composition.

        Every row is validated before anything is written; the delete and
        the inserts happen in one transaction.
        """
        ensure_recipe_owner(self.recipes, recipe_id, user_id)
        rows = validate_composition(items, self.ingredients)
        self.compositions.replace(recipe_id, rows)
        return self.compositions.list_for_recipes([recipe_id]).get(recipe_id, [])


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise NameRequired(INGREDIENT_NAME_REQUIRED)
    return name
