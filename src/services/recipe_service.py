"""Recipe catalogue operations."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from src.repositories.protocols import (
    CategoryRepository,
    IngredientRepository,
    MissingReference,
    RecipeIngredientRepository,
    RecipeRepository,
)
from src.services.composition import CompositionInput, ensure_recipe_owner, validate_composition
from src.shared.errors import (
    CategoryNotFound,
    InvalidCategory,
    NameRequired,
    RecipeNotFound,
    Unauthenticated,
)

logger = logging.getLogger(__name__)

RECIPE_NAME_REQUIRED = "recipe name is required"


@dataclass
class RecipeDetail:
    """A recipe with its composition."""

    recipe: Any
    ingredients: list[Any]


class RecipeService:
    """Service for recipe reads and owner-only recipe mutations."""

    def __init__(
        self,
        recipes: RecipeRepository,
        categories: CategoryRepository,
        ingredients: IngredientRepository,
        compositions: RecipeIngredientRepository,
    ):
        self.recipes = recipes
        self.categories = categories
        self.ingredients = ingredients
        self.compositions = compositions

    # --- Reads ---

    def list_recipes(self, include_ingredients: bool = False) -> list[Any]:
        return self._with_ingredients(self.recipes.list_all(), include_ingredients)

    def get_recipe(self, recipe_id: int, include_ingredients: bool = False) -> Any:
        recipe = self.recipes.get(recipe_id) if recipe_id > 0 else None
        if recipe is None:
            raise RecipeNotFound()
        return self._with_ingredients([recipe], include_ingredients)[0]

    def list_by_category(self, category_id: int, include_ingredients: bool = False) -> list[Any]:
        if category_id <= 0:
            raise InvalidCategory()
        if not self.categories.exists(category_id):
            raise CategoryNotFound()
        recipes = self.recipes.list_by_category(category_id)
        return self._with_ingredients(recipes, include_ingredients)

    def search_by_ingredients(
        self, ingredient_ids: Sequence[int], include_ingredients: bool = False
    ) -> list[Any]:
        """Recipes that use every one of the given ingredients."""
        recipes = self.recipes.list_containing_all(ingredient_ids)
        return self._with_ingredients(recipes, include_ingredients)

    def list_categories(self) -> list[Any]:
        return self.categories.list_all()

    # --- Mutations ---

    def create_recipe(
        self,
        owner_user_id: int,
        name: str,
        description: str | None = None,
        category_id: int | None = None,
        ingredients: Sequence[CompositionInput] | None = None,
    ) -> Any:
        name = self._clean_name(name)
        if category_id is not None:
            self._check_category(category_id)
        rows = validate_composition(ingredients, self.ingredients) if ingredients else None

        try:
            recipe = self.recipes.create(
                name=name,
                description=_clean_description(description),
                category_id=category_id,
                owner_user_id=owner_user_id,
                ingredients=rows,
            )
        except MissingReference as e:
            # References were checked above, so the caller has no users row
            logger.warning(f"Rejected recipe from unknown user {owner_user_id}: {e}")
            raise Unauthenticated("Unknown user") from e
        logger.info(f"User {owner_user_id} created recipe {recipe.id}")
        return recipe

    def update_recipe(
        self,
        user_id: int,
        recipe_id: int,
        fields: dict[str, Any],
        ingredients: Sequence[CompositionInput] | None = None,
    ) -> Any:
        """Apply a partial update.

        ``fields`` holds only the attributes the caller sent. Passing
        ``ingredients`` replaces the composition in the same transaction.
        """
        ensure_recipe_owner(self.recipes, recipe_id, user_id)

        changes: dict[str, Any] = {}
        if "name" in fields:
            changes["name"] = self._clean_name(fields["name"])
        if "description" in fields:
            changes["description"] = _clean_description(fields["description"])
        if "category_id" in fields:
            if fields["category_id"] is not None:
                self._check_category(fields["category_id"])
            changes["category_id"] = fields["category_id"]
        rows = None
        if ingredients is not None:
            rows = validate_composition(ingredients, self.ingredients)

        recipe = self.recipes.update(recipe_id, changes, ingredients=rows)
        if recipe is None:
            raise RecipeNotFound()
        return recipe

    def delete_recipe(self, user_id: int, recipe_id: int) -> None:
        ensure_recipe_owner(self.recipes, recipe_id, user_id)
        if not self.recipes.delete(recipe_id):
            raise RecipeNotFound()
        logger.info(f"User {user_id} deleted recipe {recipe_id}")

    # --- Helpers ---

    def _clean_name(self, name: str | None) -> str:
        name = (name or "").strip()
        if not name:
            raise NameRequired(RECIPE_NAME_REQUIRED)
        return name

    def _check_category(self, category_id: int) -> None:
        if category_id <= 0:
            raise InvalidCategory()
        if not self.categories.exists(category_id):
            raise CategoryNotFound()

    def _with_ingredients(self, recipes: list[Any], include_ingredients: bool) -> list[Any]:
        if not include_ingredients:
            return recipes
        compositions = self.compositions.list_for_recipes(recipe.id for recipe in recipes)
        return [
            RecipeDetail(recipe=recipe, ingredients=compositions.get(recipe.id, []))
            for recipe in recipes
        ]


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip() or None
