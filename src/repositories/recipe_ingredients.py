"""Recipe composition persistence."""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from src.models.recipe import Recipe, RecipeIngredient
from src.repositories.base import is_unique_violation
from src.repositories.protocols import CompositionRow, UniqueViolation

logger = logging.getLogger(__name__)


class SqlRecipeIngredientRepository:
    """Rows of ``recipe_catalogue.recipe_ingredients`` with the ingredient joined."""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, recipe_id: int, ingredient_id: int) -> RecipeIngredient | None:
        return (
            self.db.query(RecipeIngredient)
            .options(joinedload(RecipeIngredient.ingredient))
            .filter(
                RecipeIngredient.recipe_id == recipe_id,
                RecipeIngredient.ingredient_id == ingredient_id,
            )
            .first()
        )

    def list_for_recipes(self, recipe_ids: Iterable[int]) -> dict[int, list[RecipeIngredient]]:
        ids = set(recipe_ids)
        if not ids:
            return {}
        rows = (
            self.db.query(RecipeIngredient)
            .options(joinedload(RecipeIngredient.ingredient))
            .filter(RecipeIngredient.recipe_id.in_(ids))
            .order_by(RecipeIngredient.recipe_id, RecipeIngredient.id)
            .all()
        )
        by_recipe: dict[int, list[RecipeIngredient]] = defaultdict(list)
        for row in rows:
            by_recipe[row.recipe_id].append(row)
        return dict(by_recipe)

    def exists(self, recipe_id: int, ingredient_id: int) -> bool:
        return (
            self.db.query(RecipeIngredient.id)
            .filter(
                RecipeIngredient.recipe_id == recipe_id,
                RecipeIngredient.ingredient_id == ingredient_id,
            )
            .first()
            is not None
        )

    def add(self, recipe_id: int, row: CompositionRow) -> RecipeIngredient:
        recipe_ingredient = RecipeIngredient(
            recipe_id=recipe_id,
            ingredient_id=row.ingredient_id,
            quantity=row.quantity,
            unit=row.unit,
            notes=row.notes,
        )
        self.db.add(recipe_ingredient)
        try:
            self.db.flush()
            self._touch_recipe(recipe_id)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise UniqueViolation("recipe_ingredients_unique_per_recipe") from e
            raise
        return self._get(recipe_id, row.ingredient_id)

    def update(
        self, recipe_id: int, ingredient_id: int, quantity: float, unit: str, notes: str | None
    ) -> RecipeIngredient | None:
        recipe_ingredient = self._get(recipe_id, ingredient_id)
        if recipe_ingredient is None:
            return None
        recipe_ingredient.quantity = quantity
        recipe_ingredient.unit = unit
        recipe_ingredient.notes = notes
        self._touch_recipe(recipe_id)
        self.db.commit()
        return self._get(recipe_id, ingredient_id)

    def remove(self, recipe_id: int, ingredient_id: int) -> bool:
        deleted = (
            self.db.query(RecipeIngredient)
            .filter(
                RecipeIngredient.recipe_id == recipe_id,
                RecipeIngredient.ingredient_id == ingredient_id,
            )
            .delete(synchronize_session=False)
        )
        if deleted:
            self._touch_recipe(recipe_id)
        self.db.commit()
        return bool(deleted)

    def replace(self, recipe_id: int, rows: Sequence[CompositionRow]) -> None:
        """Swap the whole composition of a recipe in one transaction."""
        try:
            self.db.query(RecipeIngredient).filter(
                RecipeIngredient.recipe_id == recipe_id
            ).delete(synchronize_session=False)
            for row in rows:
                self.db.add(
                    RecipeIngredient(
                        recipe_id=recipe_id,
                        ingredient_id=row.ingredient_id,
                        quantity=row.quantity,
                        unit=row.unit,
                        notes=row.notes,
                    )
                )
            self.db.flush()
            self._touch_recipe(recipe_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(f"Replacing ingredients of recipe {recipe_id} failed, rolled back")
            raise
        logger.info(f"Replaced ingredients of recipe {recipe_id} ({len(rows)} rows)")

    def _touch_recipe(self, recipe_id: int) -> None:
        self.db.query(Recipe).filter(Recipe.id == recipe_id).update(
            {Recipe.updated_at: func.now()}, synchronize_session=False
        )
