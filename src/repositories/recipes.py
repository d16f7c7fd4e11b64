"""Recipe persistence."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from src.models.recipe import Recipe, RecipeIngredient
from src.repositories.base import is_foreign_key_violation
from src.repositories.protocols import CompositionRow, MissingReference

logger = logging.getLogger(__name__)


class SqlRecipeRepository:
    """Recipes in ``recipe_catalogue.recipes``.

    ``create`` and ``update`` optionally write the composition in the same
    transaction as the recipe row.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Recipe).options(joinedload(Recipe.category))

    def list_all(self) -> list[Recipe]:
        return self._query().order_by(Recipe.name, Recipe.id).all()

    def get(self, recipe_id: int) -> Recipe | None:
        return self._query().filter(Recipe.id == recipe_id).first()

    def get_owner_id(self, recipe_id: int) -> int | None:
        return (
            self.db.query(Recipe.owner_user_id).filter(Recipe.id == recipe_id).scalar()
        )

    def get_names(self, recipe_ids: Iterable[int]) -> dict[int, str]:
        ids = set(recipe_ids)
        if not ids:
            return {}
        rows = self.db.query(Recipe.id, Recipe.name).filter(Recipe.id.in_(ids)).all()
        return {recipe_id: name for recipe_id, name in rows}

    def list_by_category(self, category_id: int) -> list[Recipe]:
        return (
            self._query()
            .filter(Recipe.category_id == category_id)
            .order_by(Recipe.name, Recipe.id)
            .all()
        )

    def list_using_ingredient(self, ingredient_id: int) -> list[Recipe]:
        return (
            self._query()
            .join(RecipeIngredient, RecipeIngredient.recipe_id == Recipe.id)
            .filter(RecipeIngredient.ingredient_id == ingredient_id)
            .order_by(Recipe.name, Recipe.id)
            .all()
        )

    def list_containing_all(self, ingredient_ids: Sequence[int]) -> list[Recipe]:
        """Recipes whose composition includes every one of ``ingredient_ids``."""
        wanted = set(ingredient_ids)
        if not wanted:
            return []
        matching = (
            select(RecipeIngredient.recipe_id)
            .where(RecipeIngredient.ingredient_id.in_(wanted))
            .group_by(RecipeIngredient.recipe_id)
            .having(func.count(RecipeIngredient.ingredient_id.distinct()) == len(wanted))
        )
        return (
            self._query().filter(Recipe.id.in_(matching)).order_by(Recipe.name, Recipe.id).all()
        )

    def create(
        self,
        name: str,
        description: str | None,
        category_id: int | None,
        owner_user_id: int,
        ingredients: Sequence[CompositionRow] | None = None,
    ) -> Recipe:
        recipe = Recipe(
            name=name,
            description=description,
            category_id=category_id,
            owner_user_id=owner_user_id,
        )
        self.db.add(recipe)
        try:
            if ingredients:
                self.db.flush()
                self._add_rows(recipe.id, ingredients)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_foreign_key_violation(e):
                raise MissingReference(f"recipe owner {owner_user_id} or a referenced row") from e
            raise
        except Exception:
            self.db.rollback()
            raise
        return self.get(recipe.id)

    def update(
        self,
        recipe_id: int,
        changes: dict[str, Any],
        ingredients: Sequence[CompositionRow] | None = None,
    ) -> Recipe | None:
        recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if recipe is None:
            return None
        for field, value in changes.items():
            setattr(recipe, field, value)
        try:
            if ingredients is not None:
                self.db.query(RecipeIngredient).filter(
                    RecipeIngredient.recipe_id == recipe_id
                ).delete(synchronize_session=False)
                self._add_rows(recipe_id, ingredients)
            if ingredients is not None and not changes:
                # Composition-only edits still count as a change to the recipe
                recipe.updated_at = func.now()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.get(recipe_id)

    def delete(self, recipe_id: int) -> bool:
        deleted = self.db.query(Recipe).filter(Recipe.id == recipe_id).delete(
            synchronize_session=False
        )
        self.db.commit()
        if deleted:
            logger.info(f"Deleted recipe {recipe_id}")
        return bool(deleted)

    def _add_rows(self, recipe_id: int, rows: Sequence[CompositionRow]) -> None:
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
