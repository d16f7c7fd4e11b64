"""Ingredient persistence."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.ingredient import Ingredient
from src.models.recipe import RecipeIngredient
from src.repositories.base import is_unique_violation
from src.repositories.protocols import RowInUse, UniqueViolation


class SqlIngredientRepository:
    """Shared ingredient catalogue in ``recipe_catalogue.ingredients``."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Ingredient]:
        return (
            self.db.query(Ingredient)
            .order_by(Ingredient.category.asc().nulls_last(), Ingredient.name)
            .all()
        )

    def search(self, query: str) -> list[Ingredient]:
        return (
            self.db.query(Ingredient)
            .filter(Ingredient.name.icontains(query, autoescape=True))
            .order_by(Ingredient.name)
            .all()
        )

    def list_by_category(self, category: str) -> list[Ingredient]:
        return (
            self.db.query(Ingredient)
            .filter(Ingredient.category == category)
            .order_by(Ingredient.name)
            .all()
        )

    def get(self, ingredient_id: int) -> Ingredient | None:
        return self.db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()

    def existing_ids(self, ingredient_ids: Iterable[int]) -> set[int]:
        ids = set(ingredient_ids)
        if not ids:
            return set()
        rows = self.db.query(Ingredient.id).filter(Ingredient.id.in_(ids)).all()
        return {ingredient_id for (ingredient_id,) in rows}

    def is_referenced(self, ingredient_id: int) -> bool:
        return (
            self.db.query(RecipeIngredient.id)
            .filter(RecipeIngredient.ingredient_id == ingredient_id)
            .first()
            is not None
        )

    def create(self, name: str, description: str | None, category: str | None) -> Ingredient:
        ingredient = Ingredient(name=name, description=description, category=category)
        self.db.add(ingredient)
        self._commit()
        self.db.refresh(ingredient)
        return ingredient

    def update(self, ingredient_id: int, changes: dict[str, Any]) -> Ingredient | None:
        ingredient = self.get(ingredient_id)
        if ingredient is None:
            return None
        for field, value in changes.items():
            setattr(ingredient, field, value)
        self._commit()
        self.db.refresh(ingredient)
        return ingredient

    def delete(self, ingredient_id: int) -> bool:
        ingredient = self.get(ingredient_id)
        if ingredient is None:
            return False
        self.db.delete(ingredient)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A composition row was added after the caller checked references
            self.db.rollback()
            raise RowInUse("ingredients") from e
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise UniqueViolation("ingredients.name") from e
            raise
