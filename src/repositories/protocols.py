"""Repository capability sets used by the domain services.

Services depend on these protocols rather than on SQLAlchemy, so tests can
substitute in-memory implementations. Absent rows come back as ``None`` (or
``False`` for deletes); unique-key collisions raise ``UniqueViolation`` and
dangling foreign keys raise ``MissingReference``.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol


class UniqueViolation(Exception):
    """A write collided with a unique constraint."""


class RowInUse(Exception):
    """A delete was blocked by rows that still reference the target."""


class MissingReference(Exception):
    """A write pointed at a row that does not exist."""


@dataclass(frozen=True)
class CompositionRow:
    """Validated values for one recipe ingredient row."""

    ingredient_id: int
    quantity: float
    unit: str
    notes: str | None = None


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Any | None: ...

    def get_by_email(self, email: str) -> Any | None: ...

    def email_exists(self, email: str) -> bool: ...

    def create(self, email: str, password_hash: str) -> Any: ...


class CategoryRepository(Protocol):
    def list_all(self) -> list[Any]: ...

    def exists(self, category_id: int) -> bool: ...


class RecipeRepository(Protocol):
    def list_all(self) -> list[Any]: ...

    def get(self, recipe_id: int) -> Any | None: ...

    def get_owner_id(self, recipe_id: int) -> int | None: ...

    def get_names(self, recipe_ids: Iterable[int]) -> dict[int, str]: ...

    def list_by_category(self, category_id: int) -> list[Any]: ...

    def list_using_ingredient(self, ingredient_id: int) -> list[Any]: ...

    def list_containing_all(self, ingredient_ids: Sequence[int]) -> list[Any]: ...

    def create(
        self,
        name: str,
        description: str | None,
        category_id: int | None,
        owner_user_id: int,
        ingredients: Sequence[CompositionRow] | None = None,
    ) -> Any: ...

    def update(
        self,
        recipe_id: int,
        changes: dict[str, Any],
        ingredients: Sequence[CompositionRow] | None = None,
    ) -> Any | None: ...

    def delete(self, recipe_id: int) -> bool: ...


class IngredientRepository(Protocol):
    def list_all(self) -> list[Any]: ...

    def search(self, query: str) -> list[Any]: ...

    def list_by_category(self, category: str) -> list[Any]: ...

    def get(self, ingredient_id: int) -> Any | None: ...

    def existing_ids(self, ingredient_ids: Iterable[int]) -> set[int]: ...

    def is_referenced(self, ingredient_id: int) -> bool: ...

    def create(self, name: str, description: str | None, category: str | None) -> Any: ...

    def update(self, ingredient_id: int, changes: dict[str, Any]) -> Any | None: ...

    def delete(self, ingredient_id: int) -> bool: ...


class RecipeIngredientRepository(Protocol):
    def list_for_recipes(self, recipe_ids: Iterable[int]) -> dict[int, list[Any]]: ...

    def exists(self, recipe_id: int, ingredient_id: int) -> bool: ...

    def add(self, recipe_id: int, row: CompositionRow) -> Any: ...

    def update(
        self, recipe_id: int, ingredient_id: int, quantity: float, unit: str, notes: str | None
    ) -> Any | None: ...

    def remove(self, recipe_id: int, ingredient_id: int) -> bool: ...

    def replace(self, recipe_id: int, rows: Sequence[CompositionRow]) -> None: ...
