"""Grocery list aggregation across recipes."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from src.repositories.protocols import RecipeIngredientRepository, RecipeRepository

logger = logging.getLogger(__name__)

# Reported as total_quantity when recipes use different units for one ingredient
UNIT_CONFLICT = -1.0


@dataclass
class GroceryItem:
    """One ingredient to buy, summed over the selected recipes."""

    ingredient_id: int
    ingredient: Any
    total_quantity: float
    unit: str
    recipes: list[str] = field(default_factory=list)
    unit_conflict: bool = False

    def add(self, quantity: float, unit: str, recipe_name: str) -> None:
        self.recipes.append(recipe_name)
        if self.unit_conflict:
            return
        if unit == self.unit:
            self.total_quantity = round(self.total_quantity + quantity, 2)
        else:
            self.unit_conflict = True
            self.total_quantity = UNIT_CONFLICT


def aggregate_grocery_items(contributions: Iterable[tuple[str, Any]]) -> list[GroceryItem]:
    """Merge ``(recipe_name, recipe_ingredient)`` pairs into grocery items.

    Quantities of the same ingredient are added when the unit matches
    exactly; any mismatch turns the item into a unit conflict for good.
    Items come out in the order their ingredient was first seen.
    """
    items: dict[int, GroceryItem] = {}
    for recipe_name, row in contributions:
        item = items.get(row.ingredient_id)
        if item is None:
            items[row.ingredient_id] = GroceryItem(
                ingredient_id=row.ingredient_id,
                ingredient=row.ingredient,
                total_quantity=row.quantity,
                unit=row.unit,
                recipes=[recipe_name],
            )
        else:
            item.add(row.quantity, row.unit, recipe_name)
    return list(items.values())


class GroceryService:
    """Builds grocery lists from recipe compositions."""

    def __init__(self, recipes: RecipeRepository, compositions: RecipeIngredientRepository):
        self.recipes = recipes
        self.compositions = compositions

    def generate(self, recipe_ids: Sequence[int]) -> list[GroceryItem]:
        """Aggregate the ingredients of the given recipes.

        Unknown recipe IDs contribute nothing and repeated IDs count once.
        """
        ordered_ids = list(dict.fromkeys(recipe_ids))
        if not ordered_ids:
            return []

        names = self.recipes.get_names(ordered_ids)
        compositions = self.compositions.list_for_recipes(names.keys())
        missing = [recipe_id for recipe_id in ordered_ids if recipe_id not in names]
        if missing:
            logger.info(f"Grocery list skipped unknown recipes {missing}")

        contributions = (
            (names[recipe_id], row)
            for recipe_id in ordered_ids
            if recipe_id in names
            for row in compositions.get(recipe_id, [])
        )
        return aggregate_grocery_items(contributions)
