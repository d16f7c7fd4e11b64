"""FastAPI dependencies for the principal, database and services."""

from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.orm import Session

from src.database import MAX_ID, get_db
from src.repositories.categories import SqlCategoryRepository
from src.repositories.ingredients import SqlIngredientRepository
from src.repositories.recipe_ingredients import SqlRecipeIngredientRepository
from src.repositories.recipes import SqlRecipeRepository
from src.repositories.users import SqlUserRepository
from src.services.auth import AuthService
from src.services.grocery_service import GroceryService
from src.services.ingredient_service import IngredientService
from src.services.recipe_service import RecipeService
from src.shared.gateway import Principal, get_principal

CurrentPrincipal = Annotated[Principal, Depends(get_principal)]

# Path IDs outside the INTEGER key range are rejected as invalid input
PathId = Annotated[int, Path(gt=0, le=MAX_ID)]


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(SqlUserRepository(db))


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(
        SqlRecipeRepository(db),
        SqlCategoryRepository(db),
        SqlIngredientRepository(db),
        SqlRecipeIngredientRepository(db),
    )


def get_ingredient_service(
    db: Annotated[Session, Depends(get_db)],
) -> IngredientService:
    """Get ingredient service with dependencies."""
    return IngredientService(
        SqlIngredientRepository(db),
        SqlRecipeRepository(db),
        SqlRecipeIngredientRepository(db),
    )


def get_grocery_service(
    db: Annotated[Session, Depends(get_db)],
) -> GroceryService:
    """Get grocery service with dependencies."""
    return GroceryService(SqlRecipeRepository(db), SqlRecipeIngredientRepository(db))
