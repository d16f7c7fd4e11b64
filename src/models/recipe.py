"""Recipe and RecipeIngredient models."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from src.database import AUTH_SCHEMA, CATALOGUE_SCHEMA, Base
from src.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe owned by the user who created it."""

    __tablename__ = "recipes"
    __table_args__ = {"schema": CATALOGUE_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(
        Integer,
        ForeignKey(f"{CATALOGUE_SCHEMA}.categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # Set once at creation, never updated
    owner_user_id = Column(
        Integer, ForeignKey(f"{AUTH_SCHEMA}.users.id"), nullable=False, index=True
    )

    # Relationships
    category = relationship("Category", back_populates="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RecipeIngredient.id",
    )


class RecipeIngredient(Base, TimestampMixin):
    """Quantity and unit of one ingredient within a recipe."""

    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        UniqueConstraint("recipe_id", "ingredient_id", name="recipe_ingredients_unique_per_recipe"),
        CheckConstraint("quantity > 0", name="recipe_ingredients_quantity_positive"),
        CheckConstraint("length(trim(unit)) > 0", name="recipe_ingredients_unit_not_blank"),
        {"schema": CATALOGUE_SCHEMA},
    )

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer,
        ForeignKey(f"{CATALOGUE_SCHEMA}.recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ingredient_id = Column(
        Integer,
        ForeignKey(f"{CATALOGUE_SCHEMA}.ingredients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quantity = Column(Numeric(8, 2, asdecimal=False), nullable=False)
    unit = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient", back_populates="recipe_ingredients", lazy="joined")
