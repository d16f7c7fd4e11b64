"""Ingredient model."""

from sqlalchemy import CheckConstraint, Column, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import CATALOGUE_SCHEMA, Base
from src.models.mixins import TimestampMixin


class Ingredient(Base, TimestampMixin):
    """Shared catalogue ingredient. The category is a free-text label."""

    __tablename__ = "ingredients"
    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ingredients_name_not_empty"),
        {"schema": CATALOGUE_SCHEMA},
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True, index=True)

    # Relationships
    recipe_ingredients = relationship(
        "RecipeIngredient", back_populates="ingredient", passive_deletes="all"
    )
