"""Category model."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import CATALOGUE_SCHEMA, Base
from src.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Recipe category (Meat, Fish, Desserts, ...)."""

    __tablename__ = "categories"
    __table_args__ = {"schema": CATALOGUE_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    recipes = relationship("Recipe", back_populates="category")
