"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import AUTH_SCHEMA, Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Registered account; email is stored lower-cased."""

    __tablename__ = "users"
    __table_args__ = {"schema": AUTH_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
