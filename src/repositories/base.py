"""Shared helpers for the SQLAlchemy repositories."""

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATEs
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a unique-key collision apart from other integrity errors."""
    orig = exc.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "pgcode", None) == PG_FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(orig)
