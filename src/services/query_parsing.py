"""Parsing helpers for query-string parameters."""

from src.database import MAX_ID
from src.shared.errors import InvalidInput


def parse_ingredient_ids(raw: str | None) -> list[int]:
    """Parse a comma-separated list of positive ingredient IDs.

    Whitespace around tokens is ignored and empty tokens are skipped, so
    ``"1,,2"`` gives ``[1, 2]``. Any other malformed non-positive or out-of-range token, or
    a list with no IDs at all, is rejected.
    """
    if raw is None:
        raise InvalidInput("ingredient_ids parameter is required")

    ids: list[int] = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        if not (token.isascii() and token.isdigit()):
            raise InvalidInput(f"invalid ingredient ID: {token}")
        value = int(token)
        if value <= 0 or value > MAX_ID:
            raise InvalidInput(f"invalid ingredient ID: {token}")
        ids.append(value)

    if not ids:
        raise InvalidInput("at least one ingredient ID is required")
    return ids


def clean_text(value: str | None) -> str | None:
    """Trim a free-text filter, treating blank as absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None
