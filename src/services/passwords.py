"""Password hashing with a bounded number of concurrent bcrypt calls."""

import threading

from passlib.context import CryptContext

from src.config import get_settings

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)

# bcrypt is CPU-bound; cap how many worker threads it may occupy at once
_hash_slots = threading.BoundedSemaphore(settings.password_hash_concurrency)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    with _hash_slots:
        return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    with _hash_slots:
        return pwd_context.verify(plain_password, hashed_password)
