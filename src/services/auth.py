"""Registration, login and user lookup."""

import logging
from dataclasses import dataclass
from typing import Any

from src.repositories.protocols import UniqueViolation, UserRepository
from src.services.passwords import get_password_hash, verify_password
from src.shared.errors import (
    InvalidCredentials,
    InvalidInput,
    UserExists,
    UserNotFound,
    WeakPassword,
)
from src.shared.tokens import create_access_token

logger = logging.getLogger(__name__)

MIN_PASSWORD_BYTES = 6
CREDENTIALS_REQUIRED = "Email and password are required"


@dataclass
class AuthResult:
    """A freshly issued token and the user it was issued for."""

    token: str
    user: Any


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Credential lifecycle for the auth service."""

    def __init__(self, users: UserRepository):
        self.users = users

    def register(self, email: str, password: str) -> AuthResult:
        email = normalize_email(email)
        if not email or not password.strip():
            raise InvalidInput(CREDENTIALS_REQUIRED)
        # Minimum length counts UTF-8 bytes, not characters
        if len(password.encode("utf-8")) < MIN_PASSWORD_BYTES:
            raise WeakPassword()

        if self.users.email_exists(email):
            raise UserExists()

        try:
            user = self.users.create(email, get_password_hash(password))
        except UniqueViolation as e:
            # Lost a race with a concurrent registration for the same email
            raise UserExists() from e

        logger.info(f"Registered user {user.id}")
        return AuthResult(token=create_access_token(user.id, user.email), user=user)

    def login(self, email: str, password: str) -> AuthResult:
        email = normalize_email(email)
        if not email or not password:
            raise InvalidInput(CREDENTIALS_REQUIRED)

        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentials()

        return AuthResult(token=create_access_token(user.id, user.email), user=user)

    def get_user(self, user_id: int) -> Any:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFound()
        return user
