"""Bearer token issue and verification (HS256 JWT)."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from src.config import Settings, get_settings
from src.database import MAX_ID

ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=24)


class MissingSecretError(RuntimeError):
    """Raised when a process needs JWT_SECRET and it is not configured."""


class InvalidTokenError(Exception):
    """Raised when a token fails signature, algorithm or claim checks."""


@dataclass(frozen=True)
class TokenClaims:
    """Verified token payload."""

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


def require_secret(settings: Settings | None = None) -> str:
    """Return JWT_SECRET or fail if it is unset or blank."""
    settings = settings or get_settings()
    if not settings.jwt_secret or not settings.jwt_secret.strip():
        raise MissingSecretError("JWT_SECRET environment variable is required")
    return settings.jwt_secret


def create_access_token(
    user_id: int,
    email: str,
    *,
    issued_at: datetime | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a signed access token valid for 24 hours from ``issued_at``."""
    settings = settings or get_settings()
    secret = require_secret(settings)
    now = issued_at or datetime.now(UTC)
    iat = int(now.timestamp())
    to_encode = {
        "user_id": user_id,
        "email": email,
        "sub": str(user_id),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": iat,
        "nbf": iat,
        "exp": iat + int(TOKEN_TTL.total_seconds()),
    }
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def verify_token(token: str, settings: Settings | None = None) -> TokenClaims:
    """Verify signature, algorithm, issuer, audience and time claims."""
    settings = settings or get_settings()
    secret = require_secret(settings)

    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise InvalidTokenError("malformed token") from e
    if header.get("alg") != ALGORITHM:
        raise InvalidTokenError(f"unexpected signing method: {header.get('alg')}")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={
                "require_iat": True,
                "require_exp": True,
                "require_nbf": True,
                "require_sub": True,
                "leeway": 0,
            },
        )
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    user_id = payload.get("user_id")
    email = payload.get("email")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not 0 < user_id <= MAX_ID:
        raise InvalidTokenError("invalid user_id claim")
    if not isinstance(email, str) or not email:
        raise InvalidTokenError("invalid email claim")
    if payload["sub"] != str(user_id):
        raise InvalidTokenError("subject does not match user_id")

    return TokenClaims(
        user_id=user_id,
        email=email,
        issued_at=datetime.fromtimestamp(payload["iat"], UTC),
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )
