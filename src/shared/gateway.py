"""Gateway context protocol.

The API gateway verifies bearer tokens and forwards the caller's identity in
``X-User-Id`` and ``X-User-Email``. ``ExtractUserFromGatewayHeaders`` turns
those headers into a ``Principal`` on ``request.state``; handlers read it
through the ``get_principal`` dependency and never look at ``Authorization``.
"""

import logging
from dataclasses import dataclass

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from src.database import MAX_ID
from src.logging_config import bind_context
from src.shared.errors import ErrorKind, Unauthenticated, error_response
from src.shared.tokens import InvalidTokenError, verify_token

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"
USER_EMAIL_HEADER = "X-User-Email"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    user_id: int
    email: str


def parse_gateway_headers(user_id: str | None, email: str | None) -> Principal | None:
    """Build a principal from raw header values, or None if absent or malformed."""
    if not user_id or not user_id.strip():
        return None
    try:
        parsed = int(user_id.strip())
    except ValueError:
        logger.warning(f"Ignoring malformed {USER_ID_HEADER} header: {user_id!r}")
        return None
    if parsed <= 0:
        logger.warning(f"Ignoring non-positive {USER_ID_HEADER} header: {parsed}")
        return None
    if parsed > MAX_ID:
        logger.warning(f"Ignoring out-of-range {USER_ID_HEADER} header: {parsed}")
        return None
    return Principal(user_id=parsed, email=(email or "").strip())


class ExtractUserFromGatewayHeaders(BaseHTTPMiddleware):
    """Populate ``request.state.principal`` from gateway headers."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        principal = parse_gateway_headers(
            request.headers.get(USER_ID_HEADER), request.headers.get(USER_EMAIL_HEADER)
        )
        request.state.principal = principal
        if principal is not None:
            bind_context(user_id=principal.user_id)
            logger.debug(f"Principal {principal.user_id} extracted from gateway headers")
        return await call_next(request)


class LocalGatewayMiddleware(BaseHTTPMiddleware):
    """Emulate the gateway for local development.

    Client-supplied ``X-User-*`` headers are always dropped. A valid bearer
    token is rewritten into gateway headers; an invalid one is rejected with
    401. Requests without a token pass through anonymously.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        stripped = {USER_ID_HEADER.lower().encode(), USER_EMAIL_HEADER.lower().encode()}
        headers = [(k, v) for k, v in request.scope["headers"] if k not in stripped]

        authorization = request.headers.get("Authorization")
        if authorization:
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token.strip():
                return error_response(ErrorKind.UNAUTHENTICATED, "Invalid authorization format")
            try:
                claims = verify_token(token.strip())
            except InvalidTokenError as e:
                logger.warning(f"Rejected bearer token: {e}")
                return error_response(ErrorKind.UNAUTHENTICATED, "Invalid or expired token")
            headers.append((USER_ID_HEADER.lower().encode(), str(claims.user_id).encode()))
            headers.append((USER_EMAIL_HEADER.lower().encode(), claims.email.encode()))

        request.scope["headers"] = headers
        return await call_next(request)


def get_principal(request: Request) -> Principal:
    """Dependency returning the caller, or raising 401 if there is none."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise Unauthenticated()
    return principal
