"""Domain errors and the JSON error envelope.

Services raise ``DomainError`` subclasses; the handlers registered by
``register_exception_handlers`` turn them into::

    {"error": "<kind>", "code": <status>, "message": "<text>"}

The HTTP status is a property of the error kind, never of the message.
"""

import logging
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorKind(str, Enum):
    """Closed set of failure categories exposed to clients."""

    INVALID_INPUT = "invalid_input"
    WEAK_PASSWORD = "weak_password"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVARIANT = "invariant_violation"
    INTERNAL = "internal"


KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVARIANT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class DomainError(Exception):
    """Base class for errors that map onto the error envelope."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return KIND_STATUS[self.kind]


# --- Invalid input ---


class InvalidInput(DomainError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid input"


class WeakPassword(DomainError):
    kind = ErrorKind.WEAK_PASSWORD
    default_message = "password must be at least 6 characters"


# --- Authentication and authorization ---


class InvalidCredentials(DomainError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "invalid email or password"


class Unauthenticated(DomainError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required"


class Forbidden(DomainError):
    kind = ErrorKind.FORBIDDEN
    default_message = "you do not have permission to modify this recipe"


# --- Missing entities ---


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "not found"


class UserNotFound(NotFound):
    default_message = "user not found"


class RecipeNotFound(NotFound):
    default_message = "recipe not found"


class IngredientNotFound(NotFound):
    default_message = "ingredient not found"


class CategoryNotFound(NotFound):
    default_message = "category not found"


class RecipeIngredientNotFound(NotFound):
    default_message = "ingredient not found in recipe"


# --- Conflicts ---


class Conflict(DomainError):
    kind = ErrorKind.CONFLICT
    default_message = "conflict"


class UserExists(Conflict):
    default_message = "user with this email already exists"


class IngredientExists(Conflict):
    default_message = "ingredient with this name already exists"


class RecipeIngredientExists(Conflict):
    default_message = "ingredient already added to this recipe"


class CannotDeleteIngredient(Conflict):
    default_message = "cannot delete ingredient - it is used in recipes"


# --- Row invariants ---


class InvariantViolation(DomainError):
    kind = ErrorKind.INVARIANT
    default_message = "invalid value"


class NameRequired(InvariantViolation):
    default_message = "name is required"


class InvalidCategory(InvariantViolation):
    default_message = "invalid category ID"


class InvalidQuantity(InvariantViolation):
    default_message = "quantity must be greater than 0"


class InvalidUnit(InvariantViolation):
    default_message = "unit is required"


def error_response(kind: ErrorKind, message: str, status_code: int | None = None) -> JSONResponse:
    """Build the JSON error envelope."""
    code = status_code if status_code is not None else KIND_STATUS[kind]
    return JSONResponse(
        status_code=code,
        content={"error": kind.value, "code": code, "message": message},
    )


# Framework-raised HTTP errors (unknown route, wrong method, ...)
HTTP_STATUS_KIND: dict[int, ErrorKind] = {
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorKind.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorKind.CONFLICT,
}


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code in HTTP_STATUS_KIND:
        return HTTP_STATUS_KIND[status_code]
    return ErrorKind.INVALID_INPUT if status_code < 500 else ErrorKind.INTERNAL


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON"
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if first.get("type") == "missing" and location:
        return f"{location[-1]} is required"
    if location:
        return f"{'.'.join(location)}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid input")


def register_exception_handlers(app: FastAPI) -> None:
    """Register the envelope-producing exception handlers on an app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            logger.error(f"Internal error on {request.method} {request.url.path}: {exc.message}")
            return error_response(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE)
        return error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(ErrorKind.INVALID_INPUT, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        kind = _kind_for_status(exc.status_code)
        message = exc.detail if isinstance(exc.detail, str) else kind.value
        response = error_response(kind, message, exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE)
