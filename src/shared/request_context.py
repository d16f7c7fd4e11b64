"""Request ID propagation and access logging."""

import uuid
from time import perf_counter

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from src.logging_config import bind_context, clear_context

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log its start and completion.

    An incoming ``X-Request-ID`` is reused, otherwise one is generated. The
    ID is echoed on the response and bound to the logging context.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        clear_context()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_context(request_id=request_id)

        logger.bind(method=request.method, path=request.url.path).info("Incoming request")
        started = perf_counter()

        response = await call_next(request)

        duration_ms = round((perf_counter() - started) * 1000, 2)
        fields = {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": duration_ms,
        }
        # Extraction runs further in, so the principal is only visible on request.state here
        principal = getattr(request.state, "principal", None)
        if principal is not None:
            fields["user_id"] = principal.user_id

        if response.status_code >= 500:
            level = "ERROR"
        elif response.status_code >= 400:
            level = "WARNING"
        else:
            level = "INFO"
        logger.bind(**fields).log(level, "Request completed")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
