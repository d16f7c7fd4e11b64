"""Logging setup with request correlation, built on Loguru.

Modules keep using ``logging.getLogger(__name__)``; ``InterceptHandler``
forwards those records to Loguru. Every line emitted while a request is in
flight carries the service name plus whatever was bound with
``bind_context`` (request ID and, when the gateway supplied one, user ID).
``LOG_FORMAT=json`` writes one JSON object per line; ``text`` is meant for
local development.
"""

import logging
import sys
import traceback
from contextvars import ContextVar
from typing import Any

import orjson
from loguru import logger

from src.config import get_settings

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_service_name = "meal-prep"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "sqlalchemy.engine", "httpx")


class InterceptHandler(logging.Handler):
    """Route standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the frame that made the logging call
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def bind_context(**values: Any) -> None:
    """Add key/value pairs to every log line of the current request."""
    current = _log_context.get().copy()
    current.update(values)
    _log_context.set(current)


def clear_context() -> None:
    _log_context.set({})


def get_context() -> dict[str, Any]:
    return _log_context.get().copy()


def format_json(record: dict[str, Any]) -> str:
    """Loguru format function producing one JSON object per line."""
    payload = {
        "time": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "msg": record["message"],
        "service": _service_name,
        **_log_context.get(),
    }
    payload.update((k, v) for k, v in record["extra"].items() if k != "serialized")

    exception = record["exception"]
    if exception:
        payload["exception"] = "".join(
            traceback.format_exception(exception.type, exception.value, exception.traceback)
        )

    record["extra"]["serialized"] = orjson.dumps(payload, default=str).decode()
    return "{extra[serialized]}\n"


def format_text(record: dict[str, Any]) -> str:
    """Loguru format function for human-readable development output."""
    context = " ".join(f"{k}={v}" for k, v in {**_log_context.get(), **record["extra"]}.items())
    # The result is itself a format template
    context = context.replace("{", "{{").replace("}", "}}").replace("<", r"\<")
    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
        f"[{_service_name}] <cyan>{{name}}</cyan> {context} - <level>{{message}}</level>\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def configure_logging(service_name: str) -> None:
    """Install the Loguru sink honouring LOG_LEVEL and LOG_FORMAT."""
    global _service_name
    _service_name = service_name
    settings = get_settings()

    logger.remove()
    if settings.log_format == "text":
        logger.add(sys.stdout, format=format_text, level=settings.log_level.upper(), colorize=True)
    else:
        logger.add(
            sys.stdout,
            format=format_json,
            level=settings.log_level.upper(),
            colorize=False,
            diagnose=False,
        )

    # Factories may run more than once per process (tests); force replaces the handler
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
