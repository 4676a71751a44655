"""Structured logging for the Hereoz API."""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.stdlib import LoggerFactory

from .config import settings


def _renderer():
    if settings.environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging() -> None:
    """Route structlog through stdlib logging at `settings.log_level`.

    Production emits one JSON object per line; other environments use the
    console renderer.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    # SQL echo only when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if level == logging.DEBUG else logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(**values: Any) -> None:
    """Attach values (request id, user id) to every log line of the current request."""
    structlog.contextvars.bind_contextvars(**{key: str(value) for key, value in values.items()})


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


class PerformanceLogger:
    """Times service calls made from the routers."""

    def __init__(self, logger_name: str = "performance", slow_threshold_seconds: Optional[float] = None):
        self.logger = get_logger(logger_name)
        self.slow_threshold_seconds = (
            settings.slow_operation_seconds if slow_threshold_seconds is None else slow_threshold_seconds
        )

    @contextmanager
    def log_operation_time(self, operation: str, **context: Any) -> Iterator[None]:
        """Log how long the wrapped block took.

        Failures are logged with their type and re-raised. Blocks slower
        than the threshold are logged as warnings.
        """
        start_time = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.logger.warning(
                "Operation failed",
                operation=operation,
                duration_seconds=round(time.perf_counter() - start_time, 3),
                error_type=type(e).__name__,
                **context
            )
            raise

        duration = round(time.perf_counter() - start_time, 3)
        if duration >= self.slow_threshold_seconds:
            self.logger.warning("Slow operation", operation=operation, duration_seconds=duration, **context)
        else:
            self.logger.debug("Operation completed", operation=operation, duration_seconds=duration, **context)


class ErrorLogger:
    """Logs errors that reach the exception handlers."""

    def __init__(self, logger_name: str = "error"):
        self.logger = get_logger(logger_name)

    def log_unhandled(self, error: Exception, method: str, path: str) -> None:
        self.logger.error(
            "Unhandled error",
            method=method,
            path=path,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
        )

    def log_validation_error(self, field: str, value: Any, error_message: str, **context: Any) -> None:
        self.logger.info(
            "Request validation failed",
            field=field,
            value=str(value)[:100],
            error_message=error_message,
            **context
        )


performance_logger = PerformanceLogger()
error_logger = ErrorLogger()
