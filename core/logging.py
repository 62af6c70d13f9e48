"""
Structured logging for the issue tracker.

Every log line is a snake_case event name plus key-value context, e.g.
``logger.info("issue_updated", issue_id=7, changed_fields=2)``. The request
ID bound by the HTTP middleware rides along through structlog contextvars.
"""

import logging
import os
import sys
import time
from collections.abc import Callable
from functools import lru_cache, wraps
from typing import Any, TypeVar

import structlog
from structlog.types import EventDict, Processor

F = TypeVar("F", bound=Callable[..., Any])

APP_CONTEXT = "issue_tracker"


def _use_console_renderer() -> bool:
    from .config import get_settings

    return get_settings().debug or os.getenv("ENV", "development") == "development"


def _tag_app(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["app"] = APP_CONTEXT
    return event_dict


def build_processors(console: bool) -> list[Processor]:
    """Processor chain: coloured console output in development, JSON lines otherwise."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _tag_app,
    ]
    if console:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return processors


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging. Call once at application startup."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=build_processors(console=_use_console_renderer()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: Any) -> None:
    """Bind values included in every log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class _LazyLogger:
    """Resolves its logger on first use so importing a module never configures logging."""

    def __init__(self, name: str):
        self._name = name
        self._logger: structlog.stdlib.BoundLogger | None = None

    def __getattr__(self, attr: str):
        if self._logger is None:
            self._logger = get_logger(self._name)
        return getattr(self._logger, attr)


audit_logger = _LazyLogger("audit")
notification_logger = _LazyLogger("notifications")


def log_timing(operation: str) -> Callable[[F], F]:
    """
    Log how long the wrapped call took; failures are logged and re-raised.

    Usage:
        @log_timing("issue_listing")
        def list(self, query): ...
    """

    def decorator(func: F) -> F:
        logger = _LazyLogger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    "operation_failed",
                    operation=operation,
                    duration_seconds=round(time.perf_counter() - start, 3),
                    error_type=type(e).__name__,
                )
                raise
            logger.debug(
                "operation_complete",
                operation=operation,
                duration_seconds=round(time.perf_counter() - start, 3),
            )
            return result

        return wrapper  # type: ignore

    return decorator


class RequestLoggingMiddleware:
    """ASGI middleware logging the start and outcome of each HTTP request."""

    def __init__(self, app):
        self.app = app
        self.logger = _LazyLogger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        method = scope.get("method", "")
        path = scope.get("path", "")
        self.logger.info("request_started", method=method, path=path)

        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            if status_code >= 500:
                log = self.logger.error
            elif status_code >= 400:
                log = self.logger.warning
            else:
                log = self.logger.info
            log(
                "request_complete",
                method=method,
                path=path,
                status_code=status_code,
                duration_seconds=round(time.perf_counter() - start, 3),
            )
            clear_context()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_timing",
    "RequestLoggingMiddleware",
    "audit_logger",
    "notification_logger",
]
