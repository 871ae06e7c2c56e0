"""Logging setup for the restaurants domain.

Standard library logging carries the handlers (console plus rotating files);
structlog sits on top and renders JSON in deployed environments and a rich
console view everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from contextlib import contextmanager
from pathlib import Path

import structlog

LOG_FILE_PREFIX = "restaurant_reviews"

_DEPLOYED_ENVIRONMENTS = ("production", "staging")

_LEVEL_BY_ENVIRONMENT = {
    "development": "DEBUG",
    "test": "WARNING",
    "staging": "INFO",
    "production": "INFO",
}


def current_environment() -> str:
    """Environment name, taken from PROTEAN_ENV and then ENVIRONMENT."""
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def resolve_log_level(level: str | None = None) -> str:
    """An explicit level wins, then LOG_LEVEL, then the environment's default."""
    if level:
        return level.upper()
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENVIRONMENT.get(current_environment(), "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _configure_handlers(level: str, log_dir: Path) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(log_dir / f"{LOG_FILE_PREFIX}.log", level),
        _rotating_file(log_dir / f"{LOG_FILE_PREFIX}_error.log", logging.ERROR),
    ]

    # Framework internals are only interesting when something breaks
    logging.getLogger("protean").setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in _DEPLOYED_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
    )


def _configure_structlog(environment: str) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """Configure stdlib handlers and structlog for the current environment."""
    _configure_handlers(resolve_log_level(level), Path(log_dir or os.getenv("LOG_DIR", "logs")))
    _configure_structlog(current_environment())


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def review_log_context(restaurant_id, **identifiers):
    """Bind restaurant and review identifiers to every log line emitted inside the block."""
    values = {"restaurant_id": str(restaurant_id)}
    values.update({key: str(value) for key, value in identifiers.items() if value is not None})
    with structlog.contextvars.bound_contextvars(**values):
        yield
