"""Structured logging for the storefront.

stdlib logging owns the handlers and structlog renders on top of it.
Production and staging emit JSON lines to stdout and to rotating files under
`LOG_DIR`. Other environments get the colored console renderer, and test runs
skip the files.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

QUIET_LOGGERS = ("protean", "asyncio", "httpx", "uvicorn.access")


def _environment() -> str:
    return os.getenv("PROTEAN_ENV", "development").lower()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    return handler


def _setup_handlers(environment: str, log_file_prefix: str) -> None:
    level = os.getenv("LOG_LEVEL", LEVELS.get(environment, "INFO")).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [logging.StreamHandler(sys.stdout)]

    if environment != "test":
        log_path = Path(os.getenv("LOG_DIR", "logs"))
        log_path.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}.log", level))
        root_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(log_file_prefix: str = "storefront") -> None:
    """Configure stdlib handlers and the structlog pipeline for the current environment."""
    environment = _environment()
    _setup_handlers(environment, log_file_prefix)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if environment in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def add_context(**kwargs) -> None:
    """Bind fields to every log line emitted by the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
