"""
Structured logging configuration using structlog.

Console output in development, JSON lines elsewhere (``LOG_FORMAT``
overrides the choice). Backend error details end up in log fields, so long
string values are clipped to ``LOG_MAX_VALUE_LENGTH`` characters.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from idistr.config.settings import Settings, get_settings

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "aiosqlite",
    "uvicorn.access",
    "fontTools",  # fpdf2 font subsetting
)


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application context to log events."""
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.environment
    return event_dict


class ClipLongValues:
    """Processor clipping string fields longer than ``limit`` characters."""

    def __init__(self, limit: int) -> None:
        self.limit = limit

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        if self.limit <= 0:
            return event_dict
        for key, value in event_dict.items():
            if key != "event" and isinstance(value, str) and len(value) > self.limit:
                event_dict[key] = f"{value[: self.limit]}... [{len(value)} chars]"
        return event_dict


def _use_json(settings: Settings) -> bool:
    if settings.log_format == "auto":
        return settings.environment != "development"
    return settings.log_format == "json"


def configure_logging() -> None:
    """Configure structlog for the application."""
    settings = get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        ClipLongValues(settings.log_max_value_length),
    ]

    if _use_json(settings):
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
