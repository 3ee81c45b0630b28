"""
Structured logging for the Day Planner backend.

structlog renders both its own events and records from Django and other
stdlib loggers through ``structlog.stdlib.ProcessorFormatter``, so every line
shares one format: a readable console layout in development, JSON lines when
``LOG_FORMAT=json``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from structlog.contextvars import merge_contextvars

__all__ = [
    "build_logging_config",
    "configure_structlog",
    "get_logger",
]

_CONFIGURED = False


def _shared_processors() -> List[Any]:
    return [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=False)
    return structlog.dev.ConsoleRenderer(colors=False)


def build_logging_config(level: str = "INFO", log_format: str = "console") -> Dict[str, Any]:
    """Return a ``LOGGING`` dict for Django settings."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _renderer(log_format),
                ],
                "foreign_pre_chain": _shared_processors(),
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "structlog",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level.upper(),
        },
        "loggers": {
            # Only warnings from the framework itself.
            "django": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }


def configure_structlog() -> None:
    """Route structlog through the stdlib handlers Django configured."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    structlog.configure(
        processors=_shared_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: Optional[str] = None, **context: Any) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the given name and context."""
    base = structlog.get_logger(name or "day_planner")
    if context:
        return base.bind(**context)
    return base
