"""Structured logging setup.

Package loggers wrap stdlib `logging` loggers under the `shapeguard`
namespace, which carries a `NullHandler`. Nothing is written anywhere until
the host application configures logging or calls `configure_logging()`.
"""

import logging
import sys
from typing import Optional

import structlog

from shapeguard.config import Settings, get_settings

PACKAGE_LOGGER = "shapeguard"
HANDLER_NAME = "shapeguard-console"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def get_logger(name: str):
    """Bound logger for a module of this package."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Send package events to stdout, formatted from settings.

    Console output in debug mode, JSON lines otherwise. Events below
    `LOG_LEVEL` are dropped. Calling it again replaces the previous handler.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    renderer = structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer()
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    reset_logging()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def reset_logging() -> None:
    """Remove the handler installed by `configure_logging` and restore the level."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
