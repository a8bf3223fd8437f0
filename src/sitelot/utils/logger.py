"""
Logging Configuration

Structured logging setup using structlog. Configuration happens once, from
the application startup hook; until then structlog's defaults apply.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from config.settings import Settings, settings as default_settings

SERVICE_NAME = "sitelot"

# Chatty third-party loggers kept at WARNING
QUIET_LOGGERS = ("urllib3", "sqlalchemy.engine", "httpx")

_configured = False


def make_app_context(app_settings: Settings):
    """Build a processor that stamps service and environment on every entry."""

    def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["service"] = SERVICE_NAME
        event_dict["environment"] = app_settings.environment
        return event_dict

    return add_app_context


def setup_logging(app_settings: Optional[Settings] = None, force: bool = False) -> structlog.BoundLogger:
    """
    Configure structured logging for the application.

    Repeated calls are no-ops unless force is set.

    Args:
        app_settings: Settings providing log_level, log_format and environment
        force: Reconfigure even if already configured

    Returns:
        Configured structlog logger instance
    """
    global _configured
    if _configured and not force:
        return structlog.get_logger()

    app_settings = app_settings or default_settings
    level = getattr(logging, app_settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        make_app_context(app_settings),
    ]

    if app_settings.log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True

    return structlog.get_logger()


def get_logger(name: str = None) -> structlog.BoundLogger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()
