"""
Structured logging for the notus service

Every event carries the service name and, when known, the workspace it
was emitted for. JSON output is the default; LOG_JSON=false switches to
the console renderer for local runs.
"""

import logging

import structlog
from structlog.stdlib import LoggerFactory

from notus.core.config import settings

SERVICE_NAME = "notus"

# Chatty client libraries, kept at WARNING unless LOG_LEVEL is DEBUG
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


def add_service_name(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def build_processors(json_output: bool):
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        add_service_name,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def bind_workspace(workspace_id):
    """Attach the workspace id to every event logged in the current request"""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(workspace_id=workspace_id)


def configure_logging():
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s")
    if level > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(settings.LOG_JSON),
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
