"""structlog setup shared by the API server and the CLI.

Configuration happens once per process. Every event carries a ``service``
key so resolver and DNS sync lines can be told apart in a shared stream.
"""

import logging
import sys
from typing import Any

import structlog

from automate_dns import SERVICE_NAME
from automate_dns.core.config import get_settings

_configured = False


def add_service_name(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _renderers(debug: bool) -> list[structlog.types.Processor]:
    if debug:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def configure_logging(*, force: bool = False) -> None:
    """Configure structlog and the stdlib root logger from settings.

    Repeated calls are no-ops unless *force* is set.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()
    level = logging.getLevelNamesMapping()[settings.log_level]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderers(settings.app_debug),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    # uvicorn and sqlalchemy records go to the same stream
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=force)
    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    configure_logging()
    return structlog.get_logger(name)
