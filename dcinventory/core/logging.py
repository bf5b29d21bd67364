"""Structured logging configuration using structlog.

Every module logs through ``get_logger(__name__)`` with keyword context
(pool, ip, rack_id, ...). Output is a coloured console in debug mode and
one JSON object per line otherwise.
"""

import logging
import sys

import structlog

from dcinventory.core.config import get_settings

_configured = False

# stdlib loggers that are too chatty at INFO for an inventory API
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx")


def _add_service(_logger, _method, event_dict):
    event_dict.setdefault("service", "dcinventory")
    return event_dict


def configure_logging(level: str | None = None, force: bool = False) -> None:
    """Configure structlog once per process.

    ``level`` overrides ``LOG_LEVEL`` (used by ``dcinv serve --log-level``).
    Later calls are no-ops unless ``force`` is set.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.app_debug:
        renderer: list[structlog.types.Processor] = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        renderer = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # stdlib factory so loggers carry a .name for add_logger_name
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=force)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    configure_logging()
    return structlog.get_logger(name)
