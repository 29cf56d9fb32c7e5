"""Structured logging with structlog.

Modules keep using ``logging.getLogger(__name__)``; their records are routed
through structlog's ``ProcessorFormatter`` so production emits one JSON
object per line and development gets the coloured console renderer. Every
record carries the service name, the environment and, inside a request,
the ``request_id`` bound by ``RequestIdMiddleware``.
"""

import logging
import uuid

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "apscheduler", "aiosqlite")


def _service_info(service: str, environment: str) -> Processor:
    def add_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        event_dict.setdefault("env", environment)
        return event_dict

    return add_service


def setup_logging(
    json_output: bool = True,
    log_level: str = "INFO",
    *,
    service: str = "sportsync",
    environment: str = "development",
    sql_echo: bool = False,
) -> None:
    """Route stdlib and structlog loggers through one structured handler.

    Args:
        json_output: JSON lines (production) instead of console output.
        log_level: Root level name; unknown names fall back to INFO.
        service: Value of the ``service`` key on every record.
        environment: Value of the ``env`` key on every record.
        sql_echo: Keep SQLAlchemy engine statements at INFO.
    """
    # filter_by_level needs a structlog logger; stdlib records reach the
    # pre-chain without one, so it stays out of the shared list.
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        _service_info(service, environment),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)


def generate_request_id() -> str:
    """Short random id for X-Request-ID."""
    return uuid.uuid4().hex[:12]
