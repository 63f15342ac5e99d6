"""structlog setup for the client.

Every event goes to two sinks: a coloured console for whoever is running the
CLI, and ``LOG_FILE`` as one JSON object per line. Records coming from other
libraries (httpx, pydantic-ai, opentelemetry) pass through the same processors,
so the JSONL file carries the bound ``user_id`` for them too.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from stocksync.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")

_state = {"level": None}


def resolve_level(value: str, verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def _event_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _sink(handler: logging.Handler, renderer, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_event_processors(),
        )
    )
    return handler


def configure_logging(level: int | None = None) -> int:
    """Install the console and JSONL sinks on the root logger.

    Runs once per process; later calls return the level already in effect.
    """
    if _state["level"] is not None:
        return _state["level"]
    if level is None:
        level = resolve_level(LOG_LEVEL, VERBOSE_LOGGING)

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    sinks = [
        _sink(logging.StreamHandler(), structlog.dev.ConsoleRenderer(colors=True), level),
        _sink(logging.FileHandler(LOG_FILE, encoding="utf-8"), structlog.processors.JSONRenderer(), level),
    ]
    root = logging.getLogger()
    root.handlers[:] = sinks
    root.setLevel(level)
    logging.captureWarnings(True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *_event_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _state["level"] = level
    return level


def get_logger(name: str = "stocksync", **bindings: Any) -> BoundLogger:
    configure_logging()
    logger = structlog.get_logger(name)
    return logger.bind(**bindings) if bindings else logger


def bind_context(**context: Any) -> None:
    """Attach fields (e.g. ``user_id``) to every event logged from this context."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_view_step(view_name: str, step: str, data: Any = None) -> None:
    """One line per view state transition.

    With ``VERBOSE_LOGGING`` on, steps that carry ``data`` are logged at DEBUG.
    """
    logger = get_logger(view=view_name, kind="view_step")
    if data is None:
        logger.info(step)
    elif VERBOSE_LOGGING:
        logger.debug(step, data=data)
    else:
        logger.info(step, data=data)
