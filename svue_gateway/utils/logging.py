# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging configuration using structlog.

Gateway modules log through ``logging.getLogger(__name__)``. Those records,
together with anything logged through a structlog logger, end up on one
stdout handler whose formatter runs the structlog processor chain. Output
is colored console text during development and JSON lines otherwise.

Every event passes through a redaction processor so that StudentVue
credentials and session cookies never reach a log sink, even when a caller
binds them by mistake.

Example:
    >>> from svue_gateway.utils.logging import setup_logging, get_logger
    >>> from svue_gateway.core.config import get_settings
    >>> setup_logging(get_settings())
    >>> get_logger(__name__).info("Upstream call finished", method="Gradebook")
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor

if TYPE_CHECKING:
    from svue_gateway.core.config.settings import Settings

HANDLER_NAME = "svue_gateway"

REDACTED_KEYS = frozenset({
    "password",
    "cookie",
    "authorization",
    "token",
    "set_token",
})

# httpx logs full request URLs at INFO
QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpx", "httpcore", "asyncio")


def redact_secrets(_: Any, __: str, event_dict: EventDict) -> EventDict:
    """Replace values of credential-bearing keys with a placeholder."""
    for key in event_dict:
        if key.lower() in REDACTED_KEYS:
            event_dict[key] = "***"
    return event_dict


def _pre_chain() -> list[Processor]:
    """Processors applied to both structlog events and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderers(settings: "Settings") -> list[Processor]:
    if settings.is_development or settings.debug:
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(settings: "Settings") -> None:
    """Configure structured logging for the application.

    Safe to call more than once; the gateway handler is replaced, and
    handlers installed by others (uvicorn, pytest) are left alone.

    Args:
        settings: Application settings containing log_level and debug flag.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(settings),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    logging.getLogger("svue_gateway").setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger that writes through the stdlib logger ``name``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Attach key-value pairs to every log event of the current request.

    Args:
        **kwargs: Context to bind, e.g. ``district="md-mcps-psv.edupoint.com"``.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context so it cannot leak into the next request."""
    structlog.contextvars.clear_contextvars()
