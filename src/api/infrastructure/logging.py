"""Structlog configuration for the Storefront API.

Every event carries the bound tenant: ``tenant_scope`` puts ``tenant_id``
into structlog's contextvars, and ``merge_contextvars`` copies it onto
each event emitted inside the scope, including those of
tasks spawned from it.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from infrastructure.settings import Settings


def _wants_console_output() -> bool:
    """FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)."""
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def build_processors(use_colors: bool) -> list[structlog.types.Processor]:
    """Processor chain: console rendering for development, JSON otherwise."""
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        return [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]

    return [
        *shared_processors,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the application.

    ``settings.debug`` lowers the threshold from INFO to DEBUG so probe
    events logged at debug level appear (order reads, cart line
    outcomes, audit deliveries).
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    structlog.configure(
        processors=build_processors(_wants_console_output()),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
