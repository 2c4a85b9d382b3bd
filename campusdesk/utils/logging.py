# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for CampusDesk.

Services log through the standard library (``logging.getLogger(__name__)``).
``setup_logging`` installs one root handler whose structlog formatter
renders those records, and records from structlog loggers, with the same
processor chain. Context bound with ``log_context`` (for example the
administrator performing an upload) is merged into every record emitted
inside the block, including the ones from the notification fan-out.

Example:
    >>> setup_logging(get_settings())
    >>> with log_context(actor_id="admin-1"):
    ...     logging.getLogger("campusdesk.results").info("Result uploaded")
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from campusdesk.core.config.settings import Settings

QUIET_LOGGERS = ("sqlalchemy", "aiosqlite", "asyncio", "aiosmtplib")


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(settings: "Settings") -> None:
    """Route standard library and structlog records through one renderer.

    Development and debug runs get the colored console renderer; every
    other environment gets one JSON object per line. Calling this again
    replaces the handler installed by the previous call.

    Args:
        settings: Application settings; ``log_level``, ``debug`` and
            ``environment`` are used.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    shared = _shared_processors()

    if settings.is_development or settings.debug:
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=True)
        render_chain: list[Processor] = [renderer]
    else:
        render_chain = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *render_chain,
            ],
        )
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    logging.getLogger("campusdesk").setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for the given module name."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Bind values to every record logged inside the block.

    Values bound by an enclosing block are restored on exit, so nested
    operations can add keys without clobbering their caller's.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
