"""Structured logging for the Hero Ledger engine.

Engine modules only emit events through get_logger. A host application
routes them by calling configure_logging, which reads the level, the
renderer and the application name from Settings.

Example:
    >>> from hero_ledger.core.logging import configure_logging, get_logger
    >>> configure_logging()
    >>> get_logger(__name__).info("Sheet evaluated", available=170)
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from hero_ledger.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


def app_context(app_name: str) -> Processor:
    """Build a processor stamping every event with the application name."""

    def add_app_context(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return add_app_context


def build_processors(*, app_name: str, json_format: bool) -> list[Processor]:
    """Processor chain ending in a JSON or console renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        app_context(app_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Route engine log events according to the application settings.

    Args:
        settings: Settings to read; defaults to get_settings(). With
            ``debug`` on, the level drops to DEBUG whatever ``log_level``
            says.
    """
    settings = settings or get_settings()
    level = "DEBUG" if settings.debug else settings.log_level

    structlog.configure(
        processors=build_processors(
            app_name=settings.app_name,
            json_format=settings.json_logs,
        ),
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not settings.debug,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def character_context(character_name: str, **kwargs: Any) -> AbstractContextManager[None]:
    """Tag every event logged inside the block with the character evaluated.

    Example:
        >>> with character_context("Ironclad"):
        ...     character_summary(character)
    """
    return structlog.contextvars.bound_contextvars(character=character_name, **kwargs)


__all__ = [
    "app_context",
    "build_processors",
    "configure_logging",
    "get_logger",
    "character_context",
]
