"""Observability – structlog configuration."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from mp_scheduling.config.settings import SchedulerSettings


class JsonLoggerFactory:
    """Configure structlog to render through the stdlib ``logging`` tree."""

    @staticmethod
    def configure(level: int = logging.INFO, json: bool = True) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)

    @classmethod
    def from_settings(cls, settings: SchedulerSettings) -> None:
        """Apply ``SCHEDULER_LOG_LEVEL`` / ``SCHEDULER_LOG_JSON``."""
        cls.configure(level=settings.log_level_number, json=settings.log_json)


def configure_logging(level: int | str = logging.INFO, json: bool = True) -> None:
    """Shorthand for :meth:`JsonLoggerFactory.configure` accepting level names."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    JsonLoggerFactory.configure(level=level, json=json)


__all__ = ["JsonLoggerFactory", "configure_logging"]
