"""Config settings – SchedulerSettings (``SCHEDULER_*`` environment)."""
from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, ClassVar

from mp_scheduling.config.settings.base import Settings
from mp_scheduling.config.validation import InvalidSettingValueError

if TYPE_CHECKING:
    from mp_scheduling.resilience.retry import RetryPolicy


@dataclasses.dataclass
class SchedulerSettings(Settings):
    """Process-wide scheduler configuration.

    ``enabled`` is the global switch: when false the supervisor starts no
    job actors at all.  The ``registration_*`` fields bound how long an actor
    keeps retrying registration against a registry that is not up yet; the
    ``default_*`` fields build the retry policy for jobs that do not supply
    their own.
    """

    _prefix: ClassVar[str] = "SCHEDULER"

    enabled: bool = True
    registration_max_attempts: int = 5
    registration_base_backoff_ms: int = 1000
    registration_max_backoff_ms: int = 30_000
    default_max_attempts: int = 3
    default_base_backoff_ms: int = 1000
    default_max_backoff_ms: int = 30_000
    default_jitter: bool = True
    max_restarts: int = 3
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if self.max_restarts < 0:
            raise InvalidSettingValueError("max_restarts", self.max_restarts, "must be >= 0")
        if logging.getLevelName(self.log_level.upper()) == f"Level {self.log_level.upper()}":
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    def registration_policy(self) -> RetryPolicy:
        from mp_scheduling.resilience.retry import RetryPolicy  # noqa: PLC0415

        return RetryPolicy(
            max_attempts=self.registration_max_attempts,
            base_backoff_ms=self.registration_base_backoff_ms,
            max_backoff_ms=self.registration_max_backoff_ms,
            jitter=True,
        )

    def default_retry_policy(self) -> RetryPolicy:
        from mp_scheduling.resilience.retry import RetryPolicy  # noqa: PLC0415

        return RetryPolicy(
            max_attempts=self.default_max_attempts,
            base_backoff_ms=self.default_base_backoff_ms,
            max_backoff_ms=self.default_max_backoff_ms,
            jitter=self.default_jitter,
        )


__all__ = ["SchedulerSettings"]
