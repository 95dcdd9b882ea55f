"""Resilience – RetryPolicy: how many times and how long to wait."""
from __future__ import annotations

import dataclasses

from mp_scheduling.config.validation import InvalidSettingValueError
from mp_scheduling.resilience.retry.backoff import ExponentialBackoff
from mp_scheduling.resilience.retry.jitter import JitterStrategy, NoJitter, ProportionalJitter


@dataclasses.dataclass(frozen=True)
class RetryPolicy:
    """Failure-recovery parameters for one job.

    ``max_attempts`` counts retries *beyond* the initial attempt: a failure
    is retried while ``retry_count < max_attempts``.
    """

    max_attempts: int = 3
    base_backoff_ms: int = 1000
    max_backoff_ms: int = 30_000
    jitter: bool = True

    def __post_init__(self) -> None:
        for name in ("max_attempts", "base_backoff_ms", "max_backoff_ms"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidSettingValueError(name, value, "must be >= 0")
        if self.max_backoff_ms < self.base_backoff_ms:
            raise InvalidSettingValueError(
                "max_backoff_ms", self.max_backoff_ms, "must be >= base_backoff_ms"
            )

    def should_retry(self, retry_count: int) -> bool:
        return retry_count < self.max_attempts

    def jitter_strategy(self) -> JitterStrategy:
        return ProportionalJitter() if self.jitter else NoJitter()

    def backoff_ms(self, retry_count: int, jitter: JitterStrategy | None = None) -> int:
        """``min(base * 2^retry_count * jitter_factor, max)`` rounded to whole ms."""
        raw = ExponentialBackoff(self.base_backoff_ms, float("inf")).compute(retry_count)
        factor = (jitter or self.jitter_strategy()).factor()
        return max(0, round(min(raw * factor, self.max_backoff_ms)))


__all__ = ["RetryPolicy"]
