"""Resilience – backoff strategies (milliseconds)."""
from __future__ import annotations

import abc


class BackoffStrategy(abc.ABC):
    """Compute the wait in milliseconds before retry number *attempt* (0-based)."""

    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...


class ExponentialBackoff(BackoffStrategy):
    """Delay grows exponentially: ``base_ms * 2^attempt``, capped at ``max_ms``."""

    def __init__(self, base_ms: float = 1000, max_ms: float = 30_000) -> None:
        self._base = base_ms
        self._max = max_ms

    @property
    def max_ms(self) -> float:
        return self._max

    def compute(self, attempt: int) -> float:
        if attempt < 0:
            attempt = 0
        # Cap the exponent before multiplying so very large attempts do not overflow.
        if self._base > 0 and attempt >= 64:
            return self._max
        return min(self._base * (2 ** attempt), self._max)


__all__ = ["BackoffStrategy", "ExponentialBackoff"]
