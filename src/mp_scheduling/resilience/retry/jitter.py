"""Resilience – jitter strategies."""
from __future__ import annotations

import abc
import random


class JitterStrategy(abc.ABC):
    """Scale a backoff delay by a random factor to spread retries out."""

    @abc.abstractmethod
    def factor(self) -> float: ...

    def apply(self, delay: float) -> float:
        return delay * self.factor()


class NoJitter(JitterStrategy):
    def factor(self) -> float:
        return 1.0


class ProportionalJitter(JitterStrategy):
    """Factor drawn uniformly from ``[1, 1 + ratio]`` (default up to +20%)."""

    def __init__(self, ratio: float = 0.2, rng: random.Random | None = None) -> None:
        if ratio < 0:
            raise ValueError("ratio must be >= 0")
        self._ratio = ratio
        self._rng = rng or random.Random()

    def factor(self) -> float:
        return 1.0 + self._rng.uniform(0, self._ratio)


__all__ = ["JitterStrategy", "NoJitter", "ProportionalJitter"]
