"""Application feature flags – FeatureFlagProvider port."""
from __future__ import annotations

import abc

from mp_scheduling.application.feature_flags.feature_flag import FeatureFlag


class FeatureFlagProvider(abc.ABC):
    """Port: evaluate feature flags.

    ``is_enabled`` is synchronous and must be cheap: job actors call it at
    start-up and before every re-arm.
    """

    @abc.abstractmethod
    def is_enabled(self, flag: FeatureFlag) -> bool: ...

    def gate(self, flag: FeatureFlag):
        """Return a zero-argument predicate bound to *flag*."""
        return lambda: self.is_enabled(flag)


__all__ = ["FeatureFlagProvider"]
