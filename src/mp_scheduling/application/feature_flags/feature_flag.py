"""Application feature flags – FeatureFlag, the key a job's gate is evaluated against."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class FeatureFlag:
    """Named switch consulted by ``Job.is_enabled``.

    ``default_value`` applies when the provider has no value for ``key``
    (unset environment variable, flag never ``set`` in memory).
    """

    key: str
    description: str = ""
    default_value: bool = False

    def __str__(self) -> str:
        return self.key


__all__ = ["FeatureFlag"]
