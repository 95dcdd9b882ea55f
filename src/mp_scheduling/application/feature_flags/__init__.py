"""Application feature flags – ports and value objects."""
from mp_scheduling.application.feature_flags.env import EnvFeatureFlagProvider
from mp_scheduling.application.feature_flags.feature_flag import FeatureFlag
from mp_scheduling.application.feature_flags.in_memory import InMemoryFeatureFlagProvider
from mp_scheduling.application.feature_flags.provider import FeatureFlagProvider

__all__ = [
    "EnvFeatureFlagProvider",
    "FeatureFlag",
    "FeatureFlagProvider",
    "InMemoryFeatureFlagProvider",
]
