"""Application feature flags – EnvFeatureFlagProvider (live environment lookup)."""

from __future__ import annotations

import os
from typing import Mapping

from mp_scheduling.application.feature_flags.feature_flag import FeatureFlag
from mp_scheduling.application.feature_flags.provider import FeatureFlagProvider
from mp_scheduling.config.settings.loaders import parse_bool


class EnvFeatureFlagProvider(FeatureFlagProvider):
    """Reads ``<PREFIX>_<KEY>`` from the environment on every call.

    Nothing is cached, so toggling the variable at runtime is picked up the
    next time a job actor re-arms.
    """

    def __init__(self, prefix: str = "FEATURE", environ: Mapping[str, str] | None = None) -> None:
        self._prefix = prefix.upper()
        self._environ = environ

    def env_key(self, flag: FeatureFlag) -> str:
        return f"{self._prefix}_{flag.key}".upper().lstrip("_")

    def is_enabled(self, flag: FeatureFlag) -> bool:
        environ = os.environ if self._environ is None else self._environ
        raw = environ.get(self.env_key(flag))
        if raw is None:
            return flag.default_value
        return parse_bool(raw)


__all__ = ["EnvFeatureFlagProvider"]
