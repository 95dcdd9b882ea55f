"""Config – 12-factor settings and loaders."""

from mp_scheduling.config.settings import (
    EnvSettingsLoader,
    SchedulerSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from mp_scheduling.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SchedulerSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
