"""Config settings – 12-factor env-based configuration."""
from mp_scheduling.config.settings.base import Settings
from mp_scheduling.config.settings.factory import SettingsFactory
from mp_scheduling.config.settings.loaders import EnvSettingsLoader, SettingsLoader, parse_bool
from mp_scheduling.config.settings.scheduler import SchedulerSettings

__all__ = [
    "EnvSettingsLoader",
    "SchedulerSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "parse_bool",
]
