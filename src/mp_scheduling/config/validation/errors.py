"""Config validation – errors raised while building scheduler settings and policies."""
from mp_scheduling.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """A settings source could not be read or produced an unusable value.

    ``SettingsFactory`` skips loaders that raise this and keeps merging the rest.
    """
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """No source supplied a settings field that has no default."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A value was present but rejected: bad ``SCHEDULER_*`` coercion or a retry policy out of range."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
