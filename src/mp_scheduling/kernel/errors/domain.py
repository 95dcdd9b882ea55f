"""Domain errors – invalid job definitions and trigger values."""

from __future__ import annotations

from typing import Any

from mp_scheduling.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a scheduling rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class InvalidTriggerError(ValidationError):
    """A trigger was built with out-of-range timing values."""

    default_code = "invalid_trigger"

    def __init__(self, field: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid trigger {field}={value!r}: {reason}",
            errors=[{"field": field, "value": value, "reason": reason}],
        )
        self.field = field
        self.value = value


__all__ = ["DomainError", "InvalidTriggerError", "ValidationError"]
