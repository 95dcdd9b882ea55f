"""Application scheduler – per-job mutable state and the health snapshot."""
from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from mp_scheduling.kernel.types import Err, Ok

__all__ = ["HealthSnapshot", "JobState", "JobStatus", "sanitize"]

_PLAIN = (type(None), bool, int, float, str, bytes, Enum, datetime, date, time)


class JobStatus(str, Enum):
    DISABLED = "disabled"
    SCHEDULED = "scheduled"
    EXECUTING = "executing"
    RETRY_PENDING = "retry_pending"


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    return str(key) if isinstance(key, _PLAIN) else repr(key)


def sanitize(value: Any) -> Any:
    """Return *value* with anything that is not plain data replaced by its ``repr``.

    Containers are rebuilt recursively; ``Ok``/``Err`` keep their variant.
    Live handles (tasks, sockets, locks, exceptions...) never leave the actor
    as-is.
    """
    if isinstance(value, _PLAIN):
        return value
    if isinstance(value, Ok):
        return Ok(sanitize(value.value))
    if isinstance(value, Err):
        return Err(sanitize(value.error))
    if isinstance(value, dict):
        return {_key(k): sanitize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [sanitize(v) for v in value]
    if isinstance(value, tuple):
        return tuple(sanitize(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return [sanitize(v) for v in value]
    return repr(value)


@dataclasses.dataclass
class JobState:
    """Mutable state owned by exactly one job actor."""

    status: JobStatus = JobStatus.DISABLED
    retry_count: int = 0
    retries_exhausted: bool = False
    last_execution_time: datetime | None = None
    last_result: Ok[Any] | Err[Any] | None = None
    last_error: Any = None
    last_stacktrace: str | None = None
    next_run_at: datetime | None = None
    success_count: int = 0
    error_count: int = 0
    context: Any = None


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _render_result(result: Ok[Any] | Err[Any] | None) -> dict[str, Any] | None:
    if result is None:
        return None
    if isinstance(result, Ok):
        return {"ok": result.value}
    return {"error": result.error}


@dataclasses.dataclass(frozen=True)
class HealthSnapshot:
    """Point-in-time, read-only view of a job actor."""

    name: str
    enabled: bool
    status: JobStatus
    last_execution: datetime | None
    last_result: Ok[Any] | Err[Any] | None
    last_error: Any
    retry_count: int
    retries_exhausted: bool
    next_run: datetime | None
    success_count: int
    error_count: int
    config: dict[str, Any]

    @property
    def disabled(self) -> bool:
        return not self.enabled

    @classmethod
    def capture(cls, name: str, enabled: bool, state: JobState, config: dict[str, Any]) -> "HealthSnapshot":
        return cls(
            name=name,
            enabled=enabled,
            status=state.status,
            last_execution=state.last_execution_time,
            last_result=state.last_result,
            last_error=state.last_error,
            retry_count=state.retry_count,
            retries_exhausted=state.retries_exhausted,
            next_run=state.next_run_at,
            success_count=state.success_count,
            error_count=state.error_count,
            config=sanitize(config),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "enabled": self.enabled,
            "disabled": self.disabled,
            "status": self.status.value,
            "last_execution": _iso(self.last_execution),
            "last_result": _render_result(self.last_result),
            "last_error": self.last_error,
            "retry_count": self.retry_count,
            "retries_exhausted": self.retries_exhausted,
            "next_run": _iso(self.next_run),
            "stats": {"success_count": self.success_count, "error_count": self.error_count},
            "config": self.config,
        }
