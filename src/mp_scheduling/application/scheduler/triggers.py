"""Application scheduler – trigger strategies.

A trigger answers one question: given ``now``, how many milliseconds until
the job's next *normal* (non-retry) run.  Triggers hold no history.
"""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Protocol, runtime_checkable

from mp_scheduling.kernel.errors import InvalidTriggerError
from mp_scheduling.kernel.time import to_millis

__all__ = ["DynamicTrigger", "IntervalTrigger", "TimeOfDayTrigger", "Trigger"]


@runtime_checkable
class Trigger(Protocol):
    """Port: compute the delay until the next normal execution."""

    def next_delay_ms(self, now: datetime) -> int: ...
    def describe(self) -> dict[str, Any]: ...


@dataclasses.dataclass(frozen=True)
class IntervalTrigger:
    """Fixed wait of ``period_ms`` from now, regardless of how long the last run took.

    Missed ticks are never queued; a slow run simply pushes the next start later.
    """

    period_ms: int

    def __post_init__(self) -> None:
        if self.period_ms <= 0:
            raise InvalidTriggerError("period_ms", self.period_ms, "must be > 0")

    def next_delay_ms(self, now: datetime) -> int:  # noqa: ARG002
        return self.period_ms

    def describe(self) -> dict[str, Any]:
        return {"type": "interval", "interval": self.period_ms}


@dataclasses.dataclass(frozen=True)
class TimeOfDayTrigger:
    """Once a day at ``hour:minute:00.000`` wall-clock time in the time zone of ``now``.

    The delay is measured between instants, so a DST change in between
    yields 23 or 25 hours rather than 24.
    """

    hour: int
    minute: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise InvalidTriggerError("hour", self.hour, "must be in [0, 23]")
        if not 0 <= self.minute <= 59:
            raise InvalidTriggerError("minute", self.minute, "must be in [0, 59]")

    def next_run(self, now: datetime) -> datetime:
        candidate = now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        if candidate <= now:
            candidate += timedelta(hours=24)
        return candidate

    def next_delay_ms(self, now: datetime) -> int:
        # Same-zone aware subtraction ignores offset changes; compare instants.
        return to_millis(self.next_run(now).astimezone(UTC) - now.astimezone(UTC))

    def describe(self) -> dict[str, Any]:
        return {"type": "time", "hour": self.hour, "minute": self.minute}


class DynamicTrigger:
    """Re-resolves the concrete trigger from *factory* on every call.

    Used when timing comes from live configuration: a changed hour/minute or
    interval takes effect at the next re-arm.
    """

    def __init__(self, factory: Callable[[], Trigger]) -> None:
        self._factory = factory

    def current(self) -> Trigger:
        return self._factory()

    def next_delay_ms(self, now: datetime) -> int:
        return self.current().next_delay_ms(now)

    def describe(self) -> dict[str, Any]:
        return self.current().describe()

    def __repr__(self) -> str:
        return f"DynamicTrigger({self._factory!r})"
