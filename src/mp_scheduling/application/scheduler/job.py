"""Application scheduler – the Job contract and JobDefinition."""
from __future__ import annotations

import abc
import dataclasses
from typing import Any, ClassVar

from mp_scheduling.application.scheduler.triggers import Trigger
from mp_scheduling.kernel.types import Err, Ok
from mp_scheduling.resilience.retry import RetryPolicy

__all__ = ["Job", "JobDefinition"]


class Job(abc.ABC):
    """Contract every concrete job implements.

    ``execute`` receives the job-owned state from the previous run (or the
    definition's ``initial_context``) and returns ``Ok(value, state=...)`` or
    ``Err(reason, state=...)``; the returned state is handed back on the next
    run.  Raised exceptions are caught by the execution engine and handled as
    failures.

    ``get_config`` defaults to the trigger description plus ``description``;
    override it when the job has more to report.
    """

    description: ClassVar[str] = ""

    @abc.abstractmethod
    async def execute(self, state: Any) -> Ok[Any] | Err[Any]: ...

    @abc.abstractmethod
    def is_enabled(self) -> bool: ...

    def get_config(self, trigger: Trigger | None = None) -> dict[str, Any]:
        config: dict[str, Any] = dict(trigger.describe()) if trigger is not None else {}
        config["description"] = self.description or type(self).__name__
        return config


@dataclasses.dataclass(frozen=True)
class JobDefinition:
    """Immutable description of one recurring job.

    Without a ``retry_policy`` the actor falls back to
    ``SchedulerSettings.default_retry_policy()``.
    """

    id: str
    job: Job
    trigger: Trigger
    retry_policy: RetryPolicy | None = None
    initial_context: Any = None

    def is_enabled(self) -> bool:
        return bool(self.job.is_enabled())

    def get_config(self) -> dict[str, Any]:
        return self.job.get_config(self.trigger)
