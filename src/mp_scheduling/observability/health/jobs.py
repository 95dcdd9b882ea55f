"""Health check adapter for job actors."""
from __future__ import annotations

from typing import TYPE_CHECKING

from mp_scheduling.observability.health.check import HealthCheck, HealthStatus

if TYPE_CHECKING:
    from mp_scheduling.application.scheduler import JobActor, SchedulerRegistry

__all__ = ["JobHealthCheck"]


class JobHealthCheck(HealthCheck):
    """Reports a job as unhealthy while its retries are exhausted.

    A disabled job is healthy; the snapshot is attached under ``data``.
    With a *registry* the actor is looked up by id on every check, so a
    restarted actor replaces the one this check was built with.
    """

    def __init__(self, actor: JobActor, registry: SchedulerRegistry | None = None) -> None:
        self._actor = actor
        self._job_id = actor.id
        self._registry = registry

    @property
    def name(self) -> str:
        return f"job:{self._job_id}"

    @property
    def actor(self) -> JobActor:
        if self._registry is not None:
            current = self._registry.lookup(self._job_id)
            if current is not None:
                return current
        return self._actor

    async def check(self) -> HealthStatus:
        snapshot = self.actor.health_check()
        detail = None
        if snapshot.retries_exhausted:
            detail = f"retries exhausted: {snapshot.last_error!r}"
        elif snapshot.retry_count:
            detail = f"retrying ({snapshot.retry_count}): {snapshot.last_error!r}"
        return HealthStatus(
            healthy=not snapshot.retries_exhausted,
            detail=detail,
            data=snapshot.to_dict(),
        )
