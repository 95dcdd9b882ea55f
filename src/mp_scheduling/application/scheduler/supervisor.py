"""Application scheduler – SchedulerSupervisor.

Starts one :class:`JobActor` per definition and restarts an actor whose
command loop crashed.  A restarted actor begins with a fresh ``JobState``:
retry history and the last result are lost.
"""
from __future__ import annotations

import asyncio
import functools
from typing import Any, Awaitable, Callable, Iterable

from mp_scheduling.application.scheduler.actor import JobActor
from mp_scheduling.application.scheduler.job import JobDefinition
from mp_scheduling.application.scheduler.registry import SchedulerRegistry, get_registry
from mp_scheduling.application.scheduler.timers import TimerService
from mp_scheduling.config.settings import SchedulerSettings
from mp_scheduling.kernel.time import Clock
from mp_scheduling.observability.logging import get_logger
from mp_scheduling.resilience.retry import JitterStrategy

__all__ = ["SchedulerSupervisor"]

logger = get_logger(__name__)


class SchedulerSupervisor:
    def __init__(
        self,
        definitions: Iterable[JobDefinition],
        *,
        registry: SchedulerRegistry | None = None,
        settings: SchedulerSettings | None = None,
        clock: Clock | None = None,
        timers: TimerService | None = None,
        jitter: JitterStrategy | None = None,
        registration_sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self._definitions = {d.id: d for d in definitions}
        self._registry = registry or get_registry()
        self._settings = settings or SchedulerSettings()
        self._actor_kwargs: dict[str, Any] = {
            "clock": clock,
            "timers": timers,
            "jitter": jitter,
            "registration_sleep": registration_sleep,
        }
        self._actors: dict[str, JobActor] = {}
        self._restarts: dict[str, int] = {}
        self._pending: set[asyncio.Task[None]] = set()
        self._running = False

    @property
    def actors(self) -> dict[str, JobActor]:
        return dict(self._actors)

    @property
    def restarts(self) -> dict[str, int]:
        return dict(self._restarts)

    @property
    def registry(self) -> SchedulerRegistry:
        return self._registry

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return
        if not self._settings.enabled:
            logger.info("scheduler.supervisor.disabled", jobs=len(self._definitions))
            return
        if not self._registry.is_available:
            self._registry.start()
        self._running = True
        for definition in self._definitions.values():
            await self._spawn(definition)
        logger.info("scheduler.supervisor.started", jobs=len(self._actors))

    async def stop(self) -> None:
        self._running = False
        for task in list(self._pending):
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        for actor in self._actors.values():
            await actor.stop()
        logger.info("scheduler.supervisor.stopped")

    async def wait_restarts(self) -> None:
        """Wait for any in-flight restarts to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _spawn(self, definition: JobDefinition) -> JobActor:
        actor = JobActor(
            definition,
            registry=self._registry,
            settings=self._settings,
            **self._actor_kwargs,
        )
        await actor.start()
        assert actor.task is not None
        actor.task.add_done_callback(functools.partial(self._on_exit, definition.id))
        self._actors[definition.id] = actor
        return actor

    def _on_exit(self, job_id: str, task: asyncio.Task[None]) -> None:
        if task.cancelled() or not self._running:
            return
        exc = task.exception()
        if exc is None:
            return
        count = self._restarts.get(job_id, 0)
        log = logger.bind(job_id=job_id, restarts=count)
        log.error("scheduler.supervisor.actor_crashed", reason=repr(exc), exc_info=exc)
        if count >= self._settings.max_restarts:
            log.error("scheduler.supervisor.restart_limit_reached", max_restarts=self._settings.max_restarts)
            return
        self._restarts[job_id] = count + 1
        restart = asyncio.get_running_loop().create_task(self._restart(job_id))
        self._pending.add(restart)
        restart.add_done_callback(self._pending.discard)

    async def _restart(self, job_id: str) -> None:
        previous = self._actors.get(job_id)
        if previous is not None:
            await previous.stop()
        await self._spawn(self._definitions[job_id])
        logger.info("scheduler.supervisor.actor_restarted", job_id=job_id, restarts=self._restarts[job_id])
