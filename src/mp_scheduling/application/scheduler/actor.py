"""Application scheduler – JobActor.

One actor owns one job: its ``JobState``, its single pending timer and an
``asyncio.Queue`` of commands.  Timer fires and manual triggers are both
commands on that queue, so they are handled strictly in arrival order and
never overlap.
"""
from __future__ import annotations

import asyncio
import dataclasses
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from mp_scheduling.application.scheduler.engine import ExecutionEngine, Settlement
from mp_scheduling.application.scheduler.job import JobDefinition
from mp_scheduling.application.scheduler.state import HealthSnapshot, JobState, JobStatus
from mp_scheduling.application.scheduler.timers import AsyncioTimerService, TimerHandle, TimerService
from mp_scheduling.config.settings import SchedulerSettings
from mp_scheduling.kernel.errors import ActorNotStartedError, RegistryUnavailableError
from mp_scheduling.kernel.time import Clock, SystemClock
from mp_scheduling.observability.logging import get_logger
from mp_scheduling.resilience.retry import JitterStrategy, RegistrationRetry

if TYPE_CHECKING:
    from mp_scheduling.application.scheduler.registry import SchedulerRegistry

__all__ = ["JobActor"]

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class _Run:
    retry_count: int
    source: str


class JobActor:
    """Long-lived unit of concurrency for one :class:`JobDefinition`.

    Parameters
    ----------
    definition:
        The job, its trigger and retry policy.
    registry:
        Registry to join in the background after :meth:`start`.  Registration
        is retried while the registry is unavailable; if it never comes up
        the actor keeps running unregistered.
    clock, timers:
        Time sources; tests pass fakes.
    settings:
        Supplies the registration retry policy, and the retry policy for
        definitions that do not carry one.
    jitter:
        Overrides the retry policy's jitter (tests pin it).
    registration_sleep:
        Coroutine used between registration attempts (tests pass a no-op).
    """

    def __init__(
        self,
        definition: JobDefinition,
        *,
        registry: SchedulerRegistry | None = None,
        clock: Clock | None = None,
        timers: TimerService | None = None,
        settings: SchedulerSettings | None = None,
        jitter: JitterStrategy | None = None,
        registration_sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self._definition = definition
        self._registry = registry
        self._clock = clock or SystemClock()
        self._timers = timers or AsyncioTimerService()
        self._settings = settings or SchedulerSettings()
        self._registration_sleep = registration_sleep
        self._engine = ExecutionEngine(
            definition,
            self._clock,
            jitter,
            definition.retry_policy or self._settings.default_retry_policy(),
        )
        self._state = JobState(context=definition.initial_context)
        self._settled = dataclasses.replace(self._state)
        self._timer: TimerHandle | None = None
        self._queue: asyncio.Queue[_Run] | None = None
        self._task: asyncio.Task[None] | None = None
        self._registration: asyncio.Task[None] | None = None
        self._registered = False
        self._closing = False
        self._idle = asyncio.Event()
        self._idle.set()
        self._log = logger.bind(job_id=definition.id)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._definition.id

    @property
    def definition(self) -> JobDefinition:
        return self._definition

    @property
    def state(self) -> JobState:
        """Copy of the state as of the last settled transition."""
        return dataclasses.replace(self._settled)

    @property
    def status(self) -> JobStatus:
        return self._settled.status

    @property
    def registered(self) -> bool:
        return self._registered

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def crashed(self) -> bool:
        task = self._task
        return self.done and not task.cancelled() and task.exception() is not None  # type: ignore[union-attr]

    def is_enabled(self) -> bool:
        return self._definition.is_enabled()

    def get_config(self) -> dict[str, Any]:
        return self._definition.get_config()

    def health_check(self) -> HealthSnapshot:
        """Synchronous snapshot; never blocks on a running execution."""
        return HealthSnapshot.capture(self.id, self.is_enabled(), self._settled, self.get_config())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if self.running:
            return
        self._queue = asyncio.Queue()
        self._closing = False
        if self._engine.initial_status() is JobStatus.SCHEDULED:
            self._apply(self._engine.settle_normal(self._state))
        else:
            self._state.status = JobStatus.DISABLED
            self._log.info("scheduler.job.start_disabled")
        self._publish()
        self._task = asyncio.create_task(self._run_loop(), name=f"job-actor:{self.id}")
        if self._registry is not None:
            self._registration = asyncio.create_task(self._register(), name=f"job-register:{self.id}")
        self._log.info("scheduler.job.started", status=self._state.status.value)

    async def stop(self) -> None:
        """Stop the actor, letting an execution that has already started finish.

        Commands still queued behind it are dropped and no new timer is armed.
        """
        self._closing = True
        self._cancel_timer()
        if self.running and not self._idle.is_set():
            assert self._task is not None
            idle = asyncio.ensure_future(self._idle.wait())
            await asyncio.wait({idle, self._task}, return_when=asyncio.FIRST_COMPLETED)
            if not idle.done():
                idle.cancel()
        self._cancel_timer()
        for task in (self._registration, self._task):
            if task is None or task.done():
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._log.info("scheduler.job.stopped")

    async def join(self) -> None:
        """Wait until every queued command has been processed (or the actor died)."""
        if self._queue is None or self._task is None or self._task.done():
            return
        drained = asyncio.ensure_future(self._queue.join())
        await asyncio.wait({drained, self._task}, return_when=asyncio.FIRST_COMPLETED)
        if not drained.done():
            drained.cancel()

    async def wait_registered(self) -> None:
        if self._registration is not None:
            await asyncio.shield(self._registration)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def trigger_now(self, at_retry_count: int | None = None) -> None:
        """Enqueue a run.

        Without *at_retry_count* this is a fresh manual run at retry count 0;
        with it the run resumes an automatic retry sequence at that count.
        """
        if self._queue is None or not self.running or self._closing:
            raise ActorNotStartedError(self.id)
        if at_retry_count is None:
            self._queue.put_nowait(_Run(0, "manual"))
        else:
            self._queue.put_nowait(_Run(at_retry_count, "retry"))

    async def _run_loop(self) -> None:
        assert self._queue is not None
        while True:
            command = await self._queue.get()
            try:
                if self._closing:
                    self._log.debug("scheduler.job.command_dropped", source=command.source)
                    continue
                self._idle.clear()
                await self._handle(command)
            finally:
                self._idle.set()
                self._queue.task_done()

    async def _handle(self, command: _Run) -> None:
        if self._state.status is JobStatus.DISABLED:
            if not self._definition.is_enabled():
                self._log.info("scheduler.job.trigger_ignored", reason="disabled", source=command.source)
                return
            self._log.info("scheduler.job.reenabled", source=command.source)
        # Pre-empt whatever was pending; the run below re-arms from its own outcome.
        self._cancel_timer()
        settlement = await self._engine.run(self._state, command.retry_count)
        self._apply(settlement)
        self._publish()

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _apply(self, settlement: Settlement) -> None:
        if settlement.delay_ms is None:
            self._cancel_timer()
            return
        if settlement.is_retry:
            retry_count = self._state.retry_count
            self._arm(settlement.delay_ms, lambda: self._fire(_Run(retry_count, "retry")))
        else:
            self._arm(settlement.delay_ms, lambda: self._fire(_Run(0, "timer")))

    def _arm(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._cancel_timer()
        if self._closing:
            return
        self._timer = self._timers.call_later(delay_ms, callback)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, command: _Run) -> None:
        self._timer = None
        if self._queue is not None and self.running and not self._closing:
            self._queue.put_nowait(command)

    def _publish(self) -> None:
        self._settled = dataclasses.replace(self._state)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def _register(self) -> None:
        assert self._registry is not None
        registry = self._registry
        policy = self._settings.registration_policy()

        async def _attempt() -> None:
            registry.register(self.id, self)

        retry = RegistrationRetry(policy, sleep=self._registration_sleep, job_id=self.id)
        try:
            await retry.run(_attempt)
        except RegistryUnavailableError:
            self._log.warning(
                "scheduler.registration.gave_up",
                attempts=policy.max_attempts + 1,
            )
            return
        self._registered = True
        self._log.debug("scheduler.registration.done")
