"""Application scheduler – ExecutionEngine, the state machine shared by all job actors.

The engine runs one attempt of a job, classifies the outcome and decides what
the actor arms next: the trigger's normal delay, a backoff retry, or nothing
(job disabled).  It mutates the ``JobState`` it is given and never touches
timers itself.
"""
from __future__ import annotations

import dataclasses
import traceback
from datetime import timedelta
from typing import Any

from mp_scheduling.application.scheduler.job import JobDefinition
from mp_scheduling.application.scheduler.state import JobState, JobStatus, sanitize
from mp_scheduling.kernel.time import Clock, SystemClock
from mp_scheduling.kernel.types import Err, Ok
from mp_scheduling.observability.logging import get_logger
from mp_scheduling.resilience.retry import JitterStrategy, RetryPolicy

__all__ = ["ExecutionEngine", "Settlement"]

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class Settlement:
    """What the actor should arm after a transition.

    ``delay_ms`` is ``None`` when no timer should be armed (job disabled).
    """

    status: JobStatus
    delay_ms: int | None
    is_retry: bool = False


class ExecutionEngine:
    def __init__(
        self,
        definition: JobDefinition,
        clock: Clock | None = None,
        jitter: JitterStrategy | None = None,
        policy: RetryPolicy | None = None,
    ) -> None:
        self._definition = definition
        self._policy = policy or definition.retry_policy or RetryPolicy()
        self._clock = clock or SystemClock()
        self._jitter = jitter
        self._log = logger.bind(job_id=definition.id)

    @property
    def definition(self) -> JobDefinition:
        return self._definition

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def next_normal_delay_ms(self) -> int:
        return max(0, self._definition.trigger.next_delay_ms(self._clock.now()))

    def initial_status(self) -> JobStatus:
        return JobStatus.SCHEDULED if self._definition.is_enabled() else JobStatus.DISABLED

    def settle_normal(self, state: JobState) -> Settlement:
        """Re-evaluate the feature gate and arm the trigger's normal delay."""
        if not self._definition.is_enabled():
            state.status = JobStatus.DISABLED
            state.next_run_at = None
            self._log.info("scheduler.job.disabled")
            return Settlement(JobStatus.DISABLED, None)
        delay_ms = self.next_normal_delay_ms()
        state.status = JobStatus.SCHEDULED
        state.next_run_at = self._clock.now() + timedelta(milliseconds=delay_ms)
        self._log.debug("scheduler.job.scheduled", delay_ms=delay_ms)
        return Settlement(JobStatus.SCHEDULED, delay_ms)

    async def run(self, state: JobState, retry_count: int) -> Settlement:
        """Execute one attempt at *retry_count* and settle the state."""
        policy = self._policy
        state.status = JobStatus.EXECUTING
        state.retry_count = retry_count
        state.last_execution_time = self._clock.now()
        state.next_run_at = None
        log = self._log.bind(retry_count=retry_count)
        log.debug("scheduler.job.executing")

        try:
            outcome = await self._definition.job.execute(state.context)
        except Exception as exc:  # noqa: BLE001
            state.last_stacktrace = traceback.format_exc()
            log.error("scheduler.job.fault", fault=type(exc).__name__, reason=str(exc), exc_info=True)
            outcome = Err({"fault": type(exc).__name__, "reason": str(exc)}, state=state.context)

        if not isinstance(outcome, (Ok, Err)):
            outcome = Ok(outcome, state=state.context)
        state.context = outcome.state

        if isinstance(outcome, Ok):
            return self._on_success(state, outcome.value, log)
        return self._on_failure(state, outcome.error, policy, log)

    def _on_success(self, state: JobState, value: Any, log: Any) -> Settlement:
        state.retry_count = 0
        state.retries_exhausted = False
        state.last_result = Ok(sanitize(value))
        state.success_count += 1
        log.info("scheduler.job.succeeded")
        return self.settle_normal(state)

    def _on_failure(self, state: JobState, reason: Any, policy: Any, log: Any) -> Settlement:
        clean = sanitize(reason)
        state.last_result = Err(clean)
        state.last_error = clean
        state.error_count += 1

        if policy.should_retry(state.retry_count):
            delay_ms = policy.backoff_ms(state.retry_count, self._jitter)
            state.retry_count += 1
            state.status = JobStatus.RETRY_PENDING
            state.next_run_at = self._clock.now() + timedelta(milliseconds=delay_ms)
            log.warning(
                "scheduler.job.retry_scheduled",
                reason=clean,
                attempt=state.retry_count,
                max_attempts=policy.max_attempts,
                delay_ms=delay_ms,
            )
            return Settlement(JobStatus.RETRY_PENDING, delay_ms, is_retry=True)

        state.retry_count = 0
        state.retries_exhausted = True
        log.warning("scheduler.job.retries_exhausted", reason=clean, max_attempts=policy.max_attempts)
        return self.settle_normal(state)
