"""Resilience – RegistrationRetry, a tenacity-backed retry loop for registry calls."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

import tenacity

from mp_scheduling.kernel.errors import RegistryUnavailableError
from mp_scheduling.observability.logging import get_logger
from mp_scheduling.resilience.retry.policy import RetryPolicy

T = TypeVar("T")
logger = get_logger(__name__)


class RegistrationRetry:
    """Retry a coroutine while the registry reports itself unavailable.

    Waits follow :meth:`RetryPolicy.backoff_ms`; the call is attempted once
    and then retried up to ``policy.max_attempts`` more times.  The last
    :class:`RegistryUnavailableError` is re-raised once retries run out.

    Parameters
    ----------
    policy:
        Backoff parameters.
    context:
        Extra fields bound on every log line (for example ``job_id``).
    sleep:
        Coroutine used to wait between attempts; tests pass a no-op.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
        **context: Any,
    ) -> None:
        self._policy = policy
        self._sleep = sleep
        self._log = logger.bind(**context)

    def _wait(self, retry_state: tenacity.RetryCallState) -> float:
        return self._policy.backoff_ms(retry_state.attempt_number - 1) / 1000

    def _before_sleep(self, retry_state: tenacity.RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        self._log.info(
            "scheduler.registration.retry",
            attempt=retry_state.attempt_number,
            delay_ms=round(delay * 1000),
        )

    def _build(self) -> tenacity.AsyncRetrying:
        kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self._policy.max_attempts + 1),
            wait=self._wait,
            retry=tenacity.retry_if_exception_type(RegistryUnavailableError),
            before_sleep=self._before_sleep,
            reraise=True,
            **kwargs,
        )

    async def run(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func*, retrying on :class:`RegistryUnavailableError`."""
        return await self._build()(func)


__all__ = ["RegistrationRetry"]
