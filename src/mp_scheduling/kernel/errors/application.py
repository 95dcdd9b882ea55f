"""Application-layer errors – scheduler runtime concerns."""

from __future__ import annotations

from typing import Any

from mp_scheduling.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class SchedulerError(ApplicationError):
    """Base for errors raised by the scheduling runtime."""

    default_code = "scheduler_error"


class RegistryUnavailableError(SchedulerError):
    """The registry has not been started (or was stopped) and cannot accept registrations."""

    default_code = "registry_unavailable"

    def __init__(self, message: str = "Scheduler registry is not available", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ActorNotStartedError(SchedulerError):
    """A command was sent to a job actor that is not running."""

    default_code = "actor_not_started"

    def __init__(self, job_id: str) -> None:
        super().__init__(f"Job actor '{job_id}' is not running", detail={"job_id": job_id})
        self.job_id = job_id


class ResultError(SchedulerError):
    """``unwrap`` was called on an ``Err`` whose reason is not an exception."""

    default_code = "result_error"

    def __init__(self, reason: Any) -> None:
        super().__init__(f"Called unwrap on Err({reason!r})", detail={"reason": repr(reason)})
        self.reason = reason


__all__ = [
    "ActorNotStartedError",
    "ApplicationError",
    "RegistryUnavailableError",
    "ResultError",
    "SchedulerError",
]
