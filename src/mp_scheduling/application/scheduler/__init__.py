"""Application scheduler – recurring job actors, triggers and the registry."""
from mp_scheduling.application.scheduler.actor import JobActor
from mp_scheduling.application.scheduler.engine import ExecutionEngine, Settlement
from mp_scheduling.application.scheduler.job import Job, JobDefinition
from mp_scheduling.application.scheduler.registry import (
    RegistryEntry,
    SchedulerRegistry,
    get_registry,
    reset_registry,
)
from mp_scheduling.application.scheduler.state import HealthSnapshot, JobState, JobStatus, sanitize
from mp_scheduling.application.scheduler.supervisor import SchedulerSupervisor
from mp_scheduling.application.scheduler.timers import AsyncioTimerService, TimerHandle, TimerService
from mp_scheduling.application.scheduler.triggers import (
    DynamicTrigger,
    IntervalTrigger,
    TimeOfDayTrigger,
    Trigger,
)

__all__ = [
    "AsyncioTimerService",
    "DynamicTrigger",
    "ExecutionEngine",
    "HealthSnapshot",
    "IntervalTrigger",
    "Job",
    "JobActor",
    "JobDefinition",
    "JobState",
    "JobStatus",
    "RegistryEntry",
    "SchedulerRegistry",
    "SchedulerSupervisor",
    "Settlement",
    "TimeOfDayTrigger",
    "TimerHandle",
    "TimerService",
    "Trigger",
    "get_registry",
    "reset_registry",
    "sanitize",
]
