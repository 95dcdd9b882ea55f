"""Observability – Health Checks."""
from mp_scheduling.observability.health.check import HealthCheck, HealthStatus
from mp_scheduling.observability.health.jobs import JobHealthCheck
from mp_scheduling.observability.health.registry import HealthRegistry, HealthReport

__all__ = [
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
    "JobHealthCheck",
]
