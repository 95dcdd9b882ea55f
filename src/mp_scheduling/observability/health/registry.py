from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mp_scheduling.observability.health.check import HealthCheck, HealthStatus
from mp_scheduling.observability.health.jobs import JobHealthCheck

if TYPE_CHECKING:
    from mp_scheduling.application.scheduler import SchedulerRegistry

__all__ = ["HealthReport", "HealthRegistry"]


@dataclass
class HealthReport:
    results: dict[str, HealthStatus] = field(default_factory=dict)

    @property
    def overall(self) -> bool:
        return all(s.healthy for s in self.results.values())

    def to_dict(self) -> dict:
        return {
            "healthy": self.overall,
            "checks": {
                name: {
                    "healthy": s.healthy,
                    "detail": s.detail,
                    "latency_ms": round(s.latency_ms, 2),
                    **({"data": s.data} if s.data else {}),
                }
                for name, s in self.results.items()
            },
        }


class HealthRegistry:
    """Runs registered health checks and aggregates results."""

    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    def register_scheduler(self, registry: SchedulerRegistry) -> int:
        """Add a :class:`JobHealthCheck` per job id in *registry*; checks follow restarted actors."""
        known = {c.name for c in self._checks}
        added = 0
        for entry in registry.entries:
            check = JobHealthCheck(entry.actor, registry)
            if check.name in known:
                continue
            self.register(check)
            known.add(check.name)
            added += 1
        return added

    async def run_all(self) -> HealthReport:
        report = HealthReport()
        for check in self._checks:
            try:
                status = await check.timed_check()
            except Exception as exc:  # noqa: BLE001
                status = HealthStatus(healthy=False, detail=f"exception: {exc}")
            report.results[check.name] = status
        return report
