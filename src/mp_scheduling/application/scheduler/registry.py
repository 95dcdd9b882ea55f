"""Application scheduler – SchedulerRegistry, the process-wide directory of job actors."""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from mp_scheduling.kernel.errors import RegistryUnavailableError
from mp_scheduling.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_scheduling.application.scheduler.actor import JobActor
    from mp_scheduling.application.scheduler.state import HealthSnapshot

__all__ = ["RegistryEntry", "SchedulerRegistry", "get_registry", "reset_registry"]

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class RegistryEntry:
    """One registration; ``enabled`` is the gate value at registration time."""

    id: str
    actor: JobActor
    enabled: bool


class SchedulerRegistry:
    """Accepts registrations, answers introspection queries and broadcasts manual triggers.

    The registry only keeps references; every query goes to the jobs live.
    A restarted actor takes over its predecessor's entry; duplicates of a
    live actor are appended as-is.
    """

    def __init__(self) -> None:
        self._entries: list[RegistryEntry] = []
        self._available = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        self._available = True
        logger.info("scheduler.registry.started")

    def stop(self) -> None:
        self._available = False
        logger.info("scheduler.registry.stopped", registered=len(self._entries))

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def entries(self) -> tuple[RegistryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def register(self, id: str, actor: JobActor) -> RegistryEntry:  # noqa: A002
        """Record *actor* under *id*.

        An entry whose actor has finished (stopped or crashed) is taken over
        in place by a new actor with the same id; live duplicates are appended.
        """
        if not self._available:
            raise RegistryUnavailableError()
        entry = RegistryEntry(id=id, actor=actor, enabled=actor.is_enabled())
        for index, existing in enumerate(self._entries):
            if existing.id == id and existing.actor is not actor and existing.actor.done:
                self._entries[index] = entry
                logger.info("scheduler.registry.replaced", job_id=id, enabled=entry.enabled)
                return entry
        self._entries.append(entry)
        logger.info("scheduler.registry.registered", job_id=id, enabled=entry.enabled)
        return entry

    def lookup(self, id: str) -> JobActor | None:  # noqa: A002
        """Most recently registered actor for *id*, or ``None``."""
        for entry in reversed(self._entries):
            if entry.id == id:
                return entry.actor
        return None

    def get_all_schedulers(self) -> list[dict[str, Any]]:
        return [
            {"id": entry.id, "enabled": entry.actor.is_enabled(), "config": entry.actor.get_config()}
            for entry in self._entries
        ]

    def execute_all(self) -> int:
        """Send a manual trigger to every registered actor; returns how many were sent.

        Disabled actors receive the command too and ignore it.
        """
        sent = 0
        for entry in self._entries:
            if not entry.actor.running:
                logger.warning("scheduler.registry.actor_not_running", job_id=entry.id)
                continue
            entry.actor.trigger_now()
            sent += 1
        logger.info("scheduler.registry.execute_all", sent=sent)
        return sent

    def summary(self) -> dict[str, int]:
        live = [entry.actor.is_enabled() for entry in self._entries]
        return {
            "total": len(live),
            "enabled": sum(live),
            "disabled": len(live) - sum(live),
            "registered_enabled": sum(1 for e in self._entries if e.enabled),
            "registered_disabled": sum(1 for e in self._entries if not e.enabled),
        }

    def health_snapshots(self) -> list[HealthSnapshot]:
        return [entry.actor.health_check() for entry in self._entries]


_default_registry: SchedulerRegistry | None = None


def get_registry() -> SchedulerRegistry:
    """Return the process-wide registry, creating it (not started) on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = SchedulerRegistry()
    return _default_registry


def reset_registry() -> None:
    """Drop the process-wide registry (tests)."""
    global _default_registry
    _default_registry = None
