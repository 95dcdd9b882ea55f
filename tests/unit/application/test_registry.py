"""Unit tests for SchedulerRegistry and background registration."""

from __future__ import annotations

import asyncio

import pytest

from mp_scheduling.application.scheduler import (
    IntervalTrigger,
    JobActor,
    JobDefinition,
    SchedulerRegistry,
    get_registry,
)
from mp_scheduling.config.settings import SchedulerSettings
from mp_scheduling.kernel.errors import RegistryUnavailableError
from mp_scheduling.kernel.types import Ok
from mp_scheduling.resilience.retry import RetryPolicy
from mp_scheduling.testing.fakes import ScriptedJob


async def _no_sleep(_: float) -> None:
    return None


def _actor(job_id: str, job: ScriptedJob, registry: SchedulerRegistry | None, timers, **kwargs) -> JobActor:
    definition = JobDefinition(
        id=job_id,
        job=job,
        trigger=IntervalTrigger(60_000),
        retry_policy=RetryPolicy(jitter=False),
    )
    return JobActor(definition, registry=registry, timers=timers, registration_sleep=_no_sleep, **kwargs)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegister:
    def test_unavailable_before_start(self, timers) -> None:
        registry = SchedulerRegistry()
        actor = _actor("a", ScriptedJob(), registry, timers)
        with pytest.raises(RegistryUnavailableError):
            registry.register("a", actor)

    def test_records_gate_at_registration(self, timers) -> None:
        registry = SchedulerRegistry()
        registry.start()
        job = ScriptedJob(enabled=False)
        entry = registry.register("a", _actor("a", job, registry, timers))
        assert entry.enabled is False
        job.enabled = True
        assert registry.entries[0].enabled is False
        assert registry.get_all_schedulers()[0]["enabled"] is True

    def test_duplicates_are_kept(self, timers) -> None:
        registry = SchedulerRegistry()
        registry.start()
        actor = _actor("a", ScriptedJob(), registry, timers)
        registry.register("a", actor)
        registry.register("a", actor)
        assert len(registry) == 2

    def test_new_actor_takes_over_entry_of_stopped_one(self, timers) -> None:
        async def _run() -> None:
            registry = SchedulerRegistry()
            registry.start()
            old = _actor("a", ScriptedJob(), None, timers)
            other = _actor("b", ScriptedJob(), None, timers)
            await old.start()
            registry.register("a", old)
            registry.register("b", other)
            await old.stop()
            new = _actor("a", ScriptedJob(), None, timers)
            registry.register("a", new)
            assert [entry.id for entry in registry.entries] == ["a", "b"]
            assert registry.lookup("a") is new
            assert registry.lookup("missing") is None
        asyncio.run(_run())

    def test_stop_makes_registry_unavailable(self) -> None:
        registry = SchedulerRegistry()
        registry.start()
        registry.stop()
        assert registry.is_available is False

    def test_actor_registers_in_background(self, timers) -> None:
        async def _run() -> None:
            registry = SchedulerRegistry()
            registry.start()
            actor = _actor("a", ScriptedJob(), registry, timers)
            await actor.start()
            await actor.wait_registered()
            assert actor.registered is True
            assert [e.id for e in registry.entries] == ["a"]
            await actor.stop()
        asyncio.run(_run())

    def test_registration_retries_until_registry_starts(self, timers) -> None:
        async def _run() -> None:
            registry = SchedulerRegistry()
            sleeps: list[float] = []

            async def _sleep(seconds: float) -> None:
                sleeps.append(seconds)
                if len(sleeps) == 2:
                    registry.start()

            definition = JobDefinition(id="late", job=ScriptedJob(), trigger=IntervalTrigger(1000))
            actor = JobActor(definition, registry=registry, timers=timers, registration_sleep=_sleep)
            await actor.start()
            await actor.wait_registered()
            assert actor.registered is True
            assert len(sleeps) == 2
            assert len(registry) == 1
            await actor.stop()
        asyncio.run(_run())

    def test_gives_up_but_keeps_running(self, timers) -> None:
        async def _run() -> None:
            registry = SchedulerRegistry()
            settings = SchedulerSettings(registration_max_attempts=2)
            job = ScriptedJob([Ok("still works")])
            actor = _actor("orphan", job, registry, timers, settings=settings)
            await actor.start()
            await actor.wait_registered()
            assert actor.registered is False
            assert actor.running
            actor.trigger_now()
            await actor.join()
            assert job.executions == 1
            await actor.stop()
        asyncio.run(_run())


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_get_all_schedulers(self, timers) -> None:
        registry = SchedulerRegistry()
        registry.start()
        registry.register("a", _actor("a", ScriptedJob(), registry, timers))
        registry.register("b", _actor("b", ScriptedJob(enabled=False), registry, timers))
        assert registry.get_all_schedulers() == [
            {"id": "a", "enabled": True, "config": {"type": "interval", "interval": 60_000, "description": "Scripted test job"}},
            {"id": "b", "enabled": False, "config": {"type": "interval", "interval": 60_000, "description": "Scripted test job"}},
        ]

    def test_empty_registry(self) -> None:
        registry = SchedulerRegistry()
        registry.start()
        assert registry.get_all_schedulers() == []
        assert registry.execute_all() == 0

    def test_summary(self, timers) -> None:
        registry = SchedulerRegistry()
        registry.start()
        flip = ScriptedJob(enabled=False)
        registry.register("a", _actor("a", ScriptedJob(), registry, timers))
        registry.register("b", _actor("b", flip, registry, timers))
        flip.enabled = True
        assert registry.summary() == {
            "total": 2,
            "enabled": 2,
            "disabled": 0,
            "registered_enabled": 1,
            "registered_disabled": 1,
        }

    def test_health_snapshots(self, timers) -> None:
        registry = SchedulerRegistry()
        registry.start()
        registry.register("a", _actor("a", ScriptedJob(), registry, timers))
        [snap] = registry.health_snapshots()
        assert snap.name == "a"
        assert snap.last_execution is None

    def test_default_registry_is_shared(self) -> None:
        assert get_registry() is get_registry()
        assert get_registry().is_available is False


# ---------------------------------------------------------------------------
# execute_all
# ---------------------------------------------------------------------------


class TestExecuteAll:
    def test_triggers_every_actor_and_disabled_ones_ignore_it(self, timers) -> None:
        async def _run() -> None:
            registry = SchedulerRegistry()
            registry.start()
            jobs = {"a": ScriptedJob(), "b": ScriptedJob(), "off": ScriptedJob(enabled=False)}
            actors = [_actor(name, job, registry, timers) for name, job in jobs.items()]
            for actor in actors:
                await actor.start()
                await actor.wait_registered()

            assert registry.execute_all() == 3
            for actor in actors:
                await actor.join()

            assert jobs["a"].executions == 1
            assert jobs["b"].executions == 1
            assert jobs["off"].executions == 0
            for actor in actors:
                await actor.stop()
        asyncio.run(_run())

    def test_skips_actors_that_are_not_running(self, timers) -> None:
        async def _run() -> None:
            registry = SchedulerRegistry()
            registry.start()
            running = _actor("up", ScriptedJob(), registry, timers)
            await running.start()
            await running.wait_registered()
            registry.register("down", _actor("down", ScriptedJob(), registry, timers))

            assert registry.execute_all() == 1
            await running.join()
            await running.stop()
        asyncio.run(_run())
