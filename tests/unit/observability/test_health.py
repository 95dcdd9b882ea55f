"""Unit tests for health checks and the job health adapter."""
import asyncio

from mp_scheduling.application.scheduler import (
    IntervalTrigger,
    JobActor,
    JobDefinition,
    SchedulerRegistry,
)
from mp_scheduling.kernel.types import Err
from mp_scheduling.observability.health import (
    HealthCheck,
    HealthRegistry,
    HealthReport,
    HealthStatus,
    JobHealthCheck,
)
from mp_scheduling.resilience.retry import RetryPolicy
from mp_scheduling.testing.fakes import ScriptedJob


class _OkCheck(HealthCheck):
    @property
    def name(self) -> str:
        return "ok_check"

    async def check(self) -> HealthStatus:
        return HealthStatus(healthy=True, detail="all good")


class _BoomCheck(HealthCheck):
    @property
    def name(self) -> str:
        return "boom"

    async def check(self) -> HealthStatus:
        raise RuntimeError("unexpected crash")


def _actor(job_id, job, timers, clock, max_attempts=1):
    definition = JobDefinition(
        id=job_id,
        job=job,
        trigger=IntervalTrigger(5000),
        retry_policy=RetryPolicy(max_attempts=max_attempts, jitter=False),
    )
    return JobActor(definition, timers=timers, clock=clock)


class TestHealthRegistry:
    def test_all_healthy(self):
        reg = HealthRegistry()
        reg.register(_OkCheck())
        report = asyncio.run(reg.run_all())
        assert report.overall is True
        assert report.results["ok_check"].latency_ms >= 0

    def test_exception_captured_as_failure(self):
        reg = HealthRegistry()
        reg.register(_BoomCheck())
        report = asyncio.run(reg.run_all())
        assert report.overall is False
        assert report.results["boom"].detail == "exception: unexpected crash"

    def test_empty_report_is_healthy(self):
        assert HealthReport().overall is True

    def test_to_dict_omits_empty_data(self):
        report = HealthReport(results={"x": HealthStatus(healthy=True)})
        assert report.to_dict() == {
            "healthy": True,
            "checks": {"x": {"healthy": True, "detail": None, "latency_ms": 0.0}},
        }


class TestJobHealthCheck:
    def test_fresh_job_is_healthy(self, timers, fake_clock):
        async def _run():
            actor = _actor("fresh", ScriptedJob(), timers, fake_clock)
            await actor.start()
            status = await JobHealthCheck(actor).check()
            await actor.stop()
            return status

        status = asyncio.run(_run())
        assert status.healthy is True
        assert status.detail is None
        assert status.data["name"] == "fresh"
        assert status.data["status"] == "scheduled"

    def test_retrying_job_is_still_healthy(self, timers, fake_clock):
        async def _run():
            actor = _actor("flaky", ScriptedJob([Err("timeout")]), timers, fake_clock)
            await actor.start()
            actor.trigger_now()
            await actor.join()
            status = await JobHealthCheck(actor).check()
            await actor.stop()
            return status

        status = asyncio.run(_run())
        assert status.healthy is True
        assert status.detail == "retrying (1): 'timeout'"

    def test_exhausted_job_is_unhealthy(self, timers, fake_clock):
        async def _run():
            actor = _actor("broken", ScriptedJob([Err("down"), Err("down")]), timers, fake_clock)
            await actor.start()
            actor.trigger_now()
            await actor.join()
            timers.fire_next()
            await actor.join()
            check = JobHealthCheck(actor)
            status = await check.check()
            await actor.stop()
            return check.name, status

        name, status = asyncio.run(_run())
        assert name == "job:broken"
        assert status.healthy is False
        assert status.detail == "retries exhausted: 'down'"
        assert status.data["retries_exhausted"] is True

    def test_register_scheduler_adds_each_job_once(self, timers, fake_clock):
        async def _run():
            registry = SchedulerRegistry()
            registry.start()
            a = _actor("a", ScriptedJob(), timers, fake_clock)
            b = _actor("b", ScriptedJob(enabled=False), timers, fake_clock)
            for actor in (a, b):
                await actor.start()
                registry.register(actor.id, actor)
            registry.register(a.id, a)

            health = HealthRegistry()
            added = health.register_scheduler(registry)
            again = health.register_scheduler(registry)
            report = await health.run_all()
            for actor in (a, b):
                await actor.stop()
            return added, again, report

        added, again, report = asyncio.run(_run())
        assert (added, again) == (2, 0)
        assert set(report.results) == {"job:a", "job:b"}
        assert report.overall is True
        assert report.to_dict()["checks"]["job:b"]["data"]["disabled"] is True
