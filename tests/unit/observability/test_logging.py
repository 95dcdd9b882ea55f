"""Unit tests for structlog configuration and scheduler log events."""

from __future__ import annotations

import asyncio
import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from mp_scheduling.application.scheduler import IntervalTrigger, JobActor, JobDefinition
from mp_scheduling.config.settings import SchedulerSettings
from mp_scheduling.kernel.types import Err
from mp_scheduling.observability.logging import JsonLoggerFactory, configure_logging, get_logger
from mp_scheduling.resilience.retry import RetryPolicy
from mp_scheduling.testing.fakes import ScriptedJob


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# get_logger
# ---------------------------------------------------------------------------


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger("svc", component="scheduler").info("hello", n=1)
        assert logs == [{"component": "scheduler", "n": 1, "event": "hello", "log_level": "info"}]

    def test_without_values(self) -> None:
        with capture_logs() as logs:
            get_logger().warning("plain")
        assert logs[0]["event"] == "plain"


# ---------------------------------------------------------------------------
# JsonLoggerFactory
# ---------------------------------------------------------------------------


class TestJsonLoggerFactory:
    def test_renders_json_lines(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(level=logging.INFO, json=True)
        structlog.get_logger("jobs.test").info("scheduler.job.succeeded", job_id="a")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "scheduler.job.succeeded"
        assert payload["job_id"] == "a"
        assert payload["level"] == "info"
        assert payload["logger"] == "jobs.test"
        assert "timestamp" in payload

    def test_level_filters(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(level=logging.WARNING)
        structlog.get_logger("jobs.test").info("hidden")
        assert "hidden" not in capsys.readouterr().err

    def test_configure_logging_accepts_names(self, restore_logging) -> None:
        configure_logging("debug", json=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_from_settings(self, restore_logging) -> None:
        JsonLoggerFactory.from_settings(SchedulerSettings(log_level="error", log_json=False))
        root = logging.getLogger()
        assert root.level == logging.ERROR
        assert len(root.handlers) == 1


# ---------------------------------------------------------------------------
# Scheduler events
# ---------------------------------------------------------------------------


class TestSchedulerEvents:
    def test_retry_and_exhaustion_are_logged(self, timers, fake_clock) -> None:
        async def _run() -> list[dict]:
            with capture_logs() as logs:
                definition = JobDefinition(
                    "noisy",
                    ScriptedJob([Err("down"), Err("down")]),
                    IntervalTrigger(1000),
                    RetryPolicy(max_attempts=1, jitter=False),
                )
                actor = JobActor(definition, timers=timers, clock=fake_clock)
                await actor.start()
                actor.trigger_now()
                await actor.join()
                timers.fire_next()
                await actor.join()
                await actor.stop()
            return logs

        logs = asyncio.run(_run())
        events = [e["event"] for e in logs]
        assert "scheduler.job.retry_scheduled" in events
        assert "scheduler.job.retries_exhausted" in events
        retry = next(e for e in logs if e["event"] == "scheduler.job.retry_scheduled")
        assert retry["job_id"] == "noisy"
        assert retry["delay_ms"] == 1000
        assert retry["log_level"] == "warning"

    def test_fault_logged_with_exception(self, timers, fake_clock) -> None:
        async def _run() -> list[dict]:
            with capture_logs() as logs:
                definition = JobDefinition("faulty", ScriptedJob([KeyError("k")]), IntervalTrigger(1000))
                actor = JobActor(definition, timers=timers, clock=fake_clock)
                await actor.start()
                actor.trigger_now()
                await actor.join()
                await actor.stop()
            return logs

        fault = next(e for e in asyncio.run(_run()) if e["event"] == "scheduler.job.fault")
        assert fault["fault"] == "KeyError"
        assert fault["log_level"] == "error"

    def test_ignored_trigger_is_logged(self, timers, fake_clock) -> None:
        async def _run() -> list[dict]:
            with capture_logs() as logs:
                definition = JobDefinition("off", ScriptedJob(enabled=False), IntervalTrigger(1000))
                actor = JobActor(definition, timers=timers, clock=fake_clock)
                await actor.start()
                actor.trigger_now()
                await actor.join()
                await actor.stop()
            return logs

        ignored = next(e for e in asyncio.run(_run()) if e["event"] == "scheduler.job.trigger_ignored")
        assert ignored["source"] == "manual"
        assert ignored["job_id"] == "off"
