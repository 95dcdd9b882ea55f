"""Testing fakes – clock, timers and a scripted job."""
from mp_scheduling.testing.fakes.clock import FakeClock
from mp_scheduling.testing.fakes.jobs import ScriptedJob
from mp_scheduling.testing.fakes.timers import FakeTimer, FakeTimerService

__all__ = ["FakeClock", "FakeTimer", "FakeTimerService", "ScriptedJob"]
