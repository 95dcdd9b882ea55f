"""Testing helpers – deterministic fakes for scheduler tests."""
from mp_scheduling.testing.fakes import FakeClock, FakeTimer, FakeTimerService, ScriptedJob

__all__ = ["FakeClock", "FakeTimer", "FakeTimerService", "ScriptedJob"]
