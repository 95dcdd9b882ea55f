"""Shared fixtures for the scheduler test-suite."""

from __future__ import annotations

import pytest

from mp_scheduling.application.scheduler import reset_registry
from mp_scheduling.resilience.retry import NoJitter
from mp_scheduling.testing.fakes import FakeClock, FakeTimerService


@pytest.fixture
def fake_clock():
    """FrozenClock pinned to 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def timers() -> FakeTimerService:
    return FakeTimerService()


@pytest.fixture
def no_jitter() -> NoJitter:
    return NoJitter()


@pytest.fixture(autouse=True)
def _fresh_registry():
    reset_registry()
    yield
    reset_registry()
