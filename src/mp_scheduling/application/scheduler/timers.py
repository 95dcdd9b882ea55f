"""Application scheduler – timer port and the asyncio-backed implementation."""
from __future__ import annotations

import asyncio
from typing import Callable, Protocol, runtime_checkable

__all__ = ["AsyncioTimerService", "TimerHandle", "TimerService"]


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None: ...
    def cancelled(self) -> bool: ...


@runtime_checkable
class TimerService(Protocol):
    """Port: run *callback* once after *delay_ms* milliseconds."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioTimerService:
    """Timers on the running event loop via :meth:`asyncio.AbstractEventLoop.call_later`."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0, delay_ms) / 1000, callback)
