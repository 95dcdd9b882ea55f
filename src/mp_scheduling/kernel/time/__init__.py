"""Kernel time – Clock port + implementations."""
from mp_scheduling.kernel.time.clock import Clock, FrozenClock, SystemClock, to_millis, utc_now

__all__ = ["Clock", "FrozenClock", "SystemClock", "to_millis", "utc_now"]
