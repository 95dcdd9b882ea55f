"""
mp_scheduling – In-process recurring job scheduling.

Import path convention::

    from mp_scheduling.application.scheduler import JobActor, JobDefinition
    from mp_scheduling.application.scheduler import IntervalTrigger, TimeOfDayTrigger
    from mp_scheduling.application.scheduler import get_registry
    from mp_scheduling.resilience.retry import RetryPolicy
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
