"""Resilience – retry backoff and jitter used by job actors and registration."""

from mp_scheduling.resilience.retry import (
    BackoffStrategy,
    ExponentialBackoff,
    JitterStrategy,
    NoJitter,
    ProportionalJitter,
    RegistrationRetry,
    RetryPolicy,
)

__all__ = [
    "BackoffStrategy",
    "ExponentialBackoff",
    "JitterStrategy",
    "NoJitter",
    "ProportionalJitter",
    "RegistrationRetry",
    "RetryPolicy",
]
