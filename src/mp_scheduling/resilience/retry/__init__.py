"""Resilience – exponential backoff with optional jitter."""
from mp_scheduling.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from mp_scheduling.resilience.retry.jitter import JitterStrategy, NoJitter, ProportionalJitter
from mp_scheduling.resilience.retry.policy import RetryPolicy
from mp_scheduling.resilience.retry.registration import RegistrationRetry

__all__ = [
    "BackoffStrategy",
    "ExponentialBackoff",
    "JitterStrategy",
    "NoJitter",
    "ProportionalJitter",
    "RegistrationRetry",
    "RetryPolicy",
]
