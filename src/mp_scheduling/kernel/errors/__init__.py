"""Kernel error hierarchy - public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── ValidationError
    │       └── InvalidTriggerError
    └── ApplicationError         (application.py)
        ├── SchedulerError
        │   ├── RegistryUnavailableError
        │   ├── ActorNotStartedError
        │   └── ResultError
        └── ConfigError          (mp_scheduling.config.validation)
"""

from mp_scheduling.kernel.errors.application import (
    ActorNotStartedError,
    ApplicationError,
    RegistryUnavailableError,
    ResultError,
    SchedulerError,
)
from mp_scheduling.kernel.errors.base import BaseError
from mp_scheduling.kernel.errors.domain import (
    DomainError,
    InvalidTriggerError,
    ValidationError,
)

__all__ = [
    "ActorNotStartedError",
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InvalidTriggerError",
    "RegistryUnavailableError",
    "ResultError",
    "SchedulerError",
    "ValidationError",
]
