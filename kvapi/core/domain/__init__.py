from .exceptions import (
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    ServiceNotConfiguredError,
    UnavailableError,
)
from .models import AggregatedHealth, HealthCheckResult, Item, Key, key_of

__all__ = [
    "AggregatedHealth",
    "DomainError",
    "HealthCheckResult",
    "InvalidArgumentError",
    "Item",
    "Key",
    "NotFoundError",
    "ServiceNotConfiguredError",
    "UnavailableError",
    "key_of",
]
