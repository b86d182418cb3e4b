"""
Core Ports (Interfaces).

This package defines the Protocols that the Infrastructure Adapters must
implement. These interfaces let the use cases talk to storage, probes and
logging without knowing which backend sits behind them.
"""

from .health_probe import IHealthProbe
from .key_value_store import IKeyValueStore
from .logger import ILogger

__all__ = [
    "IHealthProbe",
    "IKeyValueStore",
    "ILogger",
]
