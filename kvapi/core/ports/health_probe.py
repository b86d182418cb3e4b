# kvapi/core/ports/health_probe.py
from typing import Protocol

from kvapi.core.domain.models import HealthCheckResult

class IHealthProbe(Protocol):
    """Port for a single downstream dependency check."""

    name: str
    timeout: float  # seconds

    async def check(self) -> HealthCheckResult:
        """Probes the dependency once. Should report failure rather than raise."""
        ...
