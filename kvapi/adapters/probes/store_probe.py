# kvapi/adapters/probes/store_probe.py
import structlog

from kvapi.core.domain.models import HealthCheckResult
from kvapi.core.ports.key_value_store import IKeyValueStore

logger = structlog.get_logger()

class StoreHealthProbe:
    """Reports a key-value store's liveness as a health check result."""

    def __init__(self, name: str, store: IKeyValueStore, timeout: float = 1.0):
        self.name = name
        self.store = store
        self.timeout = timeout

    async def check(self) -> HealthCheckResult:
        if await self.store.health_check():
            return HealthCheckResult(name=self.name, ok=True, message=f"{self.name} ok")
        logger.error("store_health_failed", probe=self.name)
        return HealthCheckResult(name=self.name, ok=False, message=f"{self.name} unreachable")
