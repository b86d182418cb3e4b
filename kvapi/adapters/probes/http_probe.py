# kvapi/adapters/probes/http_probe.py
from typing import Optional

import httpx
import structlog

from kvapi.core.domain.models import HealthCheckResult

logger = structlog.get_logger()

class HttpReachabilityProbe:
    """
    Driven Adapter: checks that an external HTTP endpoint answers 2xx.
    The endpoint is used verbatim; `path` is appended to it.
    """

    def __init__(
        self,
        name: str,
        endpoint: str,
        path: str = "/_localstack/health",
        timeout: float = 0.3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.name = name
        self.endpoint = endpoint
        self.path = path
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return self.endpoint + self.path

    async def check(self) -> HealthCheckResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
            if response.is_success:
                return HealthCheckResult(name=self.name, ok=True, message=f"{self.name} ok")
            logger.warning("reachability_probe_failed", probe=self.name, url=self.url, status=response.status_code)
        except httpx.HTTPError as e:
            logger.warning("reachability_probe_failed", probe=self.name, url=self.url, error=str(e))
        return HealthCheckResult(name=self.name, ok=False, message=f"{self.name} unreachable")
