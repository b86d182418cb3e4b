# kvapi/core/use_cases/check_health.py
import asyncio
from typing import Dict, List, Mapping, Optional, Sequence

import structlog

from kvapi.core.domain.models import AggregatedHealth, HealthCheckResult
from kvapi.core.ports.health_probe import IHealthProbe
from kvapi.core.ports.logger import ILogger

BASE_MESSAGE = "api up"
MESSAGE_SEPARATOR = "; "

class HealthAggregator:
    """
    Use Case: folds the health of every configured dependency into one verdict.

    Probes run concurrently, each bounded by its own timeout, and are reported
    in construction order. A failing probe never hides the others. Dependencies
    that were not configured are simply not passed in, so they contribute
    nothing to the verdict or the message.
    """

    def __init__(
        self,
        probes: Sequence[IHealthProbe] = (),
        metadata: Optional[Mapping[str, str]] = None,
        logger: Optional[ILogger] = None,
        base_message: str = BASE_MESSAGE,
    ):
        self.probes = tuple(probes)
        self.metadata: Dict[str, str] = dict(metadata or {})
        self.logger = logger if logger is not None else structlog.get_logger()
        self.base_message = base_message

    async def check(self) -> AggregatedHealth:
        results: List[HealthCheckResult] = list(
            await asyncio.gather(*(self._run_probe(p) for p in self.probes))
        )

        ok = all(r.ok for r in results)
        message = MESSAGE_SEPARATOR.join(
            [self.base_message] + [r.message for r in results if r.message]
        )
        return AggregatedHealth(ok=ok, message=message, metadata=self.metadata, checks=results)

    async def _run_probe(self, probe: IHealthProbe) -> HealthCheckResult:
        try:
            return await asyncio.wait_for(probe.check(), timeout=probe.timeout)
        except asyncio.TimeoutError:
            self.logger.warning("health_probe_timeout", probe=probe.name, timeout=probe.timeout)
        except Exception as e:
            self.logger.error("health_probe_crashed", probe=probe.name, error=str(e))
        return HealthCheckResult(name=probe.name, ok=False, message=f"{probe.name} unreachable")
