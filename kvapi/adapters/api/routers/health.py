# kvapi/adapters/api/routers/health.py
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
import structlog

from kvapi.adapters.api.dependencies import HealthAggregatorDep

logger = structlog.get_logger()

router = APIRouter(tags=["System"])

@router.get("/health")
async def health(aggregator: HealthAggregatorDep) -> JSONResponse:
    """
    Aggregated dependency check.
    Returns 503 Service Unavailable (same body shape) if any configured
    dependency is down.
    """
    result = await aggregator.check()

    status_code = status.HTTP_200_OK
    if not result.ok:
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("health_check_failed", message=result.message)

    return JSONResponse(status_code=status_code, content=result.to_response())
