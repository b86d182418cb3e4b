# kvapi/adapters/api/dependencies.py
from __future__ import annotations

import json
from typing import Annotated, Optional

from fastapi import Depends, Request

from kvapi.core.domain.exceptions import InvalidArgumentError, ServiceNotConfiguredError
from kvapi.core.domain.models import Item
from kvapi.core.use_cases.check_health import HealthAggregator
from kvapi.core.use_cases.item_crud import ItemService

DEFAULT_LIST_LIMIT = 50


# -----------------------------------------------------------------------------
# Use case injection (instances live on app.state, set by create_app)
# -----------------------------------------------------------------------------
async def get_health_aggregator(request: Request) -> HealthAggregator:
    return request.app.state.health_aggregator


async def get_item_service(request: Request) -> ItemService:
    """The item service is optional; its absence is reported, not hidden as a 404."""
    service: Optional[ItemService] = request.app.state.item_service
    if service is None:
        raise ServiceNotConfiguredError("item service")
    return service


HealthAggregatorDep = Annotated[HealthAggregator, Depends(get_health_aggregator)]
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]


# -----------------------------------------------------------------------------
# Request parsing
# -----------------------------------------------------------------------------
def _reject_constant(token: str):
    # NaN / Infinity are not JSON and could never be rendered back
    raise InvalidArgumentError("invalid json")


async def read_json_object(request: Request) -> Item:
    """
    Parses the body as a JSON object.
    Anything else (empty, malformed, array, scalar) is a client error.
    """
    raw = await request.body()
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidArgumentError("invalid json") from None
    if not isinstance(data, dict):
        raise InvalidArgumentError("invalid json")
    return data


def parse_limit(raw: Optional[str], default: int = DEFAULT_LIST_LIMIT) -> int:
    """Lenient: missing, non-numeric or non-positive values fall back to `default`."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
