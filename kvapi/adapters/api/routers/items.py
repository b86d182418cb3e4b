# kvapi/adapters/api/routers/items.py
from typing import Optional

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from kvapi.adapters.api.dependencies import ItemServiceDep, parse_limit, read_json_object
from kvapi.core.domain.exceptions import InvalidArgumentError, NotFoundError
from kvapi.core.domain.models import Key

ID_FIELD = "id"

router = APIRouter(tags=["Items"])


def _key_from_path(item_id: str, collection: str) -> Key:
    # `{item_id:path}` also captures "" and nested segments; neither names an item
    if not item_id or "/" in item_id:
        raise NotFoundError(collection, {ID_FIELD: item_id})
    return {ID_FIELD: item_id}


def _check_body_id(item: dict) -> None:
    """A stored id must be one that `/items/{id}` can address again."""
    if ID_FIELD not in item:
        return  # the store reports the missing key field
    value = item[ID_FIELD]
    if not isinstance(value, str) or not value or "/" in value:
        raise InvalidArgumentError(f"field '{ID_FIELD}' must be a non-empty string without '/'")


@router.get("/items")
async def list_items(request: Request, items: ItemServiceDep, limit: Optional[str] = None) -> JSONResponse:
    n = parse_limit(limit, request.app.state.default_list_limit)
    return JSONResponse(content=await items.list(n))


@router.post("/items")
async def create_item(request: Request, items: ItemServiceDep) -> JSONResponse:
    item = await read_json_object(request)
    _check_body_id(item)
    await items.create(item)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content={"ok": True})


@router.get("/items/{item_id:path}")
async def get_item(item_id: str, items: ItemServiceDep) -> JSONResponse:
    key = _key_from_path(item_id, items.collection)
    return JSONResponse(content=await items.get(key))


@router.put("/items/{item_id:path}")
async def update_item(item_id: str, request: Request, items: ItemServiceDep) -> JSONResponse:
    key = _key_from_path(item_id, items.collection)
    item = await read_json_object(request)
    # The path is authoritative over any id in the body
    item.update(key)
    await items.update(item)
    return JSONResponse(content={"ok": True})


@router.delete("/items/{item_id:path}")
async def delete_item(item_id: str, items: ItemServiceDep) -> Response:
    key = _key_from_path(item_id, items.collection)
    await items.delete(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT, media_type="application/json")
