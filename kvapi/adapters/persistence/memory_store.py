# kvapi/adapters/persistence/memory_store.py
import copy
from typing import Dict, List, Mapping, Optional, Sequence

import structlog

from kvapi.core.domain.exceptions import NotFoundError
from kvapi.core.domain.models import Item, Key
from kvapi.core.ports.key_value_store import IKeyValueStore
from kvapi.adapters.persistence._keys import KeySchema, check_limit

logger = structlog.get_logger()

class InMemoryKeyValueStore(IKeyValueStore):
    """
    Process-local store used for tests and local runs.
    Items are deep-copied on write and read, so callers never share state
    with the store. Scan order is insertion order.
    """

    def __init__(self, key_fields: Optional[Mapping[str, Sequence[str]]] = None,
                 default_key_fields: Sequence[str] = ("id",)):
        self._schema = KeySchema(key_fields, default_key_fields)
        # { collection: { canonical_key: item } }
        self._data: Dict[str, Dict[str, Item]] = {}

    async def put(self, collection: str, item: Item) -> None:
        ident = self._schema.canonical(collection, item)
        self._data.setdefault(collection, {})[ident] = copy.deepcopy(dict(item))
        logger.debug("memory_put", collection=collection, key=ident)

    async def get(self, collection: str, key: Key) -> Item:
        ident = self._schema.canonical(collection, key)
        try:
            return copy.deepcopy(self._data[collection][ident])
        except KeyError:
            raise NotFoundError(collection, dict(key)) from None

    async def delete(self, collection: str, key: Key) -> None:
        ident = self._schema.canonical(collection, key)
        self._data.get(collection, {}).pop(ident, None)

    async def scan(self, collection: str, limit: int) -> List[Item]:
        check_limit(limit)
        items = list(self._data.get(collection, {}).values())[:limit]
        return [copy.deepcopy(i) for i in items]

    async def health_check(self) -> bool:
        return True
