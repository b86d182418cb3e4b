# kvapi/core/use_cases/repository.py
from typing import List

from kvapi.core.domain.models import Item, Key
from kvapi.core.ports.key_value_store import IKeyValueStore

class CollectionRepository:
    """
    Binds a key-value store to one collection name.

    Pure pass-through: store errors propagate unwrapped, and callers are
    responsible for passing items that carry their key fields.
    """

    def __init__(self, store: IKeyValueStore, collection: str):
        self._store = store
        self._collection = collection

    @property
    def collection(self) -> str:
        return self._collection

    async def create(self, item: Item) -> None:
        await self._store.put(self._collection, item)

    async def get(self, key: Key) -> Item:
        return await self._store.get(self._collection, key)

    async def update(self, item: Item) -> None:
        await self._store.put(self._collection, item)

    async def delete(self, key: Key) -> None:
        await self._store.delete(self._collection, key)

    async def list(self, limit: int) -> List[Item]:
        return await self._store.scan(self._collection, limit)
