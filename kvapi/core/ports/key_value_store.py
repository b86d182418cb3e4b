# kvapi/core/ports/key_value_store.py
from typing import List, Protocol

from kvapi.core.domain.models import Item, Key

class IKeyValueStore(Protocol):
    """
    Port for a key-value backend.
    Implementations could be InMemory, FileSystem or DynamoDB adapters.
    One instance serves any number of collections.
    """

    async def put(self, collection: str, item: Item) -> None:
        """
        Inserts or fully replaces the item addressed by its embedded key fields.
        Repeating the same put leaves the same stored state.

        Raises:
            InvalidArgumentError: the item lacks a key field.
            UnavailableError: the backend could not be reached.
        """
        ...

    async def get(self, collection: str, key: Key) -> Item:
        """
        Retrieves a single item by exact key.

        Raises:
            NotFoundError: no item matches `key`.
        """
        ...

    async def delete(self, collection: str, key: Key) -> None:
        """Removes the item if present. Deleting a missing key is not an error."""
        ...

    async def scan(self, collection: str, limit: int) -> List[Item]:
        """
        Returns up to `limit` items in backend-defined order.

        Raises:
            InvalidArgumentError: `limit` is zero or negative.
        """
        ...

    async def health_check(self) -> bool:
        """Returns True if the backend is reachable and responsive."""
        ...
