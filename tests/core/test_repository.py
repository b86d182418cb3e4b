# tests/core/test_repository.py
import pytest

from kvapi.core.domain.exceptions import NotFoundError, UnavailableError
from kvapi.core.use_cases.repository import CollectionRepository

@pytest.mark.asyncio
class TestCollectionRepository:

    async def test_every_call_is_bound_to_the_collection(self, mock_store):
        repo = CollectionRepository(mock_store, "orders")
        item = {"id": "1", "total": 3}

        await repo.create(item)
        await repo.update(item)
        await repo.get({"id": "1"})
        await repo.delete({"id": "1"})
        await repo.list(10)

        assert mock_store.put.await_count == 2
        mock_store.put.assert_any_await("orders", item)
        mock_store.get.assert_awaited_once_with("orders", {"id": "1"})
        mock_store.delete.assert_awaited_once_with("orders", {"id": "1"})
        mock_store.scan.assert_awaited_once_with("orders", 10)

    async def test_exposes_collection_name(self, mock_store):
        assert CollectionRepository(mock_store, "orders").collection == "orders"

    async def test_errors_propagate_unwrapped(self, mock_store):
        repo = CollectionRepository(mock_store, "orders")
        original = NotFoundError("orders", {"id": "x"})
        mock_store.get.side_effect = original

        with pytest.raises(NotFoundError) as excinfo:
            await repo.get({"id": "x"})
        assert excinfo.value is original

        mock_store.scan.side_effect = UnavailableError()
        with pytest.raises(UnavailableError):
            await repo.list(5)

    async def test_collections_do_not_share_items(self, memory_store):
        a = CollectionRepository(memory_store, "a")
        b = CollectionRepository(memory_store, "b")

        await a.create({"id": "1", "owner": "a"})

        with pytest.raises(NotFoundError):
            await b.get({"id": "1"})
        assert await b.list(10) == []
