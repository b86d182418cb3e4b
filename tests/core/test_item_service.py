# tests/core/test_item_service.py
import asyncio

import pytest

from kvapi.core.domain.exceptions import InvalidArgumentError, NotFoundError
from kvapi.core.use_cases.item_crud import ItemService
from kvapi.core.use_cases.repository import CollectionRepository

@pytest.mark.asyncio
class TestItemService:

    async def test_create_then_get_round_trips(self, item_service):
        item = {"id": "abc", "name": "widget", "price": 9.5, "tags": ["a", "b"], "dims": {"w": 1}}

        await item_service.create(item)

        assert await item_service.get({"id": "abc"}) == item

    async def test_create_logs_target_collection(self, item_service, mock_logger):
        await item_service.create({"id": "abc"})

        mock_logger.info.assert_called_once_with("create_item", collection="test-items")

    async def test_reads_and_other_writes_are_not_logged(self, item_service, mock_logger):
        await item_service.create({"id": "abc"})
        mock_logger.reset_mock()

        await item_service.get({"id": "abc"})
        await item_service.update({"id": "abc", "name": "y"})
        await item_service.list(10)
        await item_service.delete({"id": "abc"})

        mock_logger.info.assert_not_called()

    async def test_broken_logger_does_not_block_create(self, item_service, mock_logger):
        mock_logger.info.side_effect = RuntimeError("log sink down")

        await item_service.create({"id": "abc"})

        assert await item_service.get({"id": "abc"}) == {"id": "abc"}

    async def test_update_replaces_whole_item(self, item_service):
        await item_service.create({"id": "abc", "name": "x", "color": "red"})
        await item_service.update({"id": "abc", "name": "y"})

        assert await item_service.get({"id": "abc"}) == {"id": "abc", "name": "y"}

    async def test_delete_is_idempotent(self, item_service):
        await item_service.create({"id": "abc"})

        await item_service.delete({"id": "abc"})
        await item_service.delete({"id": "abc"})

        with pytest.raises(NotFoundError):
            await item_service.get({"id": "abc"})

    async def test_list_respects_limit(self, item_service):
        for i in range(5):
            await item_service.create({"id": str(i)})

        assert len(await item_service.list(3)) == 3
        assert len(await item_service.list(50)) == 5

    async def test_errors_propagate(self, item_service):
        with pytest.raises(InvalidArgumentError):
            await item_service.list(0)
        with pytest.raises(InvalidArgumentError):
            await item_service.create({"name": "no key"})

    async def test_cancellation_propagates(self, mock_store, mock_logger):
        """
        Scenario: the caller is cancelled while the store call is in flight.
        Expected: CancelledError surfaces, the call is not retried.
        """
        started = asyncio.Event()

        async def slow_get(collection, key):
            started.set()
            await asyncio.sleep(10)

        mock_store.get.side_effect = slow_get
        service = ItemService(CollectionRepository(mock_store, "items"), mock_logger)

        task = asyncio.create_task(service.get({"id": "abc"}))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert mock_store.get.await_count == 1
        mock_logger.error.assert_not_called()

    async def test_defaults_to_structlog_logger(self, memory_store):
        service = ItemService(CollectionRepository(memory_store, "items"))
        await service.create({"id": "abc"})
        assert service.collection == "items"
