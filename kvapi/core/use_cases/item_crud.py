# kvapi/core/use_cases/item_crud.py
import contextlib
from typing import Any, List, Optional

import structlog

from kvapi.core.domain.models import Item, Key
from kvapi.core.ports.logger import ILogger
from kvapi.core.use_cases.repository import CollectionRepository

class ItemService:
    """
    Use Case: CRUD over the items collection.

    The only entry point the HTTP layer depends on. It adds observability
    around state-changing calls and otherwise delegates to the repository;
    errors and cancellation propagate untouched.
    """

    def __init__(self, repo: CollectionRepository, logger: Optional[ILogger] = None):
        self.repo = repo
        self.logger = logger if logger is not None else structlog.get_logger()

    @property
    def collection(self) -> str:
        return self.repo.collection

    async def create(self, item: Item) -> None:
        self._log_info("create_item", collection=self.repo.collection)
        await self.repo.create(item)

    async def get(self, key: Key) -> Item:
        return await self.repo.get(key)

    async def update(self, item: Item) -> None:
        await self.repo.update(item)

    async def delete(self, key: Key) -> None:
        await self.repo.delete(key)

    async def list(self, limit: int) -> List[Item]:
        return await self.repo.list(limit)

    def _log_info(self, event: str, **kw: Any) -> None:
        # A broken log sink must never fail the operation it describes.
        with contextlib.suppress(Exception):
            self.logger.info(event, **kw)
