# kvapi/adapters/persistence/filesystem_store.py
import hashlib
import json
import os
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import aiofiles
import structlog

from kvapi.core.domain.exceptions import NotFoundError, UnavailableError
from kvapi.core.domain.models import Item, Key
from kvapi.core.ports.key_value_store import IKeyValueStore
from kvapi.adapters.persistence._keys import KeySchema, check_limit

logger = structlog.get_logger()

class FileSystemKeyValueStore(IKeyValueStore):
    """
    Key-value store backed by local JSON files.

    Layout: <base_path>/<collection>/<sha1(canonical key)>.json
    Each write replaces the whole file, matching put's replace semantics.
    """

    def __init__(self, base_path: str,
                 key_fields: Optional[Mapping[str, Sequence[str]]] = None,
                 default_key_fields: Sequence[str] = ("id",)):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._schema = KeySchema(key_fields, default_key_fields)

    def _collection_dir(self, collection: str) -> Path:
        # Collection names come from config, but never let them escape base_path
        safe = collection.replace(os.sep, "_").replace("..", "_")
        return self.base_path / safe

    def _item_path(self, collection: str, item_or_key: Mapping) -> Path:
        ident = self._schema.canonical(collection, item_or_key)
        digest = hashlib.sha1(ident.encode("utf-8")).hexdigest()
        return self._collection_dir(collection) / f"{digest}.json"

    async def put(self, collection: str, item: Item) -> None:
        path = self._item_path(collection, item)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            payload = json.dumps(item, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error("fs_serialize_failed", collection=collection, error=str(e))
            raise UnavailableError("item could not be stored") from e

        try:
            async with aiofiles.open(path, mode="w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            logger.error("fs_write_failed", collection=collection, path=str(path), error=str(e))
            raise UnavailableError() from e

    async def get(self, collection: str, key: Key) -> Item:
        path = self._item_path(collection, key)
        try:
            return await self._read(path)
        except FileNotFoundError:
            raise NotFoundError(collection, dict(key)) from None

    async def delete(self, collection: str, key: Key) -> None:
        path = self._item_path(collection, key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("fs_delete_failed", collection=collection, path=str(path), error=str(e))
            raise UnavailableError() from e

    async def scan(self, collection: str, limit: int) -> List[Item]:
        check_limit(limit)
        folder = self._collection_dir(collection)
        if not folder.is_dir():
            return []

        items: List[Item] = []
        for path in sorted(folder.glob("*.json")):
            if len(items) >= limit:
                break
            try:
                items.append(await self._read(path))
            except FileNotFoundError:
                continue  # deleted mid-scan
        return items

    async def health_check(self) -> bool:
        healthy = self.base_path.is_dir() and os.access(self.base_path, os.W_OK)
        if not healthy:
            logger.error("fs_store_unhealthy", path=str(self.base_path))
        return healthy

    async def _read(self, path: Path) -> Item:
        try:
            async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
                content = await f.read()
            return json.loads(content)
        except FileNotFoundError:
            raise
        except (OSError, ValueError) as e:
            logger.error("fs_read_failed", path=str(path), error=str(e))
            raise UnavailableError() from e
