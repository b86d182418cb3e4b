# tests/conftest.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from kvapi.adapters.persistence.memory_store import InMemoryKeyValueStore
from kvapi.core.domain.models import HealthCheckResult
from kvapi.core.ports.key_value_store import IKeyValueStore
from kvapi.core.ports.logger import ILogger
from kvapi.core.use_cases.item_crud import ItemService
from kvapi.core.use_cases.repository import CollectionRepository

TABLE = "test-items"

@pytest.fixture(scope="function")
def mock_store():
    """Returns a mock implementation of the Key-Value Store port."""
    store = MagicMock(spec=IKeyValueStore)
    # Async methods must be mocked with AsyncMock
    store.put = AsyncMock()
    store.get = AsyncMock(return_value={"id": "abc", "name": "x"})
    store.delete = AsyncMock()
    store.scan = AsyncMock(return_value=[])
    store.health_check = AsyncMock(return_value=True)
    return store

@pytest.fixture(scope="function")
def mock_logger():
    """Returns a mock structured logger."""
    return MagicMock(spec=ILogger)

@pytest.fixture(scope="function")
def memory_store():
    return InMemoryKeyValueStore()

@pytest.fixture(scope="function")
def item_service(memory_store, mock_logger):
    """ItemService over a real in-memory store."""
    return ItemService(CollectionRepository(memory_store, TABLE), mock_logger)

class StaticProbe:
    """Health probe test double with a fixed verdict."""

    def __init__(self, name: str, ok: bool = True, timeout: float = 1.0):
        self.name = name
        self.ok = ok
        self.timeout = timeout
        self.calls = 0

    async def check(self) -> HealthCheckResult:
        self.calls += 1
        suffix = "ok" if self.ok else "unreachable"
        return HealthCheckResult(name=self.name, ok=self.ok, message=f"{self.name} {suffix}")

@pytest.fixture
def static_probe():
    """Factory fixture: static_probe("dynamodb", ok=False)."""
    return StaticProbe
