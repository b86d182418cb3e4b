# kvapi/shared/container.py
from typing import List, Optional

import structlog
from dependency_injector import containers, providers

from kvapi.adapters.persistence import (
    DynamoDBKeyValueStore,
    FileSystemKeyValueStore,
    InMemoryKeyValueStore,
)
from kvapi.adapters.probes import HttpReachabilityProbe, StoreHealthProbe
from kvapi.core.ports import IHealthProbe, IKeyValueStore, ILogger
from kvapi.core.use_cases import CollectionRepository, HealthAggregator, ItemService
from kvapi.shared.config import StorageBackend, settings

logger = structlog.get_logger()

REACHABILITY_PROBE_NAME = "localstack"


def build_key_value_store(
    backend,
    region: str,
    endpoint: str,
    access_key: Optional[str],
    secret_key: Optional[str],
    base_path: str,
    health_timeout: float = 1.0,
) -> Optional[IKeyValueStore]:
    """
    Picks the storage adapter. Returns None when storage is disabled or cannot
    be initialised; the service then runs with the health route only.
    """
    backend = StorageBackend(backend)
    try:
        if backend == StorageBackend.DYNAMODB:
            return DynamoDBKeyValueStore(
                region=region,
                endpoint_url=endpoint or None,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                health_timeout=health_timeout,
            )
        if backend == StorageBackend.FILESYSTEM:
            return FileSystemKeyValueStore(base_path=base_path)
        if backend == StorageBackend.MEMORY:
            return InMemoryKeyValueStore()
    except Exception as e:
        logger.warning("store_init_failed", backend=backend.value, error=str(e))
    return None


def build_item_service(
    store: Optional[IKeyValueStore], table: str, log: ILogger
) -> Optional[ItemService]:
    if store is None:
        return None
    return ItemService(CollectionRepository(store, table), log)


def build_probes(
    endpoint: str,
    health_path: str,
    reachability_timeout: float,
    store: Optional[IKeyValueStore],
    backend,
    store_timeout: float,
) -> List[IHealthProbe]:
    """Fixed check order: external reachability first, then store liveness."""
    probes: List[IHealthProbe] = []
    if endpoint:
        probes.append(HttpReachabilityProbe(
            name=REACHABILITY_PROBE_NAME,
            endpoint=endpoint,
            path=health_path,
            timeout=reachability_timeout,
        ))
    if store is not None:
        probes.append(StoreHealthProbe(
            name=StorageBackend(backend).value,
            store=store,
            timeout=store_timeout,
        ))
    return probes


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.
    Override `key_value_store` (or any provider) in tests.
    """

    # 1. Configuration
    config = providers.Configuration(pydantic_settings=[settings])

    logger = providers.Singleton(structlog.get_logger, "kvapi")

    # 2. Gateways (Infrastructure Adapters)
    key_value_store = providers.Singleton(
        build_key_value_store,
        backend=config.STORAGE_BACKEND,
        region=config.AWS_REGION,
        endpoint=config.LOCALSTACK_ENDPOINT,
        access_key=config.AWS_ACCESS_KEY_ID,
        secret_key=config.AWS_SECRET_ACCESS_KEY,
        base_path=config.FILESYSTEM_STORE_PATH,
        health_timeout=config.STORE_PROBE_TIMEOUT_SEC,
    )

    health_probes = providers.Singleton(
        build_probes,
        endpoint=config.LOCALSTACK_ENDPOINT,
        health_path=config.LOCALSTACK_HEALTH_PATH,
        reachability_timeout=config.REACHABILITY_TIMEOUT_SEC,
        store=key_value_store,
        backend=config.STORAGE_BACKEND,
        store_timeout=config.STORE_PROBE_TIMEOUT_SEC,
    )

    # 3. Use Cases
    item_service = providers.Singleton(
        build_item_service,
        store=key_value_store,
        table=config.ITEMS_TABLE,
        log=logger,
    )

    health_aggregator = providers.Singleton(
        HealthAggregator,
        probes=health_probes,
        metadata=providers.Dict(localstackEndpoint=config.LOCALSTACK_ENDPOINT),
        logger=logger,
    )
