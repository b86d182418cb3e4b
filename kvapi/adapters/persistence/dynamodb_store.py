# kvapi/adapters/persistence/dynamodb_store.py
import asyncio
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
import structlog
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from kvapi.core.domain.exceptions import InvalidArgumentError, NotFoundError, UnavailableError
from kvapi.core.domain.models import Item, Key
from kvapi.core.ports.key_value_store import IKeyValueStore
from kvapi.adapters.persistence._keys import check_limit
from kvapi.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

THROTTLING_CODES = frozenset({
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
})

def _is_throttled(exc: BaseException) -> bool:
    return isinstance(exc, ClientError) and exc.response.get("Error", {}).get("Code") in THROTTLING_CODES

def _to_dynamo(value: Any) -> Any:
    """DynamoDB numbers must be Decimal; JSON gives us floats."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value

def _from_dynamo(value: Any) -> Any:
    """Back to JSON-friendly types: Decimal -> int/float, sets -> lists."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, set, frozenset)):
        return [_from_dynamo(v) for v in value]
    return value

class DynamoDBKeyValueStore(IKeyValueStore):
    """
    Production Persistence Adapter.
    Maps collections to DynamoDB tables. Works against AWS or LocalStack
    (pass `endpoint_url`). The table's key schema decides which item fields
    form the key.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        client=None,
        health_timeout: float = 1.0,
    ):
        # Credentials fall back to the usual boto3 chain (env vars, profile, role)
        client_kwargs = dict(
            region_name=region,
            endpoint_url=endpoint_url or None,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
        )
        # tenacity below owns retries
        self.client = client or boto3.client(
            "dynamodb",
            config=Config(connect_timeout=2, read_timeout=5, retries={"max_attempts": 1}),
            **client_kwargs,
        )
        # Health checks time out within the store probe timeout
        self._health_client = client or boto3.client(
            "dynamodb",
            config=Config(
                connect_timeout=health_timeout,
                read_timeout=health_timeout,
                retries={"max_attempts": 1},
            ),
            **client_kwargs,
        )
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    # --- Interface Implementation ---

    async def put(self, collection: str, item: Item) -> None:
        await self._execute("put_item", collection, Item=self._marshal(item))

    async def get(self, collection: str, key: Key) -> Item:
        response = await self._execute("get_item", collection, Key=self._marshal(key))
        raw = response.get("Item")
        if raw is None:
            raise NotFoundError(collection, dict(key))
        return self._unmarshal(raw)

    async def delete(self, collection: str, key: Key) -> None:
        # DeleteItem succeeds whether or not the key existed
        await self._execute("delete_item", collection, Key=self._marshal(key))

    async def scan(self, collection: str, limit: int) -> List[Item]:
        check_limit(limit)
        response = await self._execute("scan", collection, Limit=limit)
        return [self._unmarshal(raw) for raw in response.get("Items", [])]

    async def health_check(self) -> bool:
        try:
            await asyncio.to_thread(self._health_client.list_tables, Limit=1)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error("dynamodb_health_failed", error=str(e))
            return False

    # --- Helpers ---

    async def _execute(self, operation: str, table: str, **params) -> Dict[str, Any]:
        """
        Runs one SDK call in the thread pool and translates failures into
        domain errors. Backend codes go to the log, never to the caller.
        """
        with tracer.start_as_current_span(f"dynamodb.{operation}") as span:
            span.set_attribute("db.system", "dynamodb")
            span.set_attribute("db.dynamodb.table", table)

            try:
                return await asyncio.to_thread(self._call_sync, operation, TableName=table, **params)
            except ClientError as e:
                code = e.response.get("Error", {}).get("Code", "Unknown")
                logger.error("dynamodb_call_failed", operation=operation, table=table, code=code, error=str(e))
                if code == "ValidationException":
                    raise InvalidArgumentError("item or key does not match the table key schema") from e
                raise UnavailableError() from e
            except BotoCoreError as e:
                logger.error("dynamodb_call_failed", operation=operation, table=table, error=str(e))
                raise UnavailableError() from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, max=1),
        retry=retry_if_exception(_is_throttled),
        reraise=True,
    )
    def _call_sync(self, operation: str, **params) -> Dict[str, Any]:
        """Sync boto3 call with retries on throttling only."""
        return getattr(self.client, operation)(**params)

    def _marshal(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return {k: self._serializer.serialize(_to_dynamo(v)) for k, v in data.items()}
        except TypeError as e:
            raise InvalidArgumentError(f"unsupported value type: {e}") from e

    def _unmarshal(self, raw: Dict[str, Any]) -> Item:
        return {k: _from_dynamo(self._deserializer.deserialize(v)) for k, v in raw.items()}
