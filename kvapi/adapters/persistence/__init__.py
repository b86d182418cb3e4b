from .memory_store import InMemoryKeyValueStore
from .filesystem_store import FileSystemKeyValueStore
from .dynamodb_store import DynamoDBKeyValueStore

__all__ = [
    "DynamoDBKeyValueStore",
    "FileSystemKeyValueStore",
    "InMemoryKeyValueStore",
]
