from .check_health import HealthAggregator
from .item_crud import ItemService
from .repository import CollectionRepository

__all__ = [
    "CollectionRepository",
    "HealthAggregator",
    "ItemService",
]
