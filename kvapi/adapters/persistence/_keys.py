# kvapi/adapters/persistence/_keys.py
import json
from typing import Dict, Mapping, Optional, Sequence, Tuple

from kvapi.core.domain.exceptions import InvalidArgumentError
from kvapi.core.domain.models import DEFAULT_KEY_FIELDS, Key, key_of

class KeySchema:
    """Key fields per collection, for backends that cannot discover them."""

    def __init__(
        self,
        key_fields: Optional[Mapping[str, Sequence[str]]] = None,
        default: Sequence[str] = DEFAULT_KEY_FIELDS,
    ):
        self._fields: Dict[str, Tuple[str, ...]] = {
            name: tuple(fields) for name, fields in (key_fields or {}).items()
        }
        self._default = tuple(default)

    def fields_for(self, collection: str) -> Tuple[str, ...]:
        return self._fields.get(collection, self._default)

    def canonical(self, collection: str, item_or_key: Mapping) -> str:
        """Stable string identity of the key embedded in `item_or_key`."""
        key: Key = key_of(dict(item_or_key), self.fields_for(collection))
        try:
            return json.dumps(key, sort_keys=True, separators=(",", ":"))
        except TypeError as e:
            raise InvalidArgumentError(f"key values must be JSON scalars: {e}") from e

def check_limit(limit: int) -> None:
    if limit <= 0:
        raise InvalidArgumentError(f"limit must be positive, got {limit}")
