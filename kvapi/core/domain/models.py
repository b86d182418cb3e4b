# kvapi/core/domain/models.py
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidArgumentError

# --- Items ---

# Items are open-ended documents; the core enforces no schema beyond key fields.
Item = Dict[str, Any]
Key = Dict[str, Any]

DEFAULT_KEY_FIELDS = ("id",)


def key_of(item: Item, key_fields: Sequence[str] = DEFAULT_KEY_FIELDS) -> Key:
    """
    Extracts the Key addressing `item` within its collection.

    Raises:
        InvalidArgumentError: if any key field is absent.
    """
    missing = [name for name in key_fields if name not in item]
    if missing:
        raise InvalidArgumentError(f"missing key field(s): {', '.join(missing)}")
    return {name: item[name] for name in key_fields}

# --- Health ---

class HealthCheckResult(BaseModel):
    """One dependency's verdict, produced fresh per health check."""
    model_config = ConfigDict(frozen=True)

    name: str
    ok: bool
    message: Optional[str] = None

class AggregatedHealth(BaseModel):
    """
    The folded verdict over every configured probe.
    `ok` is the AND of all checks (True when there are none).
    """
    model_config = ConfigDict(frozen=True)

    ok: bool
    message: str
    metadata: Dict[str, str] = Field(default_factory=dict)
    checks: List[HealthCheckResult] = Field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        """Wire body: `{ok, message, <metadata fields>}`."""
        body: Dict[str, Any] = {"ok": self.ok, "message": self.message}
        body.update(self.metadata)
        return body
