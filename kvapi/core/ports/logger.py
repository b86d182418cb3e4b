# kvapi/core/ports/logger.py
from typing import Any, Protocol

class ILogger(Protocol):
    """Leveled, key-value logging capability (a structlog BoundLogger fits)."""

    def info(self, event: str, **kw: Any) -> Any: ...

    def warning(self, event: str, **kw: Any) -> Any: ...

    def error(self, event: str, **kw: Any) -> Any: ...
