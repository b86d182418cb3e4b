# kvapi/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Lookup Errors ---

class NotFoundError(DomainError):
    """Raised when no item matches the requested key."""
    def __init__(self, collection: str, key: dict):
        self.collection = collection
        self.key = key
        super().__init__(f"item not found in '{collection}'")

# --- Validation Errors ---

class InvalidArgumentError(DomainError):
    """Raised for malformed client input (missing key fields, bad limits, ...)."""

# --- Infrastructure Errors ---

class UnavailableError(DomainError):
    """
    Raised when a downstream dependency cannot serve the call.
    The message is client-safe; backend detail belongs in the logs only.
    """
    def __init__(self, message: str = "storage backend unavailable"):
        super().__init__(message)

class ServiceNotConfiguredError(DomainError):
    """Raised when an optional use case was not wired at startup."""
    def __init__(self, service: str = "item service"):
        super().__init__(f"{service} not configured")
