"""kvapi: CRUD + health service over a pluggable key-value store."""

__version__ = "1.0.0"
