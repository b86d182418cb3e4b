# tests/__init__.py
"""
Test Suite for kvapi.

Organization:
- `core`: Use cases and domain models with mocked ports.
- `adapters`: Storage adapters, health probes and the HTTP dispatcher.
- top level: configuration and container wiring.
"""
