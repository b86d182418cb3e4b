# tests/test_config.py
import pytest
from pydantic import ValidationError

from kvapi.shared.config import AppEnv, Settings, StorageBackend


def test_defaults():
    s = Settings(_env_file=None)

    assert s.APP_ENV == AppEnv.DEVELOPMENT
    assert s.PORT == 8080
    assert s.STORAGE_BACKEND == StorageBackend.DYNAMODB
    assert s.ITEMS_TABLE == "example-items"
    assert s.LOCALSTACK_ENDPOINT == "http://localhost:4566"
    assert s.REACHABILITY_TIMEOUT_SEC == pytest.approx(0.3)
    assert s.DEFAULT_LIST_LIMIT == 50


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "filesystem")
    monkeypatch.setenv("ITEMS_TABLE", "orders")
    monkeypatch.setenv("LOCALSTACK_ENDPOINT", "")
    monkeypatch.setenv("PORT", "9000")

    s = Settings(_env_file=None)

    assert s.STORAGE_BACKEND == StorageBackend.FILESYSTEM
    assert s.ITEMS_TABLE == "orders"
    assert s.LOCALSTACK_ENDPOINT == ""
    assert s.PORT == 9000


def test_unknown_backend_rejected(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "cassandra")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("name,value", [
    ("DEFAULT_LIST_LIMIT", "0"),
    ("DEFAULT_LIST_LIMIT", "-5"),
    ("STORE_PROBE_TIMEOUT_SEC", "0"),
    ("REACHABILITY_TIMEOUT_SEC", "-1"),
])
def test_non_positive_values_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
