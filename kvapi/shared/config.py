from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class StorageBackend(str, Enum):
    DYNAMODB = "dynamodb"
    MEMORY = "memory"
    FILESYSTEM = "filesystem"
    NONE = "none"  # health route only, item routes answer "not configured"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "kvapi"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "kvapi"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- AWS / LocalStack ---
    # Also probed by /health; set to "" to skip the reachability check.
    LOCALSTACK_ENDPOINT: str = "http://localhost:4566"
    LOCALSTACK_HEALTH_PATH: str = "/_localstack/health"
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None

    # --- Persistence ---
    STORAGE_BACKEND: StorageBackend = StorageBackend.DYNAMODB
    ITEMS_TABLE: str = "example-items"
    FILESYSTEM_STORE_PATH: str = "./data/store"

    # --- Health & Listing ---
    REACHABILITY_TIMEOUT_SEC: float = Field(default=0.3, gt=0)
    STORE_PROBE_TIMEOUT_SEC: float = Field(default=1.0, gt=0)
    DEFAULT_LIST_LIMIT: int = Field(default=50, gt=0)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
