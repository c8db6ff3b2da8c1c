"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "catering.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:8080"]


class InventorySettings(BaseSettings):
    """Stock ledger policy."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    # When true, a movement that drives stock below zero is logged, not rejected
    allow_negative_stock: bool = False
    low_stock_limit: int = 100


class OrderSettings(BaseSettings):
    """Order settlement policy."""

    model_config = SettingsConfigDict(env_prefix="ORDERS_")

    reject_overpayment: bool = True
    enforce_forward_status: bool = True
    # Status at which ingredient consumption is posted to the ledger
    consume_stock_on_status: str | None = "In Progress"


class PaymentSettings(BaseSettings):
    """Payment processor configuration."""

    model_config = SettingsConfigDict(env_prefix="PAYMENT_")

    provider: Literal["stripe"] = "stripe"
    api_base: str = "https://api.stripe.com/v1"
    secret_key: str = ""
    currency: str = "inr"
    timeout: int = 30

    # Circuit breaker settings
    failure_threshold: int = 3
    cooldown_seconds: int = 60

    # Retry settings
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_multiplier: float = 2.0


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Catering Ops"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    orders: OrderSettings = Field(default_factory=OrderSettings)
    payment: PaymentSettings = Field(default_factory=PaymentSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
