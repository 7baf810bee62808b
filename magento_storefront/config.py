"""
Configuration management for the Magento storefront bot
"""

import threading
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from magento_storefront.infrastructure.utilities.constants import MagentoSettings


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Magento storefront
    magento_base_url: str = Field(description="Base URL of the Magento store", min_length=1)
    magento_store_code: Optional[str] = Field(
        default=None, description="Store view code sent in the Store header"
    )
    magento_timeout_seconds: float = Field(
        default=MagentoSettings.DEFAULT_TIMEOUT_SECONDS,
        description="HTTP timeout for GraphQL requests",
        gt=0,
    )
    magento_debug: bool = Field(default=False, description="Log GraphQL traffic at DEBUG")

    # Bot configuration
    bot_token: Optional[str] = Field(default=None, description="Telegram bot token")

    # Database configuration
    database_url: str = Field(
        default="sqlite:///data/storefront.db", description="Database connection URL"
    )

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: str = Field(default="logs", description="Directory for log files")
    environment: str = Field(default="development", description="Application environment")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next ``get_config`` re-reads the environment"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
