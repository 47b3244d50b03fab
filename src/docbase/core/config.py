"""Configuration management for docbase.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Settings only supply fallbacks: any
value passed explicitly to ``connect()`` wins over the environment.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """docbase configuration settings.

    Settings are loaded from environment variables prefixed with
    ``DOCBASE_`` and from a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOCBASE_",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "testing"] = "development"

    # MongoDB Settings
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/docbase",
        description="Connection string; must name the default database",
    )
    mongo_server_selection_timeout_ms: int = 30000
    mongo_app_name: str = "docbase"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("mongo_uri")
    @classmethod
    def validate_mongo_uri(cls, v: str) -> str:
        """Reject connection strings that are not MongoDB URIs."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "mongo_uri must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
