"""
Configuration loader for the Dummy JSON API.

Loads configuration from config.yaml and environment variables using pydantic-settings.
Supports store/bulk sections; the Deta project key comes from the environment.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreProvider(str, Enum):
    """Supported record store backends."""

    DETA = "deta"
    MEMORY = "memory"


class StoreConfig(BaseModel):
    """
    Record store configuration.

    Note: the Deta project key should NOT be stored here.
    Use the PROJECT_KEY environment variable.

    Example config.yaml:
        store:
          provider: deta
          base_name: simple_db
          timeout_seconds: 30
    """

    provider: StoreProvider = Field(
        default=StoreProvider.DETA,
        description="Record store backend to use",
    )
    base_name: str = Field(
        default="simple_db",
        min_length=1,
        description="Name of the Deta Base holding the user records",
    )
    api_url: str = Field(
        default="https://database.deta.sh/v1",
        description="Deta Base HTTP API root",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=300.0,
        description="Timeout for a single store request in seconds",
    )
    page_limit: Optional[int] = Field(
        default=None,
        gt=0,
        description="Page size requested from the store (None = store default)",
    )
    memory_page_size: int = Field(
        default=1000,
        gt=0,
        description="Page size of the in-memory store (mirrors the Deta page cap)",
    )


class BulkConfig(BaseModel):
    """Seed and dump configuration."""

    feed_count: int = Field(
        default=25,
        gt=0,
        le=1000,
        description="Number of sample users generated by /db/feed",
    )
    delete_concurrency: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Maximum number of deletes in flight during /db/dump",
    )
    faker_seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible sample data (None = random)",
    )
    faker_locale: str = Field(
        default="en_US",
        description="Faker locale used for sample data",
    )


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and config.yaml.

    Sections found in config.yaml are passed at construction; anything the
    file omits is read from the environment (or .env), then defaults.

    Secrets (loaded from .env only - NEVER commit to git):
        - PROJECT_KEY: Deta project key
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(
        default="Dummy JSON API",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode",
        alias="APP_DEBUG",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by CORS",
    )

    @field_validator("debug", mode="before")
    @classmethod
    def parse_debug_bool(cls, v):
        """Handle empty string as False for boolean debug field."""
        if v == "" or v is None:
            return False
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level name so logging accepts it."""
        return v.upper()

    # Deta credentials (from .env)
    project_key: str = Field(
        default="",
        description="Deta project key",
    )

    # Configuration sections (from config.yaml)
    store: StoreConfig = Field(
        default_factory=StoreConfig,
        description="Record store configuration",
    )
    bulk: BulkConfig = Field(
        default_factory=BulkConfig,
        description="Seed and dump configuration",
    )

    def get_project_key(self) -> str:
        """
        Get the Deta project key.

        Returns:
            The configured project key.

        Raises:
            ValueError: If no project key is configured.
        """
        if not self.project_key:
            raise ValueError(
                "No Deta project key configured. "
                "Set the PROJECT_KEY environment variable."
            )
        return self.project_key

    @classmethod
    def from_yaml(cls, config_path: Path | str | None = None) -> "Settings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config.yaml file. If None, looks for config.yaml
                        in the current directory and project root.

        Returns:
            Settings instance with values from YAML merged with env vars.
        """
        config_data: dict = {}

        if config_path is None:
            search_paths = [
                Path.cwd() / "config.yaml",
                Path(__file__).parent.parent.parent / "config.yaml",
            ]
            for path in search_paths:
                if path.exists():
                    config_path = path
                    break

        if config_path is not None:
            config_path = Path(config_path)
            if config_path.exists():
                with open(config_path, encoding="utf-8") as f:
                    config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings.from_yaml()
