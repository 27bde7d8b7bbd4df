"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a STOREFRONT_-prefixed environment variable
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - Defaults provided for every setting: works out-of-the-box against the public fake store API
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.core.domain_types import DEFAULT_ITEMS_PER_PAGE


class Settings(BaseSettings):
    """Storefront settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_", env_file=".env", case_sensitive=False,
        extra="ignore",
    )

    # Product / auth API
    api_base_url: str = "https://api.escuelajs.co/api/v1"
    request_timeout_seconds: float = Field(10.0, gt=0)

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Token persistence
    token_store_url: str = "sqlite:///storefront_tokens.db"

    # Catalog
    default_items_per_page: int = Field(DEFAULT_ITEMS_PER_PAGE, gt=0)
    refetch_on_filter_change: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
