"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from packlist.models.common import ViewMode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging
    log_level: str = "INFO"

    # Memoization (entries per PackingListMemo instance)
    memo_max_entries: int = 32

    # Display
    default_view_mode: ViewMode = ViewMode.BY_DAY
    general_bucket_label: str = "General items"
    any_day_label: str = "Any day"
    uncategorized_label: str = "Uncategorized"

    # Hex characters kept from the instance id digest
    instance_id_length: int = 16


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
