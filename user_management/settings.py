from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Local dev: load from .env automatically.
    # In production: you typically inject real env vars instead.
    model_config = SettingsConfigDict(
        env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )

    # Env vars:
    # - API_KEY: shared secret expected in the `api-key` header (empty rejects every request)
    # - LOG_LEVEL (optional)
    # - APP_TITLE (optional)
    api_key: str = Field(default="", validation_alias="API_KEY")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    app_title: str = Field(default="User Management API", validation_alias="APP_TITLE")

    def model_post_init(self, __context):  # type: ignore[override]
        self.api_key = (self.api_key or "").strip()
        self.log_level = (self.log_level or "INFO").upper().strip() or "INFO"


def get_settings() -> Settings:
    """Load settings from environment.

    Keep this as the single canonical constructor for Settings(). FastAPI
    dependencies and tests can override/monkeypatch this function.
    """
    return Settings()
