"""Configuration and environment settings for Shared Finance."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for Shared Finance."""

    database_url: str = "sqlite:///shared_finance.db"
    upload_chunk_size: int = Field(default=10, ge=1)
    preview_limit: int = Field(default=50, ge=0)
    recent_transactions_limit: int = Field(default=20, ge=1)
    log_level: str = "INFO"
    log_file: str | None = None
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
