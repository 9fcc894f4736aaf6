"""
Configuration management for the people service.

Configuration is environment driven through Pydantic's `BaseSettings` and is
read once at startup. `get_settings()` returns the cached instance; tests build
their own `Settings` and hand it to `create_app`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General application settings
    API_TITLE: str = "People API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "CRUD operations over the People collection."
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: PositiveInt = 1337
    LOG_LEVEL: str = "INFO"

    # Document store
    MONGODB_URL: str = "mongodb://localhost:27017/people"
    MONGODB_DATABASE: Optional[str] = None
    MONGODB_DEFAULT_DATABASE: str = "people"
    PEOPLE_COLLECTION: str = "peoples"
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: PositiveInt = 30000

    # HTTP surface
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    ENABLE_API_DOCS: bool = True
    DOCS_URL: str = "/api-docs"
    OPENAPI_URL: str = "/openapi.json"
    STATIC_DIR: Path = Field(default_factory=lambda: Path("docs"))

    # Tracing
    ENABLE_TRACING: bool = False
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()
