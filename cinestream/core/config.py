"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    catalog_base_url: str = Field(default="http://localhost:8000", alias="CATALOG_BASE_URL")
    catalog_timeout: float = Field(default=10.0, alias="CATALOG_TIMEOUT")
    database_url: str = Field(default="sqlite:///./cinestream.db", alias="DATABASE_URL")
    storage_backend: Literal["sqlite", "memory"] = Field(default="sqlite", alias="STORAGE_BACKEND")
    auth_token_key: str = Field(default="authToken")
    poster_placeholder: str = Field(default="/placeholder.jpg")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
