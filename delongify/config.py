"""
Configuration settings for delongify.

Uses Pydantic Settings to load environment variables for the shortening
service location, request behaviour, and logging. Every field has a default
so the CLI works with no environment at all.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CREATE_SLUG_URL_PAIR_PATH = "createSlugURLPair"


class Settings(BaseSettings):
    # Shortening service
    api_endpoint: str = Field("https://dlgfy.xyz", alias="DELONGIFY_API_ENDPOINT")
    redirect_base: str = Field("https://dlgfy.xyz", alias="DELONGIFY_REDIRECT_BASE")

    # Requests
    request_timeout: Optional[float] = Field(None, alias="DELONGIFY_REQUEST_TIMEOUT", gt=0)
    max_workers: Optional[int] = Field(None, alias="DELONGIFY_MAX_WORKERS", ge=1)

    # Logging
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("api_endpoint", "redirect_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def create_endpoint(self) -> str:
        """Full URL of the slug creation call."""
        return f"{self.api_endpoint}/{CREATE_SLUG_URL_PAIR_PATH}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["CREATE_SLUG_URL_PAIR_PATH", "Settings", "get_settings"]
