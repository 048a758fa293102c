"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils import build_meta_id


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Listen Notes Podcasts", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    listennotes_api_key: str | None = Field(
        default=None, alias="LISTEN_NOTES_API_KEY"
    )
    listennotes_api_url: HttpUrl = Field(
        default="https://listen-api.listennotes.com/api/v2",
        alias="LISTEN_NOTES_API_URL",
    )

    id_namespace: str = Field(default="podcasts", alias="ID_NAMESPACE")
    search_pages: int = Field(default=4, alias="SEARCH_PAGES", ge=1, le=20)
    default_skip: int = Field(default=50, alias="DEFAULT_SKIP", ge=0)
    cache_max_age: int = Field(default=259_200, alias="CACHE_MAX_AGE", ge=0)
    request_timeout_seconds: float = Field(
        default=20.0, alias="REQUEST_TIMEOUT", gt=0
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("id_namespace", mode="before")
    @classmethod
    def _normalise_namespace(cls, value: object) -> str:
        """Namespaces become the first ``_`` segment of every catalog id."""

        if value is None:
            return "podcasts"
        namespace = str(value).strip().lower()
        if not namespace:
            raise ValueError("ID_NAMESPACE must not be empty")
        if "_" in namespace:
            raise ValueError("ID_NAMESPACE must not contain underscores")
        return namespace

    @property
    def id_prefix(self) -> str:
        """Return the prefix shared by every id this add-on hands out."""

        return build_meta_id(self.id_namespace, "")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
