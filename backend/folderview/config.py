"""FolderView configuration: Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Built once at startup and handed to the services explicitly; nothing
    below the API layer reads settings on its own.
    """

    app_name: str = "FolderView"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Browsing
    root_folder: str = "."
    default_page_size: int = 50

    # Serving
    stream_chunk_size: int = 64 * 1024  # 64 KB
    media_cache_seconds: int = 3600
    thumbnail_size: int = 320  # px, bounding box edge

    uvicorn_workers: int = 1

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="FOLDERVIEW_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:5173"]

    @field_validator("default_page_size", "stream_chunk_size", "thumbnail_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @model_validator(mode="after")
    def _resolve_root(self) -> "Settings":
        """Root is always absolute and symlink-free."""
        self.root_folder = str(Path(self.root_folder).expanduser().resolve())
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
