from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


def _as_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item] or default


class ServerSettings(BaseModel):
    """Runtime configuration for the HTTP server."""

    host: str = Field(default="localhost", alias="BOOKSHELF_HOST", min_length=1)
    port: int = Field(default=9000, alias="BOOKSHELF_PORT", ge=1, le=65535)
    log_level: str = Field(default="INFO", alias="BOOKSHELF_LOG_LEVEL")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="BOOKSHELF_CORS_ORIGINS")

    model_config = {"populate_by_name": True}

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        if value is None:
            return "INFO"
        return value.upper()

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@lru_cache
def get_server_settings() -> ServerSettings:
    """Load server configuration from environment variables."""
    return ServerSettings(
        host=os.getenv("BOOKSHELF_HOST", "localhost"),
        port=int(os.getenv("BOOKSHELF_PORT", "9000")),
        log_level=os.getenv("BOOKSHELF_LOG_LEVEL", "INFO"),
        cors_origins=_as_list(os.getenv("BOOKSHELF_CORS_ORIGINS"), default=["*"]),
    )
