"""Service settings, read from ``RC_*`` environment variables.

Only the HTTP service and logging are configurable; the claims pipeline takes
everything it needs as arguments. Bad values fail at import.
"""

from __future__ import annotations

import logging
import os
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RC_", case_sensitive=False, extra="ignore")

    log_format: Literal["text", "json"] = Field(default="text")
    log_level: str = Field(default="INFO", description="Python log level name")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)

    api_keys: str = Field(default="", description="Comma-separated; empty disables auth")
    cors_origins: str = Field(default="*", description="Comma-separated allowed origins")

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        name = v.upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"RC_LOG_LEVEL is not a log level: {v!r}")
        return name

    @property
    def cors_origin_list(self) -> list[str]:
        return _split_csv(self.cors_origins)


settings = Settings()


def configured_api_keys() -> frozenset[str]:
    """API keys in force now. A live ``RC_API_KEYS`` wins over the import-time value."""
    return frozenset(_split_csv(os.environ.get("RC_API_KEYS", settings.api_keys)))
