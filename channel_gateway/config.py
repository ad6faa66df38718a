"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - session_ids accepts a JSON list or a comma-separated string

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for everything: works out-of-the-box against a local bridge
"""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Messaging bridge (Node sidecar hosting the client library)
    bridge_url: str = "http://localhost:3000"
    bridge_timeout_seconds: float = 60.0
    session_ids: Annotated[list[str], NoDecode] = []

    @field_validator("session_ids", mode="before")
    @classmethod
    def split_session_ids(cls, v):
        """SESSION_IDS='["a","b"]' or SESSION_IDS=a,b both become ["a", "b"]."""
        if not isinstance(v, str):
            return v
        if v.strip().startswith("["):
            return json.loads(v)
        return [s.strip() for s in v.split(",") if s.strip()]

    @field_validator("bridge_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
