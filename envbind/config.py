"""Library Configuration — envbind's own knobs via pydantic-settings.

Invariants:
    - Every setting is read from ENVBIND_* variables (never hardcoded at call sites)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings for the library's own settings: these are fixed and known,
      unlike the caller schemas bound through the core
    - Defaults for everything: importing and calling load() works without any ENVBIND_* set
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """envbind settings from environment variables."""

    model_config = SettingsConfigDict(env_prefix="ENVBIND_", case_sensitive=False)

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Dotenv file consulted by the loader service (None: process env only)
    env_file: str | None = None
    # True: values from env_file win over the process environment
    dotenv_override: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("env_file", mode="before")
    @classmethod
    def blank_env_file_is_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
