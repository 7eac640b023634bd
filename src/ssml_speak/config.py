from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKENDS = {"auto", "pyttsx3", "sapi"}


class AppSettings(BaseSettings):
    """Centralised settings (env + reasonable defaults)."""
    model_config = SettingsConfigDict(env_prefix="SSML_SPEAK_", env_file=".env", extra="ignore")

    # Speech backend
    BACKEND: str = "auto"  # auto|pyttsx3|sapi
    DEFAULT_LOCALE: str = "en-US"
    SPEECH_RATE: Optional[int] = Field(default=None, gt=0)

    # Session log, one file per calendar day
    LOG_DIR: Path = Field(default_factory=Path.cwd)
    LOG_FILE_PATTERN: str = "ssml-speak_%Y-%m-%d.log"

    # Diagnostic logger (stderr)
    LOG_LEVEL: str = "WARNING"

    @field_validator("BACKEND")
    @classmethod
    def _backend_lower(cls, v: str) -> str:
        v = v.lower()
        if v not in BACKENDS:
            raise ValueError("BACKEND must be one of: auto|pyttsx3|sapi")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _level_upper(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return v

    @field_validator("LOG_FILE_PATTERN")
    @classmethod
    def _pattern_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("LOG_FILE_PATTERN must not be empty")
        return v
