"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="speechprep", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")
    log_json: bool = Field(default=False, description="Emit one JSON object per log line")

    # Server
    host: str = Field(default="0.0.0.0", description="Listen host")
    port: int = Field(default=8000, ge=1, le=65535, description="Listen port")

    # Chunking (profiles live in config/chunking/static.json)
    chunking_profile: str = Field(
        default="active",
        description="Profile used when a request names none; 'active' follows static.json",
    )
    max_text_chars: int = Field(
        default=2_000_000, ge=1, description="Largest raw text accepted per request (characters)"
    )

    # Cost estimate only; synthesis happens elsewhere
    default_tts_model: str = Field(default="tts-1", description="tts-1|tts-1-hd")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for app lifetime."""
    return Settings()
