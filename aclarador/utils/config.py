"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "aclarador" / "settings.json"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields in .env file
        case_sensitive=False,  # Allow both UPPERCASE and lowercase
    )

    # Groq completion API (credential may also come from the settings store)
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Text limits
    CHAR_LIMIT: int = 3000

    # Local key-value store for credential and character limit
    SETTINGS_PATH: Path = DEFAULT_SETTINGS_PATH

    # Timeouts (seconds)
    API_TIMEOUT: float = 60.0
    EXTRACT_TIMEOUT: float = 15.0


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
