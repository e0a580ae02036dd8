"""
Application settings using pydantic-settings

Loads environment variables from .env.local file
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Google Gemini API Configuration
    # Not required: a missing key surfaces as an auth error on the first extraction
    google_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "API_KEY"),
        description="Google API key for Gemini",
    )
    google_model: str = Field(
        default="gemini-3-flash-preview",
        alias="GOOGLE_MODEL",
        description="Google Gemini model name used for contact extraction",
    )
    llm_temperature: Optional[float] = Field(
        default=None,
        alias="LLM_TEMPERATURE",
        description="Sampling temperature (None keeps the model default)",
    )

    # UI Preferences
    preferences_path: Path = Field(
        default=Path.home() / ".contact_extractor" / "preferences.json",
        alias="PREFERENCES_PATH",
        description="JSON file holding the persisted theme preference",
    )
    copy_ack_seconds: float = Field(
        default=2.0,
        alias="COPY_ACK_SECONDS",
        description="How long a copy button shows its 'Copied!' label",
    )
    max_sessions: int = Field(
        default=100,
        alias="MAX_SESSIONS",
        description="Browser sessions kept in memory before the least recently used is dropped",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    # API Server Configuration
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8421, alias="API_PORT")
    open_browser: bool = Field(
        default=True,
        alias="OPEN_BROWSER",
        description="Open the UI in the default browser when the server starts",
    )

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings

    Returns:
        Settings: Application settings instance
    """
    return Settings()
