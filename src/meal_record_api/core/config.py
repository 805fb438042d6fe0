"""Application configuration using Pydantic Settings."""

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    GEMINI = "gemini"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Meal Record API"
    api_version: str = "1.0.0"
    debug: bool = False

    # Shared secret expected in the x-api-key header
    api_key: str = ""

    # LLM Provider Selection
    llm_provider: LLMProvider = LLMProvider.OPENAI

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4"

    # Google Gemini Configuration
    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # LLM Settings
    llm_temperature: float = 0.0
    llm_timeout: float = 30.0  # seconds, single attempt

    # MongoDB (meal log archive)
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "meal_record"
    meal_log_collection: str = "meal-logs"
    meal_log_enabled: bool = True

    # Discord alerts (empty = disabled)
    discord_webhook_url: str = ""
    alert_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"
    log_file_enabled: bool = False
    log_dir: str = "logs"
    log_retention_days: int = 14

    @property
    def is_llm_configured(self) -> bool:
        """Check if the selected LLM provider is configured."""
        if self.llm_provider == LLMProvider.OPENAI:
            return bool(self.openai_api_key)
        elif self.llm_provider == LLMProvider.GEMINI:
            return bool(self.google_api_key)
        return False

    @property
    def is_alerting_configured(self) -> bool:
        """Check if a Discord webhook is configured."""
        return bool(self.discord_webhook_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
