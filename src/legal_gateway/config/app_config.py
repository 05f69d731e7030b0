from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class AppConfig(BaseSettings):
    """Application configuration settings."""

    # Environment
    app_env: str = Field("development")
    app_debug: bool = Field(False)
    app_host: str = Field("0.0.0.0")
    app_port: int = Field(3000, validation_alias=AliasChoices("APP_PORT", "PORT", "app_port"))

    # Logging
    log_level: str = Field("INFO")
    log_file: Optional[str] = Field(None)

    # CORS: comma separated origin patterns, e.g. "https://app.example.com,https://*.vercel.app"
    allowed_origins: str = Field("*")

    # Conversation memory
    history_limit: int = Field(10)

    # Rate limiting
    rate_limit_enabled: bool = Field(True)
    rate_limit_window_seconds: float = Field(15 * 60)
    rate_limit_max_requests: int = Field(100)
    chat_rate_limit_window_seconds: float = Field(60)
    chat_rate_limit_max_requests: int = Field(10)

    @field_validator("app_env")
    def validate_app_env(cls, value: str) -> str:
        if value not in ["development", "staging", "production"]:
            raise ValueError("APP_ENV must be development, staging, or production")
        return value

    @field_validator("log_level")
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("LOG_LEVEL must be a valid Loguru level")
        return level

    @field_validator("history_limit")
    def validate_history_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("HISTORY_LIMIT must be positive")
        return value

    @field_validator(
        "rate_limit_window_seconds",
        "rate_limit_max_requests",
        "chat_rate_limit_window_seconds",
        "chat_rate_limit_max_requests",
    )
    def validate_rate_limits(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Rate limit windows and request caps must be positive")
        return value

    @property
    def origin_patterns(self) -> list[str]:
        """Return the configured CORS origin patterns as a list."""
        return [part.strip() for part in self.allowed_origins.split(",") if part.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_app_config() -> AppConfig:
    """Return a cached application configuration instance."""

    return AppConfig()
