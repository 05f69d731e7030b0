from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class ModelServerConfig(BaseSettings):
    """Configuration for the remote model inference server."""

    base_url: str = Field("http://localhost:8000", alias="MODEL_SERVER_URL")
    api_key: str = Field("", alias="MODEL_API_KEY")
    timeout: float = Field(60.0, alias="MODEL_TIMEOUT")
    health_timeout: float = Field(5.0, alias="MODEL_HEALTH_TIMEOUT")

    # Generation defaults, overridden per request by client options
    max_length: int = Field(512, alias="DEFAULT_MAX_LENGTH")
    temperature: float = Field(0.7, alias="DEFAULT_TEMPERATURE")
    top_p: float = Field(0.9, alias="DEFAULT_TOP_P")
    repetition_penalty: Optional[float] = Field(1.1, alias="DEFAULT_REPETITION_PENALTY")

    @field_validator("base_url")
    def validate_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("MODEL_SERVER_URL must be an http(s) URL")
        return value

    @field_validator("timeout", "health_timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Model server timeouts must be positive")
        return value

    @field_validator("max_length")
    def validate_max_length(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("DEFAULT_MAX_LENGTH must be positive")
        return value

    @field_validator("temperature")
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("DEFAULT_TEMPERATURE must be between 0.0 and 2.0")
        return value

    @field_validator("top_p")
    def validate_top_p(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("DEFAULT_TOP_P must be in (0.0, 1.0]")
        return value

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_model_server_config() -> ModelServerConfig:
    """Return a cached model server configuration."""

    return ModelServerConfig()
