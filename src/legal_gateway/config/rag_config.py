from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class RagConfig(BaseSettings):
    """Settings for the optional retrieval (RAG) service.

    Leaving ``RAG_SERVER_URL`` unset disables retrieval entirely; every
    chat turn then falls back to the general-knowledge prompt.
    """

    base_url: Optional[str] = Field(None, alias="RAG_SERVER_URL")
    top_k: int = Field(5, alias="RAG_TOP_K")
    timeout: float = Field(5.0, alias="RAG_TIMEOUT")

    @field_validator("base_url")
    def validate_base_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("RAG_SERVER_URL must be an http(s) URL")
        return value

    @field_validator("top_k")
    def validate_top_k(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("RAG_TOP_K must be positive")
        return value

    @field_validator("timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("RAG_TIMEOUT must be positive")
        return value

    @property
    def enabled(self) -> bool:
        return self.base_url is not None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_rag_config() -> RagConfig:
    """Return a cached retrieval configuration."""

    return RagConfig()
