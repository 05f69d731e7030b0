from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..prompts import DEFAULT_JURISDICTION, GENERAL_KNOWLEDGE_PROMPT, GROUNDED_PROMPT

load_dotenv()


class PromptConfig(BaseSettings):
    """Prompt policy: jurisdiction, template texts and the context threshold.

    Retrieved context longer than ``context_threshold`` characters (after
    stripping) selects the grounded template; anything shorter, including
    no context at all, selects the general-knowledge template.
    """

    jurisdiction: str = Field(DEFAULT_JURISDICTION, alias="PROMPT_JURISDICTION")
    context_threshold: int = Field(50, alias="CONTEXT_MIN_LENGTH")
    grounded_template: str = Field(GROUNDED_PROMPT, alias="PROMPT_STRICT_TEMPLATE")
    general_template: str = Field(GENERAL_KNOWLEDGE_PROMPT, alias="PROMPT_FALLBACK_TEMPLATE")

    @field_validator("jurisdiction")
    def validate_jurisdiction(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("PROMPT_JURISDICTION must not be blank")
        return value.strip()

    @field_validator("context_threshold")
    def validate_threshold(cls, value: int) -> int:
        if value < 0:
            raise ValueError("CONTEXT_MIN_LENGTH must not be negative")
        return value

    @field_validator("grounded_template")
    def validate_grounded_template(cls, value: str) -> str:
        for placeholder in ("{context}", "{question}"):
            if placeholder not in value:
                raise ValueError(f"PROMPT_STRICT_TEMPLATE must contain {placeholder}")
        return value

    @field_validator("general_template")
    def validate_general_template(cls, value: str) -> str:
        if "{question}" not in value:
            raise ValueError("PROMPT_FALLBACK_TEMPLATE must contain {question}")
        return value

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_prompt_config() -> PromptConfig:
    """Return a cached prompt policy configuration."""

    return PromptConfig()
