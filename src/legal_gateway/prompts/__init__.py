"""Prompt templates used to build model requests."""

from .legal import (  # noqa: F401
    DEFAULT_JURISDICTION,
    GENERAL_KNOWLEDGE_PROMPT,
    GROUNDED_PROMPT,
    INSUFFICIENT_CONTEXT_REPLY,
    UNSURE_DISCLAIMER,
)
