"""Enumerations used across models."""

from enum import Enum


class ModelEndpoint(str, Enum):
    """Inference endpoints exposed by the model server.

    ``CHAT`` accepts an engineered prompt together with the serialized
    conversation history, ``GENERATE`` takes a raw prompt with no memory.
    The value is the path appended to the model server base URL.
    """

    CHAT = "/chat"
    GENERATE = "/generate"


class PromptVariant(str, Enum):
    """Which prompt template was selected for a chat turn."""

    GROUNDED = "grounded"
    GENERAL_KNOWLEDGE = "general_knowledge"
