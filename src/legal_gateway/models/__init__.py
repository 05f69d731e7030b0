"""Expose commonly used model classes at the package level.

Importing these classes here allows consumers to write concise imports like::

    from legal_gateway.models import ChatRequest, ChatResponse, Exchange

These names refer to the underlying Pydantic models defined in their
respective modules.
"""

from .chat_request import ChatRequest, GenerateRequest, GenerationOptions  # noqa: F401
from .chat_response import (  # noqa: F401
    ChatResponse,
    ClearHistoryResponse,
    GenerateResponse,
    HealthResponse,
    HistoryResponse,
)
from .enums import ModelEndpoint, PromptVariant  # noqa: F401
from .exchange import Exchange  # noqa: F401
from .model_io import ModelRequest, ModelResponse  # noqa: F401
