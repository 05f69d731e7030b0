"""Response models for the public API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .exchange import Exchange


class ChatResponse(BaseModel):
    """Represents the assistant's reply to a chat request.

    The session identifier is echoed back (or freshly generated) so the
    client can continue the dialogue in context.
    """

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    response: str
    session_id: str = Field(..., alias="sessionId")
    model_name: str | None = Field(default=None, alias="modelName")
    timestamp: str


class GenerateResponse(BaseModel):
    response: str
    timestamp: str


class HistoryResponse(BaseModel):
    """Stored conversation for a session, oldest exchange first."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    history: list[Exchange] = Field(default_factory=list)


class ClearHistoryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    session_id: str = Field(..., alias="sessionId")


class HealthResponse(BaseModel):
    """Gateway health, including the downstream model server probe."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    status: str
    backend: str = "running"
    model_server: Any = Field(default=None, alias="modelServer")
    error: str | None = None
    timestamp: str
