"""Wire models exchanged with the model server."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from .exchange import Exchange


class ModelRequest(BaseModel):
    """Body posted to ``/chat`` or ``/generate`` on the model server.

    Optional fields left as ``None`` are dropped from the payload by
    :meth:`to_payload`.
    """

    message: str
    max_length: int
    temperature: float
    top_p: float
    repetition_penalty: float | None = None
    conversation_history: list[Exchange] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ModelResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", protected_namespaces=())

    response: str
    model_name: str | None = None
