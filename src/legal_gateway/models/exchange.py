"""Model representing one turn of a conversation."""

from pydantic import BaseModel, ConfigDict


class Exchange(BaseModel):
    """A user message paired with the assistant's reply.

    Exchanges are immutable once recorded; a session's history is an
    ordered list of them, oldest first.  The same shape is forwarded to
    the model server as ``conversation_history``.
    """

    model_config = ConfigDict(frozen=True)

    user: str
    assistant: str
