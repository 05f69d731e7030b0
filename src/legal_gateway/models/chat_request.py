"""Request models for the chat and generate APIs."""

from pydantic import BaseModel, ConfigDict, Field


class GenerationOptions(BaseModel):
    """Client-supplied generation parameters.

    Every field is optional; anything left out falls back to the
    server-side defaults from :class:`ModelServerConfig`.
    """

    model_config = ConfigDict(populate_by_name=True)

    max_length: int | None = Field(default=None, alias="maxLength", gt=0, le=4096)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, alias="topP", gt=0.0, le=1.0)


class ChatRequest(BaseModel):
    """Represents a request payload for a chat message.

    ``message`` is deliberately optional at the schema level so that a
    missing or blank message is reported by the chat service as a plain
    400 ``Message is required`` rather than a schema error.  When
    ``sessionId`` is omitted a new session is started.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(
        default=None,
        description="The user's message content."
    )
    session_id: str | None = Field(
        default=None,
        alias="sessionId",
        description="Optional session identifier.  If omitted a new session will be started."
    )
    options: GenerationOptions | None = None


class GenerateRequest(BaseModel):
    """Stateless prompt completion request."""

    prompt: str | None = Field(default=None, description="Raw prompt forwarded to the model.")
    options: GenerationOptions | None = None
