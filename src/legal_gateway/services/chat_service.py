"""Orchestration service combining retrieval, prompting, the model and memory.

The ChatService receives user messages, looks up supporting context,
builds the engineered prompt, asks the model server for a response and
then records the exchange in the session's history.  It centralises
error handling so controllers can remain thin.
"""

from __future__ import annotations

from typing import Any, Sequence

from loguru import logger

from ..config.app_config import AppConfig, get_app_config
from ..config.llm_config import ModelServerConfig
from ..memory.conversation_store import ConversationStore, InMemoryConversationStore
from ..models.chat_request import ChatRequest, GenerateRequest, GenerationOptions
from ..models.chat_response import (
    ChatResponse,
    ClearHistoryResponse,
    GenerateResponse,
    HistoryResponse,
)
from ..models.enums import ModelEndpoint
from ..models.exchange import Exchange
from ..models.model_io import ModelRequest
from ..utils.error_handler import ChatError, InputValidationError, ModelServiceError
from ..utils.helpers import generate_session_id, utc_timestamp
from .context_retriever import ContextRetriever
from .model_client import ModelClient
from .prompt_builder import PromptBuilder


def trim_history(history: Sequence[Exchange], limit: int) -> list[Exchange]:
    """Keep only the most recent ``limit`` exchanges, oldest first."""
    if len(history) <= limit:
        return list(history)
    return list(history[-limit:])


class ChatService:
    """Coordinates context retrieval, prompt building, generation and memory.

    All collaborators are injectable; anything omitted is built from the
    environment configuration.
    """

    def __init__(
        self,
        store: ConversationStore | None = None,
        retriever: ContextRetriever | None = None,
        prompt_builder: PromptBuilder | None = None,
        model_client: ModelClient | None = None,
        app_config: AppConfig | None = None,
    ) -> None:
        self.app_config = app_config or get_app_config()
        self.store = store if store is not None else InMemoryConversationStore()
        self.retriever = retriever or ContextRetriever()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.model_client = model_client or ModelClient()

    @property
    def history_limit(self) -> int:
        return self.app_config.history_limit

    @property
    def model_defaults(self) -> ModelServerConfig:
        return self.model_client.config

    async def chat(self, chat_request: ChatRequest) -> ChatResponse:
        """Generate a reply to a chat request and remember the exchange.

        Parameters
        ----------
        chat_request: ChatRequest
            The incoming message with optional session id and options.

        Returns
        -------
        ChatResponse
            The model's answer together with the (possibly new) session id.

        Raises
        ------
        InputValidationError
            If the message is missing or blank.
        ModelServiceError
            If the model server fails, is unreachable or times out.
        ChatError
            If anything else goes wrong while processing the turn.

        The session history is only written after the model has answered,
        so a failed turn never leaves a half-recorded exchange behind.
        """
        message = (chat_request.message or "").strip()
        if not message:
            raise InputValidationError("Message is required")

        session_id = chat_request.session_id or generate_session_id()
        logger.info("Processing chat for session={}", session_id)
        try:
            history = self.store.get(session_id)
            context = await self.retriever.retrieve_context(message)
            prompt = self.prompt_builder.build_prompt(context, message)
            model_request = ModelRequest(
                message=prompt,
                **self._generation_params(chat_request.options),
                repetition_penalty=self.model_defaults.repetition_penalty,
                conversation_history=history,
            )
            model_response = await self.model_client.call_model(ModelEndpoint.CHAT, model_request)

            history.append(Exchange(user=message, assistant=model_response.response))
            self.store.set(session_id, trim_history(history, self.history_limit))
        except ModelServiceError as exc:
            logger.error("Chat error for session={}: {}", session_id, exc)
            raise
        except Exception as exc:
            logger.exception("Chat processing failed for session={}", session_id)
            raise ChatError(str(exc) or type(exc).__name__) from exc

        return ChatResponse(
            response=model_response.response,
            session_id=session_id,
            model_name=model_response.model_name,
            timestamp=utc_timestamp(),
        )

    async def generate(self, generate_request: GenerateRequest) -> GenerateResponse:
        """Complete a raw prompt with no retrieval, templating or memory."""
        prompt = (generate_request.prompt or "").strip()
        if not prompt:
            raise InputValidationError("Prompt is required")

        try:
            model_request = ModelRequest(
                message=prompt,
                **self._generation_params(generate_request.options),
            )
            model_response = await self.model_client.call_model(ModelEndpoint.GENERATE, model_request)
        except ModelServiceError as exc:
            logger.error("Generate error: {}", exc)
            raise
        except Exception as exc:
            logger.exception("Generate processing failed")
            raise ChatError(str(exc) or type(exc).__name__) from exc

        return GenerateResponse(response=model_response.response, timestamp=utc_timestamp())

    def _generation_params(self, options: GenerationOptions | None) -> dict[str, Any]:
        """Merge client options over the configured defaults."""
        options = options or GenerationOptions()
        return {
            "max_length": options.max_length or self.model_defaults.max_length,
            "temperature": (
                options.temperature if options.temperature is not None else self.model_defaults.temperature
            ),
            "top_p": options.top_p or self.model_defaults.top_p,
        }

    # ------------------------------------------------------------------
    # Session management API

    def get_history(self, session_id: str) -> HistoryResponse:
        """Return the stored exchanges for a session (empty if unknown)."""
        return HistoryResponse(session_id=session_id, history=self.store.get(session_id))

    def clear_history(self, session_id: str) -> ClearHistoryResponse:
        """Forget a session's history.  Unknown sessions are not an error."""
        logger.info("Clearing conversation for session={}", session_id)
        self.store.delete(session_id)
        return ClearHistoryResponse(message="Conversation cleared", session_id=session_id)

    # ------------------------------------------------------------------
    # Health

    async def model_server_health(self) -> Any:
        """Probe the model server; raises ModelServiceError when it is down."""
        return await self.model_client.health()
