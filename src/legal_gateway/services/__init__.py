"""Services implementing the chat request pipeline."""

from .chat_service import ChatService, trim_history  # noqa: F401
from .context_retriever import ContextRetriever  # noqa: F401
from .model_client import ModelClient  # noqa: F401
from .prompt_builder import PromptBuilder  # noqa: F401
