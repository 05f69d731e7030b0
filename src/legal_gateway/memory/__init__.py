"""Memory package containing the conversation history stores."""

from .conversation_store import ConversationStore, InMemoryConversationStore  # noqa: F401
