"""Session-keyed conversation history storage.

:class:`ConversationStore` is the boundary the chat service depends on;
:class:`InMemoryConversationStore` is the only implementation and keeps
everything in process memory, so histories vanish on restart.  Each
operation is atomic, but a chat turn's read-append-write spans several
operations, so concurrent turns on the same session are last-writer-wins.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, Sequence

from loguru import logger

from ..models.exchange import Exchange


class ConversationStore(ABC):
    """Interface for storing per-session conversation history."""

    @abstractmethod
    def get(self, session_id: str) -> list[Exchange]:
        """Return the history for a session, or an empty list if unknown."""

    @abstractmethod
    def set(self, session_id: str, history: Sequence[Exchange]) -> None:
        """Replace the stored history for a session."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Forget a session.  Deleting an unknown session is a no-op."""


class InMemoryConversationStore(ConversationStore):
    """Lock-protected dictionary of session id to exchanges.

    There is no eviction across sessions: every distinct session id stays
    resident until it is deleted or the process exits.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, list[Exchange]] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> list[Exchange]:
        with self._lock:
            return list(self._sessions.get(session_id, ()))

    def set(self, session_id: str, history: Sequence[Exchange]) -> None:
        with self._lock:
            self._sessions[session_id] = list(history)
        logger.debug("Stored {} exchanges for session={}", len(history), session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.debug("Deleted session={}", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
