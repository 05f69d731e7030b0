"""Best-effort context lookup against the retrieval (RAG) service."""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx
from loguru import logger

from ..config.rag_config import RagConfig, get_rag_config
from ..utils import api_client
from ..utils.error_handler import RetrievalError


class ContextRetriever:
    """Fetch supporting passages for a query.

    Retrieval only enriches the prompt, so :meth:`retrieve_context`
    never raises: an unconfigured service, a timeout, an error status or
    a malformed payload all yield an empty string.
    """

    def __init__(
        self,
        config: RagConfig | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or get_rag_config()
        self._transport = transport

    async def retrieve_context(self, query: str) -> str:
        if not self.config.enabled:
            return ""
        try:
            context = await self._fetch(query)
        except RetrievalError as exc:
            logger.warning("Context retrieval failed, continuing without context: {}", exc)
            return ""
        except Exception:
            logger.exception("Unexpected error during context retrieval, continuing without context")
            return ""
        logger.debug("Retrieved {} characters of context", len(context))
        return context

    async def _fetch(self, query: str) -> str:
        url = f"{self.config.base_url}/retrieve"
        try:
            response = await api_client.post(
                url,
                {"query": query, "k": self.config.top_k},
                timeout=self.config.timeout,
                transport=self._transport,
            )
            response.raise_for_status()
            payload = response.json()
        except asyncio.TimeoutError as exc:
            raise RetrievalError(f"no reply within {self.config.timeout}s") from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise RetrievalError(f"{type(exc).__name__}: {exc}") from exc

        if not isinstance(payload, dict):
            raise RetrievalError("retrieval response is not a JSON object")
        context = payload.get("context") or ""
        if not isinstance(context, str):
            raise RetrievalError("retrieval context is not a string")
        return context
