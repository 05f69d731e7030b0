from __future__ import annotations

import asyncio
import time

import httpx
import pytest
from pydantic import ValidationError

from legal_gateway.config import RagConfig
from legal_gateway.services import ContextRetriever

from conftest import RAG_URL, FakeUpstream, trickling_server

RETRIEVE_URL = f"{RAG_URL}/retrieve"


def _retrieve(retriever: ContextRetriever, query: str = "What is Section 420?") -> str:
    return asyncio.run(retriever.retrieve_context(query))


def test_unconfigured_retriever_returns_empty_without_network(upstream: FakeUpstream) -> None:
    retriever = ContextRetriever(RagConfig(RAG_SERVER_URL=""), transport=upstream.transport)

    assert _retrieve(retriever) == ""
    assert upstream.requests == []


def test_returns_context_and_sends_query_with_top_k(upstream: FakeUpstream, rag_config: RagConfig) -> None:
    upstream.on("POST", RETRIEVE_URL, lambda request: httpx.Response(200, json={"context": "passages"}))
    retriever = ContextRetriever(rag_config, transport=upstream.transport)

    assert _retrieve(retriever, "cheating") == "passages"
    assert upstream.bodies(RETRIEVE_URL) == [{"query": "cheating", "k": 5}]


def test_missing_context_field_defaults_to_empty(upstream: FakeUpstream, rag_config: RagConfig) -> None:
    upstream.on("POST", RETRIEVE_URL, lambda request: httpx.Response(200, json={"documents": []}))
    retriever = ContextRetriever(rag_config, transport=upstream.transport)

    assert _retrieve(retriever) == ""


def test_error_status_degrades_to_empty(upstream: FakeUpstream, rag_config: RagConfig) -> None:
    upstream.on("POST", RETRIEVE_URL, lambda request: httpx.Response(503, json={"detail": "down"}))
    retriever = ContextRetriever(rag_config, transport=upstream.transport)

    assert _retrieve(retriever) == ""


def test_malformed_payload_degrades_to_empty(upstream: FakeUpstream, rag_config: RagConfig) -> None:
    upstream.on("POST", RETRIEVE_URL, lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    retriever = ContextRetriever(rag_config, transport=upstream.transport)

    assert _retrieve(retriever) == ""


def test_unreachable_service_degrades_to_empty(upstream: FakeUpstream, rag_config: RagConfig) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    upstream.on("POST", RETRIEVE_URL, refuse)
    retriever = ContextRetriever(rag_config, transport=upstream.transport)

    assert _retrieve(retriever) == ""


def test_timeout_degrades_to_empty(upstream: FakeUpstream, rag_config: RagConfig) -> None:
    def stall(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.on("POST", RETRIEVE_URL, stall)
    retriever = ContextRetriever(rag_config, transport=upstream.transport)

    assert _retrieve(retriever) == ""


def test_non_string_context_degrades_to_empty(upstream: FakeUpstream, rag_config: RagConfig) -> None:
    upstream.on("POST", RETRIEVE_URL, lambda request: httpx.Response(200, json={"context": ["a", "b"]}))
    retriever = ContextRetriever(rag_config, transport=upstream.transport)

    assert _retrieve(retriever) == ""


def test_trickling_reply_degrades_to_empty_within_timeout() -> None:
    async def scenario() -> tuple[str, float]:
        async with trickling_server(b'{"context": "slow passages"}', delay=0.3) as base_url:
            retriever = ContextRetriever(RagConfig(RAG_SERVER_URL=base_url, RAG_TIMEOUT=1))
            started = time.perf_counter()
            context = await retriever.retrieve_context("What is Section 420?")
            return context, time.perf_counter() - started

    context, elapsed = asyncio.run(scenario())

    assert context == ""
    assert elapsed < 3


def test_malformed_url_degrades_to_empty() -> None:
    retriever = ContextRetriever(RagConfig(RAG_SERVER_URL="http://[::1"))

    assert _retrieve(retriever) == ""


def test_non_http_url_is_rejected() -> None:
    with pytest.raises(ValidationError):
        RagConfig(RAG_SERVER_URL="ftp://rag.test")
