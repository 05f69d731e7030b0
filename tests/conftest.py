from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from legal_gateway.config import AppConfig, ModelServerConfig, PromptConfig, RagConfig
from legal_gateway.main import create_app
from legal_gateway.memory import InMemoryConversationStore
from legal_gateway.services import ChatService, ContextRetriever, ModelClient, PromptBuilder

MODEL_URL = "http://model.test"
RAG_URL = "http://rag.test"
API_KEY = "test-api-key"

Handler = Callable[[httpx.Request], httpx.Response]

SECTION_420_CONTEXT = (
    "Section 420 of the Indian Penal Code: Whoever cheats and thereby dishonestly "
    "induces the person deceived to deliver any property shall be punished with "
    "imprisonment of up to seven years and shall also be liable to fine."
)


class FakeUpstream:
    """Stand-in for the model and retrieval servers behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Handler] = {}
        self.transport = httpx.MockTransport(self._dispatch)

    def on(self, method: str, url: str, handler: Handler) -> None:
        self._routes[(method, url)] = handler

    def calls(self, url: str) -> list[httpx.Request]:
        return [request for request in self.requests if str(request.url) == url]

    def bodies(self, url: str) -> list[dict]:
        return [json.loads(request.content) for request in self.calls(url)]

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, str(request.url)))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return handler(request)


def model_reply(text: str = "- Cheating is punishable.", model_name: str | None = "legal-llm") -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = {"response": text}
        if model_name is not None:
            payload["model_name"] = model_name
        return httpx.Response(200, json=payload)

    return handler


def echo_model() -> Handler:
    """Reply with a numbered answer so each turn is distinguishable."""
    counter = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        counter["n"] += 1
        return httpx.Response(200, json={"response": f"answer {counter['n']}"})

    return handler


@asynccontextmanager
async def trickling_server(body: bytes, delay: float) -> AsyncIterator[str]:
    """Serve one JSON reply on localhost, writing a byte every ``delay`` seconds.

    Every single read finishes quickly; only the whole reply is slow.
    """

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            head = await reader.readuntil(b"\r\n\r\n")
            length = 0
            for line in head.decode("latin-1").split("\r\n"):
                name, _, value = line.partition(":")
                if name.strip().lower() == "content-length":
                    length = int(value.strip())
            await reader.readexactly(length)
            writer.write(
                b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n"
                + f"Content-Length: {len(body)}\r\n\r\n".encode()
            )
            await writer.drain()
            for index in range(len(body)):
                await asyncio.sleep(delay)
                writer.write(body[index : index + 1])
                await writer.drain()
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        server.close()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(app_env="development", log_level="WARNING", rate_limit_enabled=False)


@pytest.fixture
def model_config() -> ModelServerConfig:
    return ModelServerConfig(MODEL_SERVER_URL=MODEL_URL, MODEL_API_KEY=API_KEY)


@pytest.fixture
def rag_config() -> RagConfig:
    return RagConfig(RAG_SERVER_URL=RAG_URL)


@pytest.fixture
def store() -> InMemoryConversationStore:
    return InMemoryConversationStore()


@pytest.fixture
def chat_service(
    upstream: FakeUpstream,
    app_config: AppConfig,
    model_config: ModelServerConfig,
    rag_config: RagConfig,
    store: InMemoryConversationStore,
) -> ChatService:
    return ChatService(
        store=store,
        retriever=ContextRetriever(rag_config, transport=upstream.transport),
        prompt_builder=PromptBuilder(PromptConfig()),
        model_client=ModelClient(model_config, transport=upstream.transport),
        app_config=app_config,
    )


@pytest.fixture
def client(app_config: AppConfig, chat_service: ChatService) -> TestClient:
    return TestClient(create_app(app_config, chat_service))
