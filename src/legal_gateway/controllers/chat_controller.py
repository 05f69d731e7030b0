"""API controller for chat operations.

Defines the chat, generate and history routes.  Errors raised by the
ChatService are rendered by the exception handlers registered in
``main.py``.
"""

from fastapi import APIRouter, Depends
from loguru import logger

from ..models.chat_request import ChatRequest, GenerateRequest
from ..models.chat_response import (
    ChatResponse,
    ClearHistoryResponse,
    GenerateResponse,
    HistoryResponse,
)
from ..services.chat_service import ChatService
from .dependencies import get_chat_service

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat_endpoint(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Accept a chat message and return the assistant's response.

    ``sessionId`` is optional; when omitted a new session is started
    and its identifier is returned so the client can continue the
    dialogue in context.
    """
    logger.info("Received chat request for session={}", request.session_id or "<new>")
    response = await service.chat(request)
    logger.info("Answer generated successfully for session={}", response.session_id)
    return response


@router.post("/generate", response_model=GenerateResponse)
async def generate_endpoint(
    request: GenerateRequest,
    service: ChatService = Depends(get_chat_service),
) -> GenerateResponse:
    """Complete a raw prompt without history or retrieval."""
    logger.info("Received generate request")
    return await service.generate(request)


@router.get("/chat/{session_id}", response_model=HistoryResponse)
async def get_history_endpoint(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
) -> HistoryResponse:
    """Return the stored history for a session (empty if unknown)."""
    return service.get_history(session_id)


@router.delete("/chat/{session_id}", response_model=ClearHistoryResponse)
async def clear_history_endpoint(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
) -> ClearHistoryResponse:
    """Delete a session's history.  Deleting an unknown session succeeds."""
    return service.clear_history(session_id)
