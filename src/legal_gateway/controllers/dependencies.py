"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from ..services.chat_service import ChatService


def get_chat_service(request: Request) -> ChatService:
    """Return the ChatService attached to the running app by ``create_app``."""
    return request.app.state.chat_service
