"""Error handling utilities and custom exceptions.

Every error the gateway raises on purpose derives from
:class:`GatewayError`, which knows its HTTP status and how to render
itself as the ``{"error": ..., "message": ...}`` body clients expect.
The handlers below are registered on the FastAPI app in ``main.py``.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException


class GatewayError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error, "message": str(self)}


class InputValidationError(GatewayError):
    """A required request field is missing or blank."""

    status_code = status.HTTP_400_BAD_REQUEST

    def to_payload(self) -> dict[str, Any]:
        return {"error": str(self)}


class ModelServiceError(GatewayError):
    """The model server failed, was unreachable or timed out."""

    error = "Failed to generate response"


class ChatError(GatewayError):
    """Exception raised when a chat operation fails unexpectedly."""

    error = "Failed to generate response"


class RetrievalError(Exception):
    """The retrieval service failed.

    Never leaves :class:`ContextRetriever`; it only exists so the
    retriever can funnel every failure mode through one ``except``.
    """


async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Convert a GatewayError into its HTTP response."""
    if exc.status_code >= 500:
        logger.error("{} on {} {}: {}", type(exc).__name__, request.method, request.url.path, exc)
    else:
        logger.info("Rejected {} {}: {}", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    logger.info("Invalid request body on {} {}: {}", request.method, request.url.path, exc.errors())
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": details},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors (unknown routes, wrong methods) as ``{"error": ...}``."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        content = {"error": "Route not found"}
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def build_unhandled_exception_handler(debug: bool):
    """Return a catch-all handler; the exception text is only exposed in debug."""

    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        content: dict[str, Any] = {"error": "Internal server error"}
        if debug:
            content["message"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    return unhandled_exception_handler
