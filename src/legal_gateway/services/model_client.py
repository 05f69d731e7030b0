"""Client for the remote model inference server.

Every call carries the static ``X-API-Key`` credential from
:class:`ModelServerConfig`.  Transport failures, timeouts, non-2xx
statuses and unparseable payloads all surface as
:class:`ModelServiceError` so the chat service has a single failure
type to handle.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from ..config.llm_config import ModelServerConfig, get_model_server_config
from ..models.enums import ModelEndpoint
from ..models.model_io import ModelRequest, ModelResponse
from ..utils import api_client
from ..utils.error_handler import ModelServiceError


class ModelClient:
    """Issue inference and health requests to the model server."""

    def __init__(
        self,
        config: ModelServerConfig | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or get_model_server_config()
        # Only set in tests, where it points at an httpx.MockTransport
        self._transport = transport

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-API-Key": self.config.api_key,
        }

    async def call_model(self, endpoint: ModelEndpoint, request: ModelRequest) -> ModelResponse:
        """POST ``request`` to ``endpoint`` and return the parsed reply.

        Raises
        ------
        ModelServiceError
            On timeout, connection failure, a non-success status (using the
            server's ``detail`` when it supplies one) or a malformed body.
        """
        url = f"{self.config.base_url}{endpoint.value}"
        logger.debug("Calling model server {} ({} chars)", url, len(request.message))
        try:
            response = await api_client.post(
                url,
                request.to_payload(),
                headers=self.headers,
                timeout=self.config.timeout,
                transport=self._transport,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.error("Model server timed out after {}s: {}", self.config.timeout, exc)
            raise ModelServiceError("Model server request timed out") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Error calling model server: {}", exc)
            raise ModelServiceError("Failed to connect to model server") from exc

        if response.is_error:
            detail = self._error_detail(response)
            logger.error("Model server returned {}: {}", response.status_code, detail)
            raise ModelServiceError(detail)

        try:
            return ModelResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Unparseable model server response: {}", response.text[:200])
            raise ModelServiceError("Invalid response from model server") from exc

    async def health(self) -> Any:
        """Return the model server's ``/health`` payload."""
        url = f"{self.config.base_url}/health"
        try:
            response = await api_client.get(
                url,
                headers={"X-API-Key": self.config.api_key},
                timeout=self.config.health_timeout,
                transport=self._transport,
            )
            response.raise_for_status()
            return response.json()
        except asyncio.TimeoutError as exc:
            logger.warning("Model server health check timed out after {}s", self.config.health_timeout)
            raise ModelServiceError("Model server health check timed out") from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.warning("Model server health check failed: {}", exc)
            raise ModelServiceError(str(exc) or "Model server unreachable") from exc

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return "Model server error"
        if isinstance(payload, dict) and payload.get("detail"):
            detail = payload["detail"]
            return detail if isinstance(detail, str) else str(detail)
        return "Model server error"
