"""Health endpoint reporting gateway and model server status."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..models.chat_response import HealthResponse
from ..services.chat_service import ChatService
from ..utils.error_handler import ModelServiceError
from ..utils.helpers import utc_timestamp
from .dependencies import get_chat_service

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={503: {"model": HealthResponse}},
)
async def health_endpoint(service: ChatService = Depends(get_chat_service)):
    """Return 200 when the model server answers its health probe, else 503."""
    try:
        model_health = await service.model_server_health()
    except ModelServiceError as exc:
        unhealthy = HealthResponse(
            status="unhealthy",
            model_server="unreachable",
            error=str(exc),
            timestamp=utc_timestamp(),
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=unhealthy.model_dump(by_alias=True),
        )
    return HealthResponse(
        status="healthy",
        model_server=model_health,
        timestamp=utc_timestamp(),
    )
