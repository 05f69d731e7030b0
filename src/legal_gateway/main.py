"""FastAPI application entry point.

This module initialises the FastAPI app, configures logging, wires the
middleware stack and registers API routes.  The ``uvicorn`` ASGI server
can point to ``legal_gateway.main:app`` to serve the application, or run
``python -m legal_gateway.main``.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.app_config import AppConfig, get_app_config
from .controllers.chat_controller import router as chat_router
from .controllers.health_controller import router as health_router
from .services.chat_service import ChatService
from .utils.error_handler import (
    GatewayError,
    build_unhandled_exception_handler,
    gateway_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .utils.logger import setup_logging
from .utils.middleware import AccessLogMiddleware, RateLimitMiddleware, SecurityHeadersMiddleware
from .utils.origin_policy import OriginPolicyCORSMiddleware
from .utils.rate_limiter import FixedWindowRateLimiter


def create_app(
    app_config: AppConfig | None = None,
    chat_service: ChatService | None = None,
) -> FastAPI:
    """Create and configure a FastAPI application."""
    app_config = app_config or get_app_config()
    setup_logging(app_config)

    app = FastAPI(title="Legal Chat Gateway", version="0.1.0")
    app.state.app_config = app_config
    app.state.chat_service = chat_service or ChatService(app_config=app_config)

    # Middleware added last runs first: CORS wraps everything so even
    # rate-limited responses carry the CORS headers.
    if app_config.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            api_limiter=FixedWindowRateLimiter(
                app_config.rate_limit_max_requests,
                app_config.rate_limit_window_seconds,
                message="Too many requests from this IP, please try again later.",
            ),
            strict_limiter=FixedWindowRateLimiter(
                app_config.chat_rate_limit_max_requests,
                app_config.chat_rate_limit_window_seconds,
                message="Too many chat requests, please slow down.",
            ),
            strict_routes=[("POST", "/api/chat"), ("POST", "/api/generate")],
        )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        OriginPolicyCORSMiddleware,
        origin_patterns=app_config.origin_patterns,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GatewayError, gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, build_unhandled_exception_handler(app_config.app_debug))

    app.include_router(health_router)
    app.include_router(chat_router)

    model_client = app.state.chat_service.model_client
    logger.info("Model server: {}", model_client.config.base_url)
    if not model_client.config.api_key:
        logger.warning("MODEL_API_KEY is empty; the model server will likely reject requests")
    logger.info("Environment: {}", app_config.app_env)

    return app


# Create an application instance for ASGI servers
app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_app_config()
    uvicorn.run(app, host=config.app_host, port=config.app_port, log_config=None)
