"""
OAuth User Inspector - FastAPI Application

Main application entry point for the OAuth token lifecycle proxy used by the
inspector's browser frontend.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from oauth_inspector.config import InspectorSettings
from oauth_inspector.config import settings as default_settings
from oauth_inspector.dependencies import InspectorContext
from oauth_inspector.errors import InspectorError
from oauth_inspector.logging_config import configure_logging
from oauth_inspector.middleware.cors import setup_cors
from oauth_inspector.middleware.logging import logging_middleware
from oauth_inspector.middleware.metrics import metrics_middleware
from oauth_inspector.oauth.registry import ProviderRegistry
from oauth_inspector.oauth.secrets import SecretProvider, create_secret_provider
from oauth_inspector.routes import explore, health, hosted, oauth

logger = structlog.get_logger()


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InspectorError)
    async def inspector_error_handler(request: Request, exc: InspectorError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Malformed request body",
            path=request.url.path,
            error_count=len(exc.errors()),
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request body."})


def create_app(
    settings: InspectorSettings | None = None,
    secret_provider: SecretProvider | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-loaded defaults
        secret_provider: Secret provider to use instead of the configured backend
        http_client: Outbound HTTP client; owned by the caller when provided

    Returns:
        Configured application
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

        logger.info(
            "Starting OAuth User Inspector",
            version=settings.APP_VERSION,
            name=settings.APP_NAME,
            secret_backend=settings.SECRET_BACKEND,
        )

        context = InspectorContext(
            settings=settings,
            secrets=secret_provider or create_secret_provider(settings),
            registry=ProviderRegistry(),
            http_client=http_client
            or httpx.AsyncClient(
                timeout=settings.PROVIDER_TIMEOUT_SECONDS,
                follow_redirects=True,
            ),
        )
        app.state.context = context
        logger.info("Provider registry initialized", providers=len(context.registry))

        try:
            yield
        finally:
            logger.info("Shutting down OAuth User Inspector")
            if http_client is None:
                await context.http_client.aclose()
            if secret_provider is None:
                await context.secrets.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Token exchange, refresh, revocation and API explorer proxy for OAuth providers",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    _register_exception_handlers(app)

    # Setup CORS middleware
    setup_cors(app, settings)

    # Add logging middleware
    @app.middleware("http")
    async def add_logging_middleware(request, call_next):
        return await logging_middleware(request, call_next)

    # Add metrics middleware if enabled
    if settings.ENABLE_METRICS:
        @app.middleware("http")
        async def add_metrics_middleware(request, call_next):
            return await metrics_middleware(request, call_next)

    # Include routers
    app.include_router(health.router, tags=["health"])
    app.include_router(oauth.router, tags=["oauth"])
    app.include_router(hosted.router, tags=["hosted"])
    app.include_router(explore.router, tags=["explore"])

    # Prometheus instrumentation
    if settings.ENABLE_METRICS:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "oauth_inspector.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level=default_settings.LOG_LEVEL.lower(),
        access_log=True,
    )
