"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from sentia.api.routers import api_router
from sentia.config.message import ERROR_MESSAGES
from sentia.config.settings import Settings, get_settings
from sentia.exceptions import SentiaError
from sentia.infrastructure.logging import setup_logging
from sentia.orchestrator.context import AppContext
from sentia.orchestrator.scan_session import ScanCoordinator

logger = logging.getLogger(__name__)


async def sentia_error_handler(request: Request, exc: SentiaError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.error_code}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "type": "/errors/INTERNAL_ERROR",
            "title": ERROR_MESSAGES["unknown_error"],
            "status": 500,
            "code": "INTERNAL_ERROR",
            "detail": "Internal server error",
        },
    )


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Defaults to the cached environment settings
        context: Prebuilt context (tests inject one with a mock transport)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Startup and shutdown lifecycle."""
        logger.info(f"Starting {settings.app_name} (vision service: {settings.api_base_url})")
        ctx = context or AppContext.from_settings(settings)
        coordinator = ScanCoordinator(ctx)
        app.state.context = ctx
        app.state.coordinator = coordinator

        yield

        logger.info(f"Shutting down {settings.app_name}")
        await coordinator.close()
        await ctx.close()

    app = FastAPI(
        title=settings.app_name,
        description="Cultural photo analysis with relevance gating, premium access and daily quota",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    app.add_exception_handler(SentiaError, sentia_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(api_router, prefix="/api")
    return app


_settings = get_settings()

setup_logging(
    level=_settings.log_level,
    json_output=not _settings.debug,
    silence_noisy_loggers=True,
)

app = create_app(_settings)
