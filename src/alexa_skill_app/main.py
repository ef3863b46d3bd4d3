"""FastAPI application factory with Lambda handler."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from .application import Application
from .config import Settings, configure_logging
from .routes import alexa, health
from .routes.alexa import PostRequestHook, PreRequestHook

logger = logging.getLogger(__name__)


def create_api(
    app: Application,
    settings: Settings | None = None,
    endpoint: str | None = None,
    pre_request: PreRequestHook | None = None,
    post_request: PostRequestHook | None = None,
) -> FastAPI:
    """Build a FastAPI application serving ``app``."""
    settings = settings or app.settings
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(api: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown events."""
        logger.info(f"Starting {settings.service_name} in {settings.environment} mode")
        yield
        logger.info(f"Shutting down {settings.service_name}")

    api = FastAPI(
        title=settings.service_name,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api.include_router(health.build_router(settings))
    api.include_router(alexa.build_router(app, endpoint, pre_request, post_request))

    return api


def lambda_handler(api: FastAPI) -> Mangum:
    """Wrap the HTTP application for API Gateway / function URL invocations."""
    return Mangum(api, lifespan="off")
