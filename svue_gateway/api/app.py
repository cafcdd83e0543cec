# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gateway application factory.

``create_app()`` is what uvicorn loads (``--factory``). The only process-wide
resource is the upstream HTTP client, opened and closed by the lifespan.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from svue_gateway import __version__
from svue_gateway.api.dependencies import close_http_client, init_http_client
from svue_gateway.api.errors import register_exception_handlers
from svue_gateway.api.middleware.auth import AuthMiddleware
from svue_gateway.api.routes import health
from svue_gateway.api.v1 import router as v1_router
from svue_gateway.core.config import get_settings
from svue_gateway.domains.session.codec import CryptoError, get_token_codec
from svue_gateway.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the upstream HTTP client for the life of the process.

    The token key is checked here too, but a bad key only logs a warning:
    Basic requests work without it and token requests report it per call.
    """
    settings = get_settings()
    logger.info(
        "svue-gateway starting: environment=%s, district=%s",
        settings.environment,
        settings.studentvue.district_url,
    )

    try:
        get_token_codec()
    except CryptoError as e:
        logger.warning("Session token key unusable: %s", e.message)

    await init_http_client(settings)

    yield

    await close_http_client()
    logger.info("svue-gateway stopped")


def create_app() -> FastAPI:
    """Build the gateway application.

    Returns:
        FastAPI app with logging configured, error handlers, middleware and
        routers installed.
    """
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="svue-gateway API",
        description="Stateless REST gateway for StudentVue",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # A 307 to the slashed path would drop the Authorization header
        redirect_slashes=False,
    )

    register_exception_handlers(app)

    # Starlette runs the last-added middleware first: CORS, then GZip, then auth
    app.add_middleware(AuthMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=settings.api.gzip_minimum_size)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
        expose_headers=settings.cors.expose_headers,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
