# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get the session resolved by AuthMiddleware
- Get the shared upstream HTTP client
- Get the StudentVue client

Example:
    @router.get("/grades")
    async def get_grades(session: Session, client: StudentVue):
        return await client.get_gradebook(session)
"""

import logging
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Request, status

from svue_gateway.api.middleware.auth import get_session_state
from svue_gateway.core.config import get_settings
from svue_gateway.core.config.settings import Settings
from svue_gateway.domains.session.record import SessionRecord
from svue_gateway.services.studentvue.client import StudentVueClient
from svue_gateway.services.studentvue.exceptions import EmptyCredentialsError
from svue_gateway.services.studentvue.version_key import VersionKeyProvider

logger = logging.getLogger(__name__)

# Shared upstream connection pool
_http_client: httpx.AsyncClient | None = None


async def init_http_client(settings: Settings) -> None:
    """Create the shared HTTP client used for all upstream calls."""
    global _http_client
    # Upstream cookies live in the session token, never in the shared jar
    _http_client = httpx.AsyncClient(
        timeout=settings.studentvue.timeout,
        cookies=CookieJar(policy=DefaultCookiePolicy(allowed_domains=[])),
    )


def is_http_client_ready() -> bool:
    """Check whether the shared HTTP client is open."""
    return _http_client is not None


async def close_http_client() -> None:
    """Close the shared HTTP client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


# =========================================================================
# Session Dependencies
# =========================================================================


def require_session(request: Request) -> SessionRecord:
    """Require the session resolved from the Authorization header.

    Args:
        request: HTTP request.

    Returns:
        The request's SessionRecord. Mutations are seen by AuthMiddleware.

    Raises:
        GatewayError: The authentication error AuthMiddleware recorded.
        CryptoError: The token error AuthMiddleware recorded.
        EmptyCredentialsError: If no session was resolved at all.
    """
    error = getattr(request.state, "auth_error", None)
    if error is not None:
        raise error

    session = get_session_state(request)
    if session is None:
        raise EmptyCredentialsError()
    return session


# =========================================================================
# Service Dependencies
# =========================================================================


def get_http_client() -> httpx.AsyncClient:
    """Get the shared HTTP client.

    Returns:
        The AsyncClient created at application startup.

    Raises:
        HTTPException: If not initialized.
    """
    if _http_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="HTTP client not initialized",
        )
    return _http_client


def get_studentvue_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> StudentVueClient:
    """Get a StudentVue client bound to the shared HTTP client.

    Args:
        http_client: Shared HTTP client.

    Returns:
        StudentVueClient.
    """
    settings = get_settings()
    return StudentVueClient(
        http_client,
        VersionKeyProvider.from_settings(http_client, settings.studentvue),
        settings.studentvue,
    )


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

Session = Annotated[SessionRecord, Depends(require_session)]
StudentVue = Annotated[StudentVueClient, Depends(get_studentvue_client)]
