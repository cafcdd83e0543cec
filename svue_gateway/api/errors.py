# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP error mapping for gateway and token errors.

Every error leaves the API as ``{"detail": "<message>"}`` with the status
chosen here. The first matching class in ERROR_STATUS wins, so subclasses
are listed before their bases.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from svue_gateway.domains.session.codec import (
    CipherError,
    CryptoError,
    InvalidKeyError,
    NoKeyError,
    TokenAuthenticationError,
    TokenPayloadError,
)
from svue_gateway.services.studentvue.exceptions import (
    AccessKeyError,
    EmptyCredentialsError,
    ExpiredTokenError,
    GatewayError,
    GradebookError,
    InvalidCredentialsError,
    MaintenanceError,
    PayloadError,
    ResponseParseError,
    StudentVueReportedError,
    UnknownUpstreamError,
    UpstreamConnectionError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: tuple[tuple[type[Exception], int], ...] = (
    (EmptyCredentialsError, status.HTTP_400_BAD_REQUEST),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (ExpiredTokenError, status.HTTP_401_UNAUTHORIZED),
    (StudentVueReportedError, status.HTTP_400_BAD_REQUEST),
    (MaintenanceError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (UpstreamConnectionError, status.HTTP_502_BAD_GATEWAY),
    (ResponseParseError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (UnknownUpstreamError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (AccessKeyError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (GradebookError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (PayloadError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (CipherError, status.HTTP_401_UNAUTHORIZED),
    (TokenAuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (TokenPayloadError, status.HTTP_401_UNAUTHORIZED),
    (NoKeyError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InvalidKeyError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: Exception) -> int:
    """Get the HTTP status for a gateway or token error.

    Args:
        exc: The raised exception.

    Returns:
        Mapped status code, 500 for anything unlisted.
    """
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: GatewayError | CryptoError) -> JSONResponse:
    """Render an error as the API's JSON error body."""
    status_code = status_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed: %s: %s", type(exc).__name__, exc.message)
    else:
        logger.info("Request rejected: %s", type(exc).__name__)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


async def gateway_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler for GatewayError and CryptoError."""
    return error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the error handlers on an application."""
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(CryptoError, gateway_error_handler)
