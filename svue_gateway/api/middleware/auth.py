# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session token authentication middleware.

This middleware turns the Authorization header into a SessionRecord,
stores it on request.state, and after a successful response re-issues the
session as a fresh token when upstream changed it.

Accepted header forms:
    Authorization: Basic base64(username:password)
    Authorization: Bearer base64(nonce || ciphertext || tag)

Example:
    # First contact
    GET /api/v1/grades
    Authorization: Basic dXNlcjpwYXNz

    # Response carries the session to reuse
    Set-Token: 3q2+7w...
"""

import base64
import binascii
import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from svue_gateway.api.errors import error_response
from svue_gateway.core.config import get_settings
from svue_gateway.domains.session.codec import CryptoError, TokenCodec, get_token_codec
from svue_gateway.domains.session.record import SessionRecord
from svue_gateway.services.studentvue.exceptions import (
    EmptyCredentialsError,
    ExpiredTokenError,
    GatewayError,
    InvalidCredentialsError,
)
from svue_gateway.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

SET_TOKEN_HEADER = "Set-Token"

# Paths that carry a StudentVue session
PROTECTED_PATH_PREFIXES = ("/api/v1/",)


class SessionAuthenticator:
    """Builds session records from Authorization header values.

    Attributes:
        district_url: District host given to sessions created from Basic
            credentials.
        lifetime_hours: Lifetime of sessions created from Basic credentials.
    """

    def __init__(
        self,
        district_url: str,
        lifetime_hours: int = 24,
        codec_factory: Callable[[], TokenCodec] = get_token_codec,
    ) -> None:
        """Initialize the authenticator.

        Args:
            district_url: District host for new sessions.
            lifetime_hours: Hours until a new session expires.
            codec_factory: Returns the token codec; called per Bearer
                token so a missing key surfaces as a request error.
        """
        self.district_url = district_url
        self.lifetime_hours = lifetime_hours
        self._codec_factory = codec_factory

    def authenticate(self, authorization: str | None) -> SessionRecord:
        """Resolve an Authorization header to a session record.

        Args:
            authorization: Raw header value, None when absent.

        Returns:
            A trusted session record with non-empty credentials.

        Raises:
            EmptyCredentialsError: If the header is missing or a credential
                is empty.
            InvalidCredentialsError: If the header is malformed.
            ExpiredTokenError: If a Bearer token has expired.
            CipherError: If a Bearer token is truncated or not UTF-8.
            TokenAuthenticationError: If a Bearer token was tampered with.
            TokenPayloadError: If a Bearer token holds no session record.
            NoKeyError: If the token key is not configured.
        """
        if authorization is None:
            raise EmptyCredentialsError()

        scheme, sep, contents = authorization.partition(" ")
        if not sep:
            raise InvalidCredentialsError()

        scheme = scheme.lower()
        if scheme == "basic":
            session = self._from_basic(contents)
        elif scheme == "bearer":
            session = self._from_bearer(contents)
        else:
            raise InvalidCredentialsError()

        if session.is_empty:
            raise EmptyCredentialsError()

        return session

    def _from_basic(self, contents: str) -> SessionRecord:
        try:
            decoded = _b64decode(contents).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidCredentialsError() from e

        username, sep, password = decoded.partition(":")
        if not sep:
            raise InvalidCredentialsError()

        return SessionRecord.from_credentials(
            username,
            password,
            district_url=self.district_url,
            lifetime_hours=self.lifetime_hours,
        )

    def _from_bearer(self, contents: str) -> SessionRecord:
        session = self._codec_factory().decode(_b64decode(contents))
        if session.is_expired():
            raise ExpiredTokenError()
        return session


def _b64decode(contents: str) -> bytes:
    try:
        return base64.b64decode(contents.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidCredentialsError() from e


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware for session token authentication.

    For protected paths, resolves the Authorization header and populates
    request.state.session, or request.state.auth_error when that fails.
    The error is raised by the require_session dependency so that unknown
    routes still answer 404.

    After a 2xx response, if the session record differs from its state at
    the start of the request, the record is encrypted into a new token and
    returned on the Set-Token header.

    Attributes:
        _authenticator: Resolves headers to session records.
    """

    def __init__(self, app: ASGIApp, authenticator: SessionAuthenticator | None = None) -> None:
        """Initialize the auth middleware.

        Args:
            app: ASGI application.
            authenticator: Header resolver, built from settings if omitted.
        """
        super().__init__(app)
        if authenticator is None:
            settings = get_settings()
            authenticator = SessionAuthenticator(
                district_url=settings.studentvue.district_url,
                lifetime_hours=settings.token.lifetime_hours,
            )
        self._authenticator = authenticator

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Authenticate the request and re-issue a changed session.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler.

        Returns:
            HTTP response, with Set-Token when the session changed.
        """
        request.state.session = None
        request.state.auth_error = None
        clear_context()

        if not self._is_protected_path(request.url.path):
            return await call_next(request)

        try:
            session = self._authenticator.authenticate(request.headers.get("Authorization"))
        except (GatewayError, CryptoError) as e:
            logger.debug("Authentication failed: %s", type(e).__name__)
            request.state.auth_error = e
            return await call_next(request)

        snapshot = session.model_copy()
        request.state.session = session
        bind_context(district=session.district_url)

        response = await call_next(request)

        if 200 <= response.status_code < 300 and session != snapshot:
            try:
                response.headers[SET_TOKEN_HEADER] = get_token_codec().to_token(session)
            except CryptoError as e:
                return error_response(e)
            logger.debug("Issued refreshed session token")

        return response

    def _is_protected_path(self, path: str) -> bool:
        """Check if path needs a session.

        Args:
            path: Request path.

        Returns:
            True if path is protected.
        """
        return path.startswith(PROTECTED_PATH_PREFIXES)


def get_session_state(request: Request) -> SessionRecord | None:
    """Get the session resolved by AuthMiddleware, if any."""
    return getattr(request.state, "session", None)
