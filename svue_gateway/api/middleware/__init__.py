# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

Exports:
    AuthMiddleware: Session token authentication and Set-Token issuing.
    SessionAuthenticator: Authorization header to SessionRecord resolver.
"""

from svue_gateway.api.middleware.auth import AuthMiddleware, SessionAuthenticator

__all__ = ["AuthMiddleware", "SessionAuthenticator"]
