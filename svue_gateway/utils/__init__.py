# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for svue-gateway.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Millisecond timestamps used by session expiry
"""

from svue_gateway.utils.datetime import (
    is_expired_millis,
    millis_from_now,
    to_millis,
    utc_now,
    utc_now_millis,
)
from svue_gateway.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "utc_now_millis",
    "to_millis",
    "millis_from_now",
    "is_expired_millis",
]
