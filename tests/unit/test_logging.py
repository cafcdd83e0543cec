# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for logging configuration."""

import logging

from svue_gateway.core.config import get_settings
from svue_gateway.utils.logging import HANDLER_NAME, redact_secrets, setup_logging


def test_redact_secrets() -> None:
    """Test that credential keys are masked and others kept."""
    event = {"event": "call", "password": "hunter2", "Cookie": "A=1", "method": "Gradebook"}

    redacted = redact_secrets(None, "info", event)

    assert redacted == {"event": "call", "password": "***", "Cookie": "***", "method": "Gradebook"}


def test_setup_logging_sets_level() -> None:
    """Test that the package logger follows LOG_LEVEL and httpx is quieted."""
    setup_logging(get_settings())

    assert logging.getLogger("svue_gateway").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_logging_is_idempotent() -> None:
    """Test that repeated setup keeps a single gateway handler."""
    setup_logging(get_settings())
    setup_logging(get_settings())

    names = [handler.get_name() for handler in logging.getLogger().handlers]

    assert names.count(HANDLER_NAME) == 1
