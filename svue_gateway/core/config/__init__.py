# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Environment-driven configuration for svue-gateway.

Example:
    >>> from svue_gateway.core.config import get_settings
    >>> get_settings().studentvue.district_url
    'md-mcps-psv.edupoint.com'
"""

from svue_gateway.core.config.settings import (
    APISettings,
    CORSSettings,
    Settings,
    StudentVueSettings,
    TokenSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "TokenSettings",
    "StudentVueSettings",
    "CORSSettings",
    "APISettings",
]
