# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Liveness endpoint.

The gateway holds no state of its own, so health reports process liveness
and whether the shared upstream client is up; StudentVue itself is not
probed.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from svue_gateway import __version__
from svue_gateway.api.dependencies import is_http_client_ready
from svue_gateway.core.config import get_settings

router = APIRouter()

_started_at = time.monotonic()


class HealthResponse(BaseModel):
    status: str = Field(description="healthy, or degraded while the upstream client is down")
    timestamp: datetime = Field(description="Server time (UTC)")
    version: str = Field(description="Gateway version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Seconds since the module was loaded")
    upstream_client: bool = Field(description="Whether the upstream HTTP client is open")


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report liveness; needs no Authorization header."""
    client_ready = is_http_client_ready()

    return HealthResponse(
        status="healthy" if client_ready else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=get_settings().environment,
        uptime_seconds=int(time.monotonic() - _started_at),
        upstream_client=client_ready,
    )
