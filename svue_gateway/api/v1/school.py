# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School information API endpoint.

- GET /school - Current school details and staff directory
"""

from fastapi import APIRouter

from svue_gateway.api.dependencies import Session, StudentVue
from svue_gateway.domains.school import SchoolInfo

router = APIRouter()


@router.get("/school", response_model=SchoolInfo)
async def get_school(session: Session, client: StudentVue) -> SchoolInfo:
    """Get the student's school and its staff."""
    return await client.get_school_info(session)
