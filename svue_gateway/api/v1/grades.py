# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook API endpoint.

- GET /grades - Gradebook for the selected or current reporting period

Example:
    GET /api/v1/grades?report_period=2
    Authorization: Bearer <token>
"""

import logging

from fastapi import APIRouter, Query

from svue_gateway.api.dependencies import Session, StudentVue
from svue_gateway.domains.gradebook import GradebookResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/grades", response_model=GradebookResponse)
async def get_grades(
    session: Session,
    client: StudentVue,
    report_period: int | None = Query(
        default=None,
        description="Reporting period index; the district's current period if omitted",
    ),
) -> GradebookResponse:
    """Get the student's classes, categories and assignments.

    Returns:
        GradebookResponse with the index of the returned period.
    """
    return await client.get_gradebook(session, report_period)
