# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Every v1 endpoint needs a StudentVue session from the Authorization header
and may answer with a refreshed token on Set-Token.

Modules:
    grades: Gradebook endpoint.
    documents: Document list and download endpoints.
    student: Student info and photo endpoints.
    school: School info endpoint.
"""

from fastapi import APIRouter

from svue_gateway.api.v1 import documents, grades, school, student

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(grades.router, tags=["Grades"])
router.include_router(documents.router, tags=["Documents"])
router.include_router(student.router, tags=["Student"])
router.include_router(school.router, tags=["School"])

__all__ = ["router"]
