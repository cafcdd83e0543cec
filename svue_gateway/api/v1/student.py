# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student information API endpoints.

- GET /student - Student demographics, contacts and doctors
- GET /photo - Student photo as a PNG download

Both endpoints make the same upstream call; each returns one half of it.
"""

from fastapi import APIRouter, Response

from svue_gateway.api.dependencies import Session, StudentVue
from svue_gateway.domains.student import StudentInfo

router = APIRouter()

PHOTO_MEDIA_TYPE = "image/png"
PHOTO_DISPOSITION = 'attachment; filename="image.png"'


@router.get("/student", response_model=StudentInfo)
async def get_student(session: Session, client: StudentVue) -> StudentInfo:
    """Get the student's demographics."""
    profile = await client.get_student_info(session)
    return profile.info


@router.get(
    "/photo",
    response_class=Response,
    responses={200: {"content": {PHOTO_MEDIA_TYPE: {}}}},
)
async def get_photo(session: Session, client: StudentVue) -> Response:
    """Get the student's photo."""
    profile = await client.get_student_info(session)
    return Response(
        content=profile.photo,
        media_type=PHOTO_MEDIA_TYPE,
        headers={"Content-Disposition": PHOTO_DISPOSITION},
    )
