# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student domain: demographics, contacts and photo."""

from svue_gateway.domains.student.schemas import (
    Doctor,
    EmergencyContact,
    StudentInfo,
    StudentProfile,
)
from svue_gateway.domains.student.transformer import (
    parse_student_info,
    parse_student_photo,
    parse_student_profile,
)

__all__ = [
    "Doctor",
    "EmergencyContact",
    "StudentInfo",
    "StudentProfile",
    "parse_student_info",
    "parse_student_photo",
    "parse_student_profile",
]
