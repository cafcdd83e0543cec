# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook domain.

Transforms the StudentVue ``Gradebook`` payload into classes, categories
and assignments for one reporting period.
"""

from svue_gateway.domains.gradebook.schemas import (
    Assignment,
    Category,
    ClassGrade,
    GradebookResponse,
    ReportingPeriod,
)
from svue_gateway.domains.gradebook.transformer import (
    build_gradebook,
    letter_grade_for,
    parse_points_earned,
    parse_points_possible,
    unescape_xml,
)

__all__ = [
    "Assignment",
    "Category",
    "ClassGrade",
    "GradebookResponse",
    "ReportingPeriod",
    "build_gradebook",
    "letter_grade_for",
    "parse_points_earned",
    "parse_points_possible",
    "unescape_xml",
]
