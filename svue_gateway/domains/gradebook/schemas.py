# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response schemas for the gradebook domain.

This module defines Pydantic models returned by ``GET /grades``:
- GradebookResponse: All classes for one reporting period
- ReportingPeriod: A named date range the district grades by
- ClassGrade: One course with its grade, categories and assignments
- Category: Weighting of one assignment category
- Assignment: One graded assignment

Points that StudentVue reports without a parseable value are carried as
NaN internally and serialized as JSON ``null``.
"""

import math
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer, model_serializer


def _nan_to_none(value: float) -> float | None:
    return None if math.isnan(value) else value


NullableFloat = Annotated[
    float,
    PlainSerializer(_nan_to_none, return_type=float | None, when_used="json"),
]


class ReportingPeriod(BaseModel):
    """A grading period as listed by StudentVue."""

    name: str = Field(description="Period name, e.g. 'Quarter 1'")
    start_date: str = Field(description="Start date as sent by StudentVue")
    end_date: str = Field(description="End date as sent by StudentVue")


class Category(BaseModel):
    """Weighting and totals of one assignment category."""

    weight: float = Field(description="Weight as a fraction, 0.25 for 25%")
    points_earned: float
    points_possible: float


class Assignment(BaseModel):
    """One graded assignment.

    ``notes`` is omitted from the serialized form when empty.
    """

    name: str
    kind: str = Field(description="Assignment category name")
    points_earned: NullableFloat = Field(description="NaN (null) when not yet scored")
    points_possible: float
    notes: str = ""

    @model_serializer(mode="wrap")
    def _omit_empty_notes(self, handler):
        data = handler(self)
        if not self.notes:
            data.pop("notes", None)
        return data


class ClassGrade(BaseModel):
    """One course in the gradebook."""

    name: str
    teacher: str
    category: str = Field(description="Course image type, used as a subject category")
    grade: NullableFloat
    letter_grade: str
    categories: dict[str, Category] = Field(default_factory=dict)
    assignments: list[Assignment] = Field(default_factory=list)

    @classmethod
    def placeholder(cls, name: str, teacher: str, category: str) -> "ClassGrade":
        """Build the entry for a course StudentVue reports without a mark."""
        return cls(
            name=name,
            teacher=teacher,
            category=category,
            grade=0.0,
            letter_grade="N/A",
        )


class GradebookResponse(BaseModel):
    """Gradebook for the selected reporting period."""

    classes: list[ClassGrade]
    report_period: int = Field(description="Index of the selected period in reporting_periods")
    reporting_periods: list[ReportingPeriod]
