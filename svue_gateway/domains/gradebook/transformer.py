# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook payload transformation.

Turns the XML document returned by the ``Gradebook`` method into a
GradebookResponse. StudentVue is inconsistent about how it formats numbers,
so some fields have tolerated fallbacks:

- assignment points earned: ``ScoreCalValue``, else NaN
- assignment points possible, first that parses wins:
    1. ``ScoreMaxValue``
    2. the part of ``Points`` after ``/`` ("45 / 50")
    3. ``Points`` with "Points Possible" removed ("50 Points Possible")
  and an assignment for which none parses is left out

Every other number must parse or the whole transformation fails.
"""

import logging
import math
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable

from svue_gateway.domains.gradebook.schemas import (
    Assignment,
    Category,
    ClassGrade,
    GradebookResponse,
    ReportingPeriod,
)
from svue_gateway.services.studentvue.exceptions import MissingFieldError, NumberParseError
from svue_gateway.services.studentvue.payload import (
    find_child,
    find_children,
    require_attr,
    require_child,
)

logger = logging.getLogger(__name__)

TOTAL_CATEGORY = "TOTAL"
NO_GRADE = "N/A"

LETTER_THRESHOLDS = (
    (89.5, "A"),
    (79.5, "B"),
    (69.5, "C"),
    (59.5, "D"),
)

# Decimal or exponent form, or inf/infinity/nan; no padding or "_" separators
STRICT_FLOAT = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)

XML_ENTITIES = (
    ("&apos;", "'"),
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def letter_grade_for(grade: float) -> str:
    """Map a numeric grade to a letter.

    Args:
        grade: Percentage grade.

    Returns:
        A to D by threshold, E for any other finite grade, N/A otherwise.
    """
    for threshold, letter in LETTER_THRESHOLDS:
        if grade >= threshold:
            return letter
    if math.isfinite(grade):
        return "E"
    return NO_GRADE


def unescape_xml(text: str) -> str:
    """Undo entity escaping that StudentVue applies twice to some names."""
    for entity, char in XML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _try_float(text: str | None) -> float | None:
    if text is None or STRICT_FLOAT.fullmatch(text) is None:
        return None
    return float(text)


def _parse_float(field: str, text: str) -> float:
    value = _try_float(text)
    if value is None:
        raise NumberParseError(field, text)
    return value


def parse_points_earned(element: ET.Element) -> float:
    """Read assignment points earned, NaN when missing or unparseable."""
    raw = element.get("ScoreCalValue")
    value = _try_float(raw.replace(",", "") if raw is not None else None)
    return math.nan if value is None else value


def _from_score_max(element: ET.Element) -> float | None:
    raw = element.get("ScoreMaxValue")
    if raw is None:
        return None
    return _try_float(raw.replace(",", ""))


def _from_points_fraction(element: ET.Element) -> float | None:
    _, sep, possible = element.get("Points", "").partition("/")
    if not sep:
        return None
    return _try_float(possible.strip().replace(",", ""))


def _from_points_possible_phrase(element: ET.Element) -> float | None:
    points = element.get("Points", "")
    return _try_float(points.replace("Points Possible", "").replace(",", "").strip())


POINTS_POSSIBLE_ATTEMPTS: tuple[Callable[[ET.Element], float | None], ...] = (
    _from_score_max,
    _from_points_fraction,
    _from_points_possible_phrase,
)


def parse_points_possible(element: ET.Element) -> float | None:
    """Read assignment points possible through the fallback chain.

    Args:
        element: An ``Assignment`` element.

    Returns:
        Result of the first attempt that parses, or None if none does.
    """
    for attempt in POINTS_POSSIBLE_ATTEMPTS:
        value = attempt(element)
        if value is not None:
            return value
    return None


def _parse_reporting_periods(root: ET.Element) -> list[ReportingPeriod]:
    periods = require_child(root, "ReportingPeriods")
    return [
        ReportingPeriod(
            name=require_attr(period, "GradePeriod"),
            start_date=require_attr(period, "StartDate"),
            end_date=require_attr(period, "EndDate"),
        )
        for period in find_children(periods, "ReportPeriod")
    ]


def _selected_period_index(root: ET.Element, periods: list[ReportingPeriod]) -> int:
    selected = require_attr(require_child(root, "ReportingPeriod"), "GradePeriod")
    for index, period in enumerate(periods):
        if period.name == selected:
            return index
    raise MissingFieldError("gp_idx")


def _parse_categories(mark: ET.Element) -> dict[str, Category]:
    categories: dict[str, Category] = {}
    summary = require_child(mark, "GradeCalculationSummary")

    for calc in find_children(summary, "AssignmentGradeCalc"):
        name = require_attr(calc, "Type")
        if name == TOTAL_CATEGORY:
            continue

        weight = require_attr(calc, "Weight").strip("%")
        points = require_attr(calc, "Points").replace(",", "")
        possible = require_attr(calc, "PointsPossible").replace(",", "")

        categories[name] = Category(
            weight=_parse_float("Weight", weight) / 100.0,
            points_earned=_parse_float("Points", points),
            points_possible=_parse_float("PointsPossible", possible),
        )

    return categories


def _parse_assignments(mark: ET.Element) -> list[Assignment]:
    assignments = []

    for element in find_children(require_child(mark, "Assignments"), "Assignment"):
        name = require_attr(element, "Measure")
        kind = require_attr(element, "Type")
        require_attr(element, "Points")

        points_possible = parse_points_possible(element)
        if points_possible is None:
            logger.debug("Dropping assignment without points possible")
            continue

        assignments.append(
            Assignment(
                name=unescape_xml(name),
                kind=kind,
                points_earned=parse_points_earned(element),
                points_possible=points_possible,
                notes=element.get("Notes", ""),
            )
        )

    return assignments


def _parse_course(course: ET.Element) -> ClassGrade:
    name = require_attr(course, "Title")
    teacher = require_attr(course, "Staff")
    category = require_attr(course, "ImageType")

    mark = find_child(require_child(course, "Marks"), "Mark")
    if mark is None:
        return ClassGrade.placeholder(name, teacher, category)

    grade = _parse_float("CalculatedScoreRaw", require_attr(mark, "CalculatedScoreRaw"))
    letter_grade = require_attr(mark, "CalculatedScoreString")
    # Numeric score strings are replaced by our own letter
    if any(ch.isnumeric() for ch in letter_grade):
        letter_grade = letter_grade_for(grade)

    return ClassGrade(
        name=name,
        teacher=teacher,
        category=category,
        grade=grade,
        letter_grade=letter_grade,
        categories=_parse_categories(mark),
        assignments=_parse_assignments(mark),
    )


def build_gradebook(root: ET.Element) -> GradebookResponse:
    """Transform a ``Gradebook`` payload into the response model.

    Args:
        root: Root element of the parsed payload.

    Returns:
        The gradebook with the selected period's index.

    Raises:
        MissingFieldError: If a required element or attribute is absent,
            or the selected period is not among the listed periods.
        NumberParseError: If a number outside the tolerated fallbacks
            fails to parse.
    """
    periods = _parse_reporting_periods(root)
    selected = _selected_period_index(root, periods)
    courses = find_children(require_child(root, "Courses"), "Course")

    return GradebookResponse(
        classes=[_parse_course(course) for course in courses],
        report_period=selected,
        reporting_periods=periods,
    )
