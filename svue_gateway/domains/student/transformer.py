# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transformation of the ``StudentInfo`` payload.

The same payload carries the demographics and the student photo, so one
upstream call serves both ``/student`` and ``/photo``.
"""

import xml.etree.ElementTree as ET

from svue_gateway.domains.student.schemas import (
    Doctor,
    EmergencyContact,
    StudentInfo,
    StudentProfile,
)
from svue_gateway.services.studentvue.payload import (
    child_text,
    decode_base64_child,
    find_children,
    require_attr,
    require_child,
)

CONTACT_PHONE_ATTRS = ("MobilePhone", "HomePhone", "WorkPhone", "OtherPhone")


def _parse_contact(element: ET.Element) -> EmergencyContact:
    numbers = [require_attr(element, attr) for attr in CONTACT_PHONE_ATTRS]
    return EmergencyContact(
        name=require_attr(element, "Name"),
        relation=require_attr(element, "Relationship"),
        phone_numbers=[number for number in numbers if number],
    )


def _parse_doctor(element: ET.Element, workplace_attr: str) -> Doctor:
    return Doctor(
        name=require_attr(element, "Name"),
        workplace=require_attr(element, workplace_attr),
        phone_number=require_attr(element, "Phone"),
    )


def parse_student_info(root: ET.Element) -> StudentInfo:
    """Read student demographics from the payload.

    Args:
        root: Root ``StudentInfo`` element.

    Returns:
        The student info.

    Raises:
        MissingFieldError: If a required element or attribute is absent.
    """
    contacts = find_children(require_child(root, "EmergencyContacts"), "EmergencyContact")

    return StudentInfo(
        name=child_text(root, "FormattedName"),
        id=child_text(root, "PermID"),
        gender=child_text(root, "Gender"),
        grade=child_text(root, "Grade"),
        address=child_text(root, "Address").replace("<br>", "\n"),
        birth_date=child_text(root, "BirthDate"),
        email=child_text(root, "EMail"),
        phone_number=child_text(root, "Phone"),
        emergency_contacts=[_parse_contact(contact) for contact in contacts],
        physician=_parse_doctor(require_child(root, "Physician"), "Hospital"),
        dentist=_parse_doctor(require_child(root, "Dentist"), "Office"),
        school=child_text(root, "CurrentSchool"),
    )


def parse_student_photo(root: ET.Element) -> bytes:
    """Decode the base64 ``Photo`` element.

    Raises:
        MissingFieldError: If the element is absent.
        ResponseParseError: If its text is not valid base64.
    """
    return decode_base64_child(root, "Photo")


def parse_student_profile(root: ET.Element) -> StudentProfile:
    """Read both the demographics and the photo from one payload."""
    return StudentProfile(info=parse_student_info(root), photo=parse_student_photo(root))
