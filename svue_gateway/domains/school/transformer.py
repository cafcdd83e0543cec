# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transformation of the ``StudentSchoolInfo`` payload."""

import xml.etree.ElementTree as ET

from svue_gateway.domains.school.schemas import SchoolInfo, StaffMember
from svue_gateway.services.studentvue.payload import find_children, require_attr, require_child


def parse_school_info(root: ET.Element) -> SchoolInfo:
    """Copy school attributes and the staff directory out of the payload.

    Args:
        root: Root ``StudentSchoolInfoListing`` element.

    Returns:
        The school info.

    Raises:
        MissingFieldError: If a required element or attribute is absent.
    """
    staff = [
        StaffMember(
            name=require_attr(member, "Name"),
            job_title=require_attr(member, "Title"),
            email=require_attr(member, "EMail"),
        )
        for member in find_children(require_child(root, "StaffLists"), "StaffList")
    ]

    return SchoolInfo(
        name=require_attr(root, "School"),
        principal=require_attr(root, "Principal"),
        principal_email=require_attr(root, "PrincipalEmail"),
        address=require_attr(root, "SchoolAddress"),
        city=require_attr(root, "SchoolCity"),
        state=require_attr(root, "SchoolState"),
        zip_code=require_attr(root, "SchoolZip"),
        phone_number=require_attr(root, "Phone"),
        website=require_attr(root, "URL"),
        staff=staff,
    )
