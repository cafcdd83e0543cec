# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response schemas for the school domain."""

from pydantic import BaseModel, Field


class StaffMember(BaseModel):
    """One entry of the school staff directory."""

    name: str
    job_title: str
    email: str


class SchoolInfo(BaseModel):
    """The student's current school as listed by StudentVue."""

    name: str
    principal: str
    principal_email: str
    address: str
    city: str
    state: str
    zip_code: str
    phone_number: str
    website: str
    staff: list[StaffMember] = Field(default_factory=list)
