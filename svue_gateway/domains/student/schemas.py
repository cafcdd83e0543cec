# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response schemas for the student domain.

- StudentInfo: Demographics, contacts and doctors of the student
- EmergencyContact: One emergency contact with its non-empty numbers
- Doctor: Physician or dentist
- StudentProfile: StudentInfo together with the photo bytes
"""

from pydantic import BaseModel, Field


class EmergencyContact(BaseModel):
    """An emergency contact."""

    name: str
    relation: str
    phone_numbers: list[str] = Field(
        default_factory=list,
        description="Mobile, home, work and other numbers, empty ones left out",
    )


class Doctor(BaseModel):
    """A physician or dentist on file."""

    name: str
    workplace: str = Field(description="Hospital for a physician, office for a dentist")
    phone_number: str


class StudentInfo(BaseModel):
    """Student demographics as listed by StudentVue."""

    name: str
    id: str = Field(description="Permanent student ID")
    gender: str
    grade: str
    address: str = Field(description="Postal address, one line per row")
    birth_date: str
    email: str
    phone_number: str
    emergency_contacts: list[EmergencyContact] = Field(default_factory=list)
    physician: Doctor
    dentist: Doctor
    school: str


class StudentProfile(BaseModel):
    """Both results of one ``StudentInfo`` call."""

    info: StudentInfo
    photo: bytes
