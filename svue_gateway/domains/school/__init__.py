# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School domain: school details and staff directory."""

from svue_gateway.domains.school.schemas import SchoolInfo, StaffMember
from svue_gateway.domains.school.transformer import parse_school_info

__all__ = ["SchoolInfo", "StaffMember", "parse_school_info"]
