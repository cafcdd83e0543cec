# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain layer for svue-gateway.

Domains:
    session: Session record and the encrypted token codec.
    gradebook: Gradebook payload transformation.
    documents: Student document listing and download payloads.
    student: Student information and photo payloads.
    school: School information payloads.
"""
