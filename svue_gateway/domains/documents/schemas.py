# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schemas for the documents domain.

- Document: One entry of the student's document list
- DocumentContent: A downloaded document with its bytes
"""

from pydantic import BaseModel, Field


class Document(BaseModel):
    """A document StudentVue lists for the student."""

    name: str = Field(description="Document comment shown as its title")
    file_name: str
    date: str
    gu: str = Field(description="Document GUID used to download it")


class DocumentContent(BaseModel):
    """A downloaded document. Served as a binary body, never as JSON."""

    file_name: str
    file_data: bytes

    @property
    def is_pdf(self) -> bool:
        """Check the file extension, ignoring case."""
        return self.file_name.lower().endswith(".pdf")
