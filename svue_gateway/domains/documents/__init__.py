# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Documents domain: the student's document list and downloads."""

from svue_gateway.domains.documents.schemas import Document, DocumentContent
from svue_gateway.domains.documents.transformer import parse_document, parse_document_list

__all__ = ["Document", "DocumentContent", "parse_document", "parse_document_list"]
