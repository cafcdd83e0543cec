# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transformation of the document list and attached document payloads."""

import xml.etree.ElementTree as ET

from svue_gateway.domains.documents.schemas import Document, DocumentContent
from svue_gateway.services.studentvue.payload import (
    decode_base64_child,
    find_children,
    require_attr,
    require_child,
)


def parse_document_list(root: ET.Element) -> list[Document]:
    """Read the ``GetStudentDocumentInitialData`` payload.

    Args:
        root: Root ``StudentDocuments`` element.

    Returns:
        Documents in upstream order.

    Raises:
        MissingFieldError: If a required element or attribute is absent.
    """
    datas = require_child(root, "StudentDocumentDatas")
    return [
        Document(
            name=require_attr(data, "DocumentComment"),
            file_name=require_attr(data, "DocumentFileName"),
            date=require_attr(data, "DocumentDate"),
            gu=require_attr(data, "DocumentGU"),
        )
        for data in find_children(datas, "StudentDocumentData")
    ]


def parse_document(root: ET.Element) -> DocumentContent:
    """Read the ``GetContentOfAttachedDoc`` payload.

    Args:
        root: Root ``StudentAttachedDocumentData`` element.

    Returns:
        File name and decoded content.

    Raises:
        MissingFieldError: If a required element or attribute is absent.
        ResponseParseError: If the content is not valid base64.
    """
    data = require_child(require_child(root, "DocumentDatas"), "DocumentData")
    return DocumentContent(
        file_name=require_attr(data, "FileName"),
        file_data=decode_base64_child(data, "Base64Code"),
    )
