# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student document API endpoints.

- GET /documents - List the student's documents
- GET /document?gu=<id> - Download one document

PDFs are served inline so browsers can preview them; anything else is
served as an octet-stream attachment.

Example:
    GET /api/v1/document?gu=4F1C0E2A-...
    Authorization: Bearer <token>
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Query, Response

from svue_gateway.api.dependencies import Session, StudentVue
from svue_gateway.domains.documents import Document

logger = logging.getLogger(__name__)

router = APIRouter()


def content_disposition(disposition: str, file_name: str) -> str:
    """Build a Content-Disposition value for a file name.

    Non-ASCII names get an RFC 5987 ``filename*`` next to an ASCII fallback.

    Args:
        disposition: ``inline`` or ``attachment``.
        file_name: Name as reported by StudentVue.

    Returns:
        Header value.
    """
    fallback = file_name.replace("\\", "_").replace('"', "_")
    if fallback.isascii():
        return f'{disposition}; filename="{fallback}"'
    ascii_fallback = fallback.encode("ascii", "replace").decode("ascii")
    return f"{disposition}; filename=\"{ascii_fallback}\"; filename*=UTF-8''{quote(file_name)}"


@router.get("/documents", response_model=list[Document])
async def list_documents(session: Session, client: StudentVue) -> list[Document]:
    """List the documents StudentVue holds for the student."""
    return await client.list_documents(session)


@router.get(
    "/document",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}, "application/octet-stream": {}}},
    },
)
async def get_document(
    session: Session,
    client: StudentVue,
    gu: str = Query(description="Document GUID from the document list"),
) -> Response:
    """Download a document by its GUID."""
    document = await client.get_document(session, gu)

    if document.is_pdf:
        media_type, disposition = "application/pdf", "inline"
    else:
        media_type, disposition = "application/octet-stream", "attachment"

    logger.debug("Serving document: media_type=%s, size=%d", media_type, len(document.file_data))
    return Response(
        content=document.file_data,
        media_type=media_type,
        headers={"Content-Disposition": content_disposition(disposition, document.file_name)},
    )
