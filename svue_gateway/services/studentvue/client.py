# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""StudentVue upstream gateway.

This module performs one SOAP request/response cycle against a district's
PXP communication service and classifies the outcome.

The client handles:
- Envelope construction from the session record's credentials
- The session cookie header, merged with the edupoint version key
- Replacing the session record's cookie with any ``Set-Cookie`` values
- Maintenance (HTTP 405) and RT_ERROR soft-failure detection
- Typed convenience calls returning domain values

The session record is threaded through every call and mutated in place
when upstream rotates its cookie; callers re-issue a token afterwards.

Example:
    client = StudentVueClient(http_client, VersionKeyProvider(http_client, key_url=url))

    gradebook = await client.get_gradebook(session, report_period=2)
    if session != snapshot:
        ...  # cookie changed, send a fresh token
"""

import logging
import time
from xml.sax.saxutils import escape

import httpx

from svue_gateway.core.config.settings import StudentVueSettings
from svue_gateway.domains.documents import (
    Document,
    DocumentContent,
    parse_document,
    parse_document_list,
)
from svue_gateway.domains.gradebook import GradebookResponse, build_gradebook
from svue_gateway.domains.school import SchoolInfo, parse_school_info
from svue_gateway.domains.session.record import SessionRecord
from svue_gateway.domains.student import StudentProfile, parse_student_profile
from svue_gateway.services.studentvue.envelope import (
    ProcessWebServiceRequest,
    build_request_envelope,
    is_error_response,
    parse_error_envelope,
    parse_response_envelope,
)
from svue_gateway.services.studentvue.exceptions import (
    GradebookError,
    MaintenanceError,
    PayloadError,
    StudentVueReportedError,
    UnknownUpstreamError,
    UpstreamConnectionError,
)
from svue_gateway.services.studentvue.payload import parse_payload
from svue_gateway.services.studentvue.version_key import VersionKeyProvider

logger = logging.getLogger(__name__)

INTERNAL_FAULT_MARKER = ".dll"


def build_cookie_header(cookie: str | None, version_key: str) -> str:
    """Build the ``Cookie`` header for an upstream call.

    Args:
        cookie: Current upstream session cookie, ending in a space if set.
        version_key: The edupoint version key.

    Returns:
        Header value with the fixed edupoint cookies appended.
    """
    return f"{cookie or ''}AppSupportsSession=1; edupointkey=1; edupointkeyversion={version_key}"


def merge_set_cookies(values: list[str]) -> str:
    """Collapse ``Set-Cookie`` values into a request cookie string.

    Only the first whitespace-delimited token of each value is kept
    (``name=value;``), so attributes like ``path`` and ``HttpOnly`` drop out.

    Args:
        values: Raw ``Set-Cookie`` header values in arrival order.

    Returns:
        Each token followed by one space, or an empty string.
    """
    cookies = ""
    for value in values:
        tokens = value.split()
        cookies += (tokens[0] if tokens else "") + " "
    return cookies


class StudentVueClient:
    """Async client for the StudentVue PXP web service.

    Attributes:
        endpoint_path: Path of the SOAP endpoint on the district host.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        version_keys: VersionKeyProvider,
        settings: StudentVueSettings | None = None,
    ):
        """Initialize the client.

        Args:
            http_client: Shared HTTP client; owned by the caller.
            version_keys: Source of the edupoint version key.
            settings: Upstream settings, defaults when omitted.
        """
        self._http = http_client
        self._version_keys = version_keys
        self.endpoint_path = (settings or StudentVueSettings()).endpoint_path

    def endpoint_url(self, session: SessionRecord) -> str:
        """Get the SOAP endpoint of the session's district."""
        return f"https://{session.district_url}{self.endpoint_path}"

    async def call(self, method_name: str, params: str, session: SessionRecord) -> str:
        """Invoke a PXP method and return its raw result document.

        Args:
            method_name: PXP method name, e.g. ``Gradebook``.
            params: Method parameter XML fragment, empty for none.
            session: Session supplying credentials and cookie. Its cookie
                is replaced if upstream sends ``Set-Cookie``.

        Returns:
            The inner result XML string.

        Raises:
            AccessKeyError: If the version key is unavailable.
            UpstreamConnectionError: If StudentVue cannot be reached.
            MaintenanceError: If StudentVue answers 405.
            ResponseParseError: If the envelope cannot be parsed.
            UnknownUpstreamError: If StudentVue reports an internal fault.
            StudentVueReportedError: If StudentVue reports any other error.
        """
        request = ProcessWebServiceRequest.for_session(method_name, params, session)
        headers = {
            "Cookie": build_cookie_header(session.cookie, await self._version_keys.get_key()),
            "Content-Type": "text/xml",
        }

        started = time.perf_counter()
        try:
            response = await self._http.post(
                self.endpoint_url(session),
                content=build_request_envelope(request).encode("utf-8"),
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning(
                "StudentVue request failed: method=%s, error=%s",
                method_name,
                type(e).__name__,
            )
            raise UpstreamConnectionError() from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "StudentVue call: method=%s, status=%d, elapsed_ms=%.1f",
            method_name,
            response.status_code,
            elapsed_ms,
        )

        if response.status_code == httpx.codes.METHOD_NOT_ALLOWED:
            raise MaintenanceError()

        cookies = merge_set_cookies(response.headers.get_list("set-cookie"))
        if cookies:
            session.cookie = cookies
            logger.debug("Upstream session cookie replaced: method=%s", method_name)

        text = response.text
        result = parse_response_envelope(text)

        if is_error_response(text):
            message = parse_error_envelope(result)
            if INTERNAL_FAULT_MARKER in message:
                logger.warning("StudentVue internal fault: method=%s", method_name)
                raise UnknownUpstreamError()
            logger.info("StudentVue reported error: method=%s", method_name)
            raise StudentVueReportedError(message)

        return result

    async def get_gradebook(
        self,
        session: SessionRecord,
        report_period: int | None = None,
    ) -> GradebookResponse:
        """Fetch and transform the gradebook.

        Args:
            session: The caller's session.
            report_period: Period index to select; upstream default if None.

        Returns:
            The gradebook.

        Raises:
            GradebookError: If the payload cannot be transformed.
        """
        params = f"<ReportPeriod>{report_period}</ReportPeriod>" if report_period is not None else ""
        result = await self.call("Gradebook", params, session)
        try:
            return build_gradebook(parse_payload(result))
        except PayloadError as e:
            logger.warning("Gradebook transformation failed: %s", e.message)
            raise GradebookError(e.message) from e

    async def get_school_info(self, session: SessionRecord) -> SchoolInfo:
        """Fetch the student's school details and staff directory."""
        result = await self.call("StudentSchoolInfo", "", session)
        return parse_school_info(parse_payload(result))

    async def get_student_info(self, session: SessionRecord) -> StudentProfile:
        """Fetch student demographics together with the photo."""
        result = await self.call("StudentInfo", "", session)
        return parse_student_profile(parse_payload(result))

    async def list_documents(self, session: SessionRecord) -> list[Document]:
        """Fetch the student's document list."""
        result = await self.call("GetStudentDocumentInitialData", "", session)
        return parse_document_list(parse_payload(result))

    async def get_document(self, session: SessionRecord, gu: str) -> DocumentContent:
        """Download one attached document.

        Args:
            session: The caller's session.
            gu: Document GUID from the document list.

        Returns:
            File name and content.
        """
        result = await self.call("GetContentOfAttachedDoc", f"<DocumentGU>{escape(gu)}</DocumentGU>", session)
        return parse_document(parse_payload(result))
