# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the StudentVue upstream gateway.

Upstream is simulated with httpx.MockTransport.
"""

from collections.abc import Callable

import httpx
import pytest

from svue_gateway.domains.session import SessionRecord
from svue_gateway.services.studentvue.client import (
    StudentVueClient,
    build_cookie_header,
    merge_set_cookies,
)
from svue_gateway.services.studentvue.exceptions import (
    AccessKeyError,
    GradebookError,
    MaintenanceError,
    ResponseParseError,
    StudentVueReportedError,
    UnknownUpstreamError,
    UpstreamConnectionError,
)
from svue_gateway.services.studentvue.version_key import VersionKeyProvider

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler, static_key: str | None = "v-key") -> StudentVueClient:
    """Build a client whose transport calls handler."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StudentVueClient(http_client, VersionKeyProvider(http_client, static_key=static_key))


class TestCookieHelpers:
    """Tests for cookie header helpers."""

    def test_cookie_header_without_session_cookie(self) -> None:
        """Test the fixed cookies with no upstream session."""
        assert build_cookie_header(None, "k1") == "AppSupportsSession=1; edupointkey=1; edupointkeyversion=k1"

    def test_cookie_header_prefixes_session_cookie(self) -> None:
        """Test that the stored cookie is prepended verbatim."""
        assert build_cookie_header("A=1; ", "k1") == "A=1; AppSupportsSession=1; edupointkey=1; edupointkeyversion=k1"

    def test_merge_keeps_first_token_of_each_value(self) -> None:
        """Test that cookie attributes are dropped."""
        values = [
            "ASP.NET_SessionId=abc; path=/; HttpOnly",
            "PXP_Session=xyz; secure",
        ]

        assert merge_set_cookies(values) == "ASP.NET_SessionId=abc; PXP_Session=xyz; "

    def test_merge_of_nothing_is_empty(self) -> None:
        """Test that no Set-Cookie headers give an empty string."""
        assert merge_set_cookies([]) == ""


class TestStudentVueClientCall:
    """Tests for StudentVueClient.call."""

    @pytest.mark.asyncio
    async def test_request_shape(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test URL, headers and body of the upstream request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=soap_response("<StudentInfo />"))

        session_record.cookie = "A=1; "
        result = await make_client(handler).call("StudentInfo", "", session_record)

        assert result == "<StudentInfo />"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://md-mcps-psv.edupoint.com/Service/PXPCommunication.asmx"
        assert request.headers["Content-Type"] == "text/xml"
        assert request.headers["Cookie"] == "A=1; AppSupportsSession=1; edupointkey=1; edupointkeyversion=v-key"
        assert b"<methodName>StudentInfo</methodName>" in request.content

    @pytest.mark.asyncio
    async def test_405_is_maintenance(self, session_record: SessionRecord) -> None:
        """Test that 405 raises before any parsing."""
        client = make_client(lambda request: httpx.Response(405, text="not xml"))

        with pytest.raises(MaintenanceError) as exc_info:
            await client.call("Gradebook", "", session_record)

        assert exc_info.value.message == "StudentVue is currently undergoing maintenance"

    @pytest.mark.asyncio
    async def test_set_cookie_replaces_session_cookie(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test cookie replacement with first tokens only."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers=[
                    ("Set-Cookie", "ASP.NET_SessionId=new; path=/; HttpOnly"),
                    ("Set-Cookie", "Other=2; secure"),
                ],
                text=soap_response("<X />"),
            )

        session_record.cookie = "ASP.NET_SessionId=old; "
        await make_client(handler).call("X", "", session_record)

        assert session_record.cookie == "ASP.NET_SessionId=new; Other=2; "

    @pytest.mark.asyncio
    async def test_no_set_cookie_keeps_session_cookie(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test that the cookie is untouched without Set-Cookie."""
        session_record.cookie = "A=1; "
        client = make_client(lambda request: httpx.Response(200, text=soap_response("<X />")))

        await client.call("X", "", session_record)

        assert session_record.cookie == "A=1; "

    @pytest.mark.asyncio
    async def test_rt_error_surfaces_message(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test that upstream error messages are passed through verbatim."""
        body = soap_response('<RT_ERROR ERROR_MESSAGE="Invalid user id or password" />')
        client = make_client(lambda request: httpx.Response(200, text=body))

        with pytest.raises(StudentVueReportedError) as exc_info:
            await client.call("Gradebook", "", session_record)

        assert exc_info.value.message == "Invalid user id or password"

    @pytest.mark.asyncio
    async def test_rt_error_with_dll_is_unknown(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test that internal .dll faults are folded into a generic error."""
        body = soap_response('<RT_ERROR ERROR_MESSAGE="Error in Revelation.dll at line 4" />')
        client = make_client(lambda request: httpx.Response(200, text=body))

        with pytest.raises(UnknownUpstreamError) as exc_info:
            await client.call("Gradebook", "", session_record)

        assert exc_info.value.message == "Unknown error (code: x_dll)"

    @pytest.mark.asyncio
    async def test_rt_error_still_updates_cookie(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test that cookies are merged before error classification."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers=[("Set-Cookie", "S=1; path=/")],
                text=soap_response('<RT_ERROR ERROR_MESSAGE="nope" />'),
            )

        with pytest.raises(StudentVueReportedError):
            await make_client(handler).call("X", "", session_record)

        assert session_record.cookie == "S=1; "

    @pytest.mark.asyncio
    async def test_unparseable_envelope(self, session_record: SessionRecord) -> None:
        """Test that garbage responses raise ResponseParseError."""
        client = make_client(lambda request: httpx.Response(200, text="<html>oops"))

        with pytest.raises(ResponseParseError) as exc_info:
            await client.call("X", "", session_record)

        assert exc_info.value.message.startswith("Cannot parse response: ")

    @pytest.mark.asyncio
    async def test_transport_error(self, session_record: SessionRecord) -> None:
        """Test that transport failures map to UpstreamConnectionError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UpstreamConnectionError) as exc_info:
            await make_client(handler).call("X", "", session_record)

        assert exc_info.value.message == "Unable to reach StudentVue"

    @pytest.mark.asyncio
    async def test_missing_version_key(self, session_record: SessionRecord) -> None:
        """Test that version key failure aborts before the SOAP call."""
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/akey":
                return httpx.Response(500)
            raise AssertionError("SOAP endpoint must not be called")

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = StudentVueClient(
            http_client,
            VersionKeyProvider(http_client, key_url="https://keys.example/akey"),
        )

        with pytest.raises(AccessKeyError):
            await client.call("X", "", session_record)


class TestStudentVueClientOperations:
    """Tests for the typed convenience calls."""

    @pytest.mark.asyncio
    async def test_get_gradebook_sends_report_period(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
        gradebook_xml: str,
    ) -> None:
        """Test the ReportPeriod parameter and transformation."""
        seen: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.content)
            return httpx.Response(200, text=soap_response(gradebook_xml))

        gradebook = await make_client(handler).get_gradebook(session_record, report_period=1)

        assert b"&lt;ReportPeriod&gt;1&lt;/ReportPeriod&gt;" in seen[0]
        assert gradebook.report_period == 1
        assert [c.name for c in gradebook.classes] == ["Algebra II", "Homeroom", "Art"]

    @pytest.mark.asyncio
    async def test_get_gradebook_without_period_sends_no_param(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
        gradebook_xml: str,
    ) -> None:
        """Test that the parameter is omitted when no period is given."""
        seen: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.content)
            return httpx.Response(200, text=soap_response(gradebook_xml))

        await make_client(handler).get_gradebook(session_record)

        assert b"ReportPeriod" not in seen[0]

    @pytest.mark.asyncio
    async def test_get_gradebook_wraps_payload_errors(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test that transformation failures become GradebookError."""
        client = make_client(lambda request: httpx.Response(200, text=soap_response("<Gradebook />")))

        with pytest.raises(GradebookError) as exc_info:
            await client.get_gradebook(session_record)

        assert exc_info.value.message == "Unable to load Gradebook, message: Missing field 'ReportingPeriods'"

    @pytest.mark.asyncio
    async def test_get_document_escapes_gu(
        self,
        session_record: SessionRecord,
        soap_response: Callable[[str], str],
    ) -> None:
        """Test the DocumentGU parameter and decoding."""
        seen: list[bytes] = []
        payload = (
            "<StudentAttachedDocumentData><DocumentDatas>"
            '<DocumentData DocumentGU="G" FileName="report.PDF"><Base64Code>JVBERi0=</Base64Code></DocumentData>'
            "</DocumentDatas></StudentAttachedDocumentData>"
        )

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.content)
            return httpx.Response(200, text=soap_response(payload))

        document = await make_client(handler).get_document(session_record, "ABC-123")

        assert b"&lt;DocumentGU&gt;ABC-123&lt;/DocumentGU&gt;" in seen[0]
        assert document.file_name == "report.PDF"
        assert document.file_data == b"%PDF-"
        assert document.is_pdf
