# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SOAP envelope protocol for the StudentVue PXP web service.

Every StudentVue call is a ``ProcessWebServiceRequest`` wrapped in a SOAP 1.1
envelope. The method-specific parameters travel as an XML fragment inside
the ``paramStr`` element, escaped as text, and the response carries its
payload the same way inside ``ProcessWebServiceRequestResult``.

Request shape::

    <soap:Envelope xmlns:xsi=... xmlns:xsd=... xmlns:soap=...>
      <soap:Body>
        <ProcessWebServiceRequest xmlns="http://edupoint.com/webservices/">
          <userID>...</userID>
          <password>...</password>
          <skipLoginLog>1</skipLoginLog>
          <parent>0</parent>
          <webServiceHandleName>PXPWebServices</webServiceHandleName>
          <methodName>Gradebook</methodName>
          <paramStr>&lt;Parms&gt;&lt;ChildIntID&gt;0&lt;/ChildIntID&gt;...&lt;/Parms&gt;</paramStr>
        </ProcessWebServiceRequest>
      </soap:Body>
    </soap:Envelope>

StudentVue's declared and actual ``soap`` prefixes disagree, so responses
have every literal ``soap:`` removed before parsing.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from svue_gateway.domains.session.record import SessionRecord
from svue_gateway.services.studentvue.exceptions import ResponseParseError
from svue_gateway.services.studentvue.payload import find_child, local_name, parse_payload

SOAP_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"
EDUPOINT_NAMESPACE = "http://edupoint.com/webservices/"

WEB_SERVICE_HANDLE_NAME = "PXPWebServices"
ERROR_MARKER = "ERROR_MESSAGE="
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

RESULT_PATH = ("Body", "ProcessWebServiceRequestResponse", "ProcessWebServiceRequestResult")


def build_param_str(params: str = "") -> str:
    """Wrap method parameters in the ``Parms`` document StudentVue expects.

    Args:
        params: Method-specific XML fragment, inserted verbatim.

    Returns:
        The paramStr document.
    """
    return f"<Parms><ChildIntID>0</ChildIntID>{params}</Parms>"


@dataclass
class ProcessWebServiceRequest:
    """Body of a StudentVue SOAP request.

    Attributes:
        method_name: PXP method to invoke (e.g. ``Gradebook``).
        param_str: Complete ``Parms`` document.
        user_id: StudentVue user ID; omitted from the envelope when empty.
        password: StudentVue password; omitted from the envelope when empty.
    """

    method_name: str
    param_str: str
    user_id: str = ""
    password: str = ""
    skip_login_log: str = "1"
    parent: str = "0"
    web_service_handle_name: str = WEB_SERVICE_HANDLE_NAME
    xmlns: str = EDUPOINT_NAMESPACE

    @classmethod
    def for_session(
        cls,
        method_name: str,
        params: str,
        session: SessionRecord,
    ) -> "ProcessWebServiceRequest":
        """Build a request using the credentials of a session record.

        Args:
            method_name: PXP method to invoke.
            params: Method-specific XML fragment.
            session: Session supplying the credentials.

        Returns:
            Request body ready for serialization.
        """
        return cls(
            method_name=method_name,
            param_str=build_param_str(params),
            user_id=session.username,
            password=session.password,
        )


def build_request_envelope(request: ProcessWebServiceRequest) -> str:
    """Serialize a request body into a complete SOAP envelope.

    Args:
        request: The request body.

    Returns:
        Envelope text including the XML declaration.
    """
    envelope = ET.Element(
        "soap:Envelope",
        {
            "xmlns:xsi": XSI_NAMESPACE,
            "xmlns:xsd": XSD_NAMESPACE,
            "xmlns:soap": SOAP_NAMESPACE,
        },
    )
    body = ET.SubElement(envelope, "soap:Body")
    call = ET.SubElement(body, "ProcessWebServiceRequest", {"xmlns": request.xmlns})

    fields = [
        ("userID", request.user_id, True),
        ("password", request.password, True),
        ("skipLoginLog", request.skip_login_log, False),
        ("parent", request.parent, False),
        ("webServiceHandleName", request.web_service_handle_name, False),
        ("methodName", request.method_name, False),
        ("paramStr", request.param_str, False),
    ]
    for tag, value, omit_if_empty in fields:
        if omit_if_empty and not value:
            continue
        ET.SubElement(call, tag).text = value

    return f"{XML_DECLARATION}\n{ET.tostring(envelope, encoding='unicode')}\n"


def strip_soap_prefix(text: str) -> str:
    """Remove every literal ``soap:`` so mismatched prefixes still parse."""
    return text.replace("soap:", "")


def is_error_response(text: str) -> bool:
    """Check a raw response for StudentVue's RT_ERROR marker.

    StudentVue reports application errors inside a normal 200 response;
    the only reliable signal is this attribute name in the body text.
    """
    return ERROR_MARKER in text


def parse_response_envelope(text: str) -> str:
    """Extract the inner result string from a raw SOAP response.

    Args:
        text: Raw response body as received.

    Returns:
        Text of ``ProcessWebServiceRequestResult`` (itself an XML document).

    Raises:
        ResponseParseError: If the envelope is malformed or incomplete.
    """
    try:
        root = ET.fromstring(strip_soap_prefix(text))
    except ET.ParseError as e:
        raise ResponseParseError(e) from e

    if local_name(root.tag) != "Envelope":
        raise ResponseParseError(f"unexpected root element `{local_name(root.tag)}`")

    node = root
    for name in RESULT_PATH:
        node = find_child(node, name)
        if node is None:
            raise ResponseParseError(f"missing field `{name}`")

    return node.text or ""


def parse_error_envelope(result: str) -> str:
    """Read the message of an ``RT_ERROR`` result document.

    Args:
        result: Inner result string of an error response.

    Returns:
        The ``ERROR_MESSAGE`` attribute value.

    Raises:
        ResponseParseError: If the document is malformed or has no message.
    """
    root = parse_payload(result)
    message = root.get("ERROR_MESSAGE")
    if message is None:
        raise ResponseParseError("missing field `@ERROR_MESSAGE`")
    return message
