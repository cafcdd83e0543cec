# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Inner payload decoding for StudentVue responses.

StudentVue returns its real data as an XML document escaped inside the SOAP
result string. Decoding that document is a separate stage from decoding the
envelope: the envelope shape never changes, while each method has its own
payload shape. The helpers here are shared by every payload transformer and
match element names on their local part, ignoring namespaces.
"""

import base64
import binascii
import xml.etree.ElementTree as ET

from svue_gateway.services.studentvue.exceptions import MissingFieldError, ResponseParseError


def parse_payload(text: str) -> ET.Element:
    """Parse an inner payload document.

    Args:
        text: XML text taken from the SOAP result string.

    Returns:
        Root element of the payload.

    Raises:
        ResponseParseError: If the text is not well-formed XML.
    """
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise ResponseParseError(e) from e


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def find_child(element: ET.Element, name: str) -> ET.Element | None:
    """Return the first direct child with the given local name, if any."""
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def find_children(element: ET.Element, name: str) -> list[ET.Element]:
    """Return all direct children with the given local name, in order."""
    return [child for child in element if local_name(child.tag) == name]


def require_child(element: ET.Element, name: str) -> ET.Element:
    """Return the first direct child with the given local name.

    Raises:
        MissingFieldError: If there is no such child.
    """
    child = find_child(element, name)
    if child is None:
        raise MissingFieldError(name)
    return child


def require_attr(element: ET.Element, name: str) -> str:
    """Return an attribute value.

    Raises:
        MissingFieldError: If the attribute is absent.
    """
    value = element.get(name)
    if value is None:
        raise MissingFieldError(f"@{name}")
    return value


def child_text(element: ET.Element, name: str) -> str:
    """Return the text of a required child element, empty if it has none.

    Raises:
        MissingFieldError: If there is no such child.
    """
    return require_child(element, name).text or ""


def decode_base64_child(element: ET.Element, name: str) -> bytes:
    """Decode the base64 text of a required child element.

    Raises:
        MissingFieldError: If there is no such child.
        ResponseParseError: If the text is not valid base64.
    """
    text = "".join(child_text(element, name).split())
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ResponseParseError(e) from e
