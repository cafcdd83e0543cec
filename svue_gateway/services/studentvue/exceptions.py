# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the StudentVue gateway.

This module defines the exception hierarchy for gateway operations:
- GatewayError: Base exception for all gateway errors
- EmptyCredentialsError / InvalidCredentialsError / ExpiredTokenError:
  problems with the inbound Authorization header
- UpstreamConnectionError: StudentVue could not be reached
- MaintenanceError: StudentVue rejected the call with 405
- ResponseParseError: the SOAP envelope or payload is not parseable
- StudentVueReportedError: StudentVue returned an RT_ERROR envelope
- UnknownUpstreamError: RT_ERROR describing an internal .dll fault
- AccessKeyError: the edupoint version key could not be obtained
- PayloadError: an inner payload lacks expected fields or numbers
- GradebookError: gradebook payload could not be transformed
"""

import base64


def obfuscate(diagnostic: object) -> str:
    """Base64-encode a diagnostic that may echo upstream payload text.

    Parser messages can quote raw XML, which may contain student data.
    Encoding keeps them out of plain-text logs while staying recoverable.

    Args:
        diagnostic: Exception or message to encode.

    Returns:
        Base64 of the diagnostic's string form.
    """
    return base64.b64encode(str(diagnostic).encode("utf-8")).decode("ascii")


class GatewayError(Exception):
    """Base exception for all gateway errors.

    Attributes:
        message: Human-readable error description, safe to return to clients.
        details: Optional dictionary with additional error context.
    """

    default_message = "Gateway error"

    def __init__(self, message: str | None = None, details: dict | None = None):
        """Initialize gateway error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class EmptyCredentialsError(GatewayError):
    """Authorization header missing, or username/password empty."""

    default_message = "Username or password is empty"


class InvalidCredentialsError(GatewayError):
    """Authorization header malformed or its token rejected."""

    default_message = "Invalid credentials provided"


class ExpiredTokenError(GatewayError):
    """Session token decoded fine but its expiry has passed."""

    default_message = "This key has expired"


class UpstreamConnectionError(GatewayError):
    """StudentVue could not be reached at the transport level."""

    default_message = "Unable to reach StudentVue"


class MaintenanceError(GatewayError):
    """StudentVue answered 405, which it does for every method during maintenance."""

    default_message = "StudentVue is currently undergoing maintenance"


class ResponseParseError(GatewayError):
    """A SOAP envelope or inner payload could not be parsed.

    The parser diagnostic is carried base64-encoded in the message.

    Attributes:
        diagnostic: The encoded parser message.
    """

    def __init__(self, diagnostic: object, details: dict | None = None):
        """Initialize parse error.

        Args:
            diagnostic: Underlying parser exception or message.
            details: Optional dictionary with additional error context.
        """
        self.diagnostic = obfuscate(diagnostic)
        super().__init__(f"Cannot parse response: {self.diagnostic}", details)


class StudentVueReportedError(GatewayError):
    """StudentVue returned an RT_ERROR envelope with a meaningful message.

    The upstream message is surfaced verbatim.
    """


class UnknownUpstreamError(GatewayError):
    """RT_ERROR whose message names an internal .dll fault."""

    default_message = "Unknown error (code: x_dll)"


class AccessKeyError(GatewayError):
    """The edupointkeyversion value could not be obtained."""

    default_message = "Unable to create access key"


class PayloadError(GatewayError):
    """An inner payload parsed as XML but does not have the expected shape."""


class MissingFieldError(PayloadError):
    """A required element or attribute is absent from a payload.

    Attributes:
        field: Name of the missing field.
    """

    def __init__(self, field: str, details: dict | None = None):
        self.field = field
        super().__init__(f"Missing field '{field}'", details)


class NumberParseError(PayloadError):
    """A numeric field outside the tolerated fallbacks failed to parse.

    Attributes:
        field: Name of the field.
        value: The offending text.
    """

    def __init__(self, field: str, value: str, details: dict | None = None):
        self.field = field
        self.value = value
        super().__init__("Bad float", {"field": field, **(details or {})})


class GradebookError(GatewayError):
    """Gradebook payload could not be transformed.

    Attributes:
        reason: Message of the underlying payload error.
    """

    def __init__(self, reason: str, details: dict | None = None):
        self.reason = reason
        super().__init__(f"Unable to load Gradebook, message: {reason}", details)
