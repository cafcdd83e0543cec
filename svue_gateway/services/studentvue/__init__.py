# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""StudentVue (Edupoint PXP) upstream integration.

Modules:
    envelope: SOAP request/response envelope protocol
    payload: Inner payload parsing helpers shared by the transformers
    version_key: Provider of the edupointkeyversion cookie value
    client: StudentVueClient, the upstream gateway
    exceptions: Gateway error hierarchy

The client is imported from its own module; it depends on the domain
transformers, which in turn use the helpers exported here.
"""

from svue_gateway.services.studentvue.exceptions import (
    AccessKeyError,
    EmptyCredentialsError,
    ExpiredTokenError,
    GatewayError,
    GradebookError,
    InvalidCredentialsError,
    MaintenanceError,
    MissingFieldError,
    NumberParseError,
    PayloadError,
    ResponseParseError,
    StudentVueReportedError,
    UnknownUpstreamError,
    UpstreamConnectionError,
)

__all__ = [
    "GatewayError",
    "EmptyCredentialsError",
    "InvalidCredentialsError",
    "ExpiredTokenError",
    "UpstreamConnectionError",
    "MaintenanceError",
    "ResponseParseError",
    "StudentVueReportedError",
    "UnknownUpstreamError",
    "AccessKeyError",
    "PayloadError",
    "MissingFieldError",
    "NumberParseError",
    "GradebookError",
]
