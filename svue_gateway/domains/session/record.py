# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session record carried inside the client-held session token.

The record is the complete server-side state of one upstream StudentVue
session: the credentials used for every SOAP call, the most recent upstream
session cookie, an absolute expiry and the district host. Nothing about it
is stored on the server; it lives for the duration of one request and is
re-encrypted into a fresh token whenever it changes.

Serialized layout (the token plaintext)::

    {
        "username": "...",
        "password": "...",
        "cookie": "ASP.NET_SessionId=abc; " | null,
        "expiry": "1735689600000",
        "district_url": "md-mcps-psv.edupoint.com"
    }

``expiry`` is written as a decimal string because it is an unsigned 128-bit
millisecond value and may exceed the precision of a JSON number.
"""

from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from svue_gateway.utils.datetime import is_expired_millis, millis_from_now

MAX_EXPIRY = 2**128


class SessionRecord(BaseModel):
    """Decrypted session token payload.

    Attributes:
        username: StudentVue user ID.
        password: StudentVue password.
        cookie: Upstream session cookie string, replaced wholesale whenever
            the upstream service sends ``Set-Cookie``.
        expiry: Absolute expiry, milliseconds since the Unix epoch.
        district_url: Host of the district StudentVue deployment.
    """

    username: str
    password: str
    cookie: str | None = None
    expiry: int = Field(ge=0, lt=MAX_EXPIRY)
    district_url: str

    @field_validator("expiry", mode="before")
    @classmethod
    def _parse_expiry(cls, value: Any) -> Any:
        """Accept the decimal-string form used on the wire."""
        if isinstance(value, str):
            if not value.isdigit():
                raise ValueError("expiry must be a non-negative decimal integer")
            return int(value)
        if isinstance(value, bool):
            raise ValueError("expiry must be an integer")
        return value

    @field_serializer("expiry")
    def _serialize_expiry(self, expiry: int) -> str:
        return str(expiry)

    @classmethod
    def from_credentials(
        cls,
        username: str,
        password: str,
        district_url: str,
        lifetime_hours: int = 24,
    ) -> "SessionRecord":
        """Create a fresh record for first contact with Basic credentials.

        Args:
            username: StudentVue user ID.
            password: StudentVue password.
            district_url: District StudentVue host.
            lifetime_hours: Hours until the record expires.

        Returns:
            New SessionRecord without an upstream cookie.
        """
        return cls(
            username=username,
            password=password,
            cookie=None,
            expiry=millis_from_now(hours=lifetime_hours),
            district_url=district_url,
        )

    @property
    def is_empty(self) -> bool:
        """Check whether either credential is missing."""
        return not self.username or not self.password

    def is_expired(self) -> bool:
        """Check whether the wall clock has passed the expiry instant."""
        return is_expired_millis(self.expiry)

    def to_json(self) -> str:
        """Serialize to the token plaintext layout."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, payload: str) -> "SessionRecord":
        """Parse the token plaintext layout.

        Raises:
            pydantic.ValidationError: If the payload is not a valid record.
        """
        return cls.model_validate_json(payload)
