# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for SessionRecord."""

import json

import pytest
from pydantic import ValidationError

from svue_gateway.domains.session import SessionRecord
from svue_gateway.utils.datetime import utc_now_millis


class TestSessionRecord:
    """Tests for SessionRecord serialization and validity."""

    def test_expiry_serialized_as_decimal_string(self, session_record: SessionRecord) -> None:
        """Test that expiry is written as a string."""
        data = json.loads(session_record.to_json())

        assert data["expiry"] == str(session_record.expiry)
        assert set(data) == {"username", "password", "cookie", "expiry", "district_url"}

    def test_from_json_accepts_string_expiry(self) -> None:
        """Test parsing the wire layout."""
        record = SessionRecord.from_json(
            '{"username": "u", "password": "p", "cookie": null, '
            '"expiry": "340282366920938463463374607431768211455", "district_url": "d"}'
        )

        assert record.expiry == 2**128 - 1
        assert record.cookie is None

    @pytest.mark.parametrize("expiry", ['"-1"', '"12abc"', "true", str(2**128)])
    def test_invalid_expiry_rejected(self, expiry: str) -> None:
        """Test that expiries outside [0, 2**128) or non-numeric are rejected."""
        payload = (
            f'{{"username": "u", "password": "p", "cookie": null, '
            f'"expiry": {expiry}, "district_url": "d"}}'
        )

        with pytest.raises(ValidationError):
            SessionRecord.from_json(payload)

    def test_from_credentials_sets_expiry_and_district(self) -> None:
        """Test that a fresh record expires about 24 hours out."""
        before = utc_now_millis()
        record = SessionRecord.from_credentials("u", "p", district_url="district.example")

        assert record.cookie is None
        assert record.district_url == "district.example"
        assert before + 24 * 3600 * 1000 <= record.expiry <= utc_now_millis() + 24 * 3600 * 1000

    def test_is_expired(self, session_record: SessionRecord) -> None:
        """Test expiry against the wall clock."""
        assert not session_record.is_expired()

        session_record.expiry = utc_now_millis() - 1

        assert session_record.is_expired()

    @pytest.mark.parametrize(("username", "password"), [("", "p"), ("u", ""), ("", "")])
    def test_is_empty(self, username: str, password: str) -> None:
        """Test that a missing credential makes the record empty."""
        record = SessionRecord.from_credentials(username, password, district_url="d")

        assert record.is_empty

    def test_cookie_change_breaks_equality(self, session_record: SessionRecord) -> None:
        """Test that a snapshot detects cookie replacement."""
        snapshot = session_record.model_copy()

        session_record.cookie = "a=1; "

        assert session_record != snapshot
