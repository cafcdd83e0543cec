# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests

Every test runs with a known token key in ENKEY and with the settings and
codec caches cleared, so tests never see each other's configuration.
"""

import base64
from collections.abc import Callable, Generator
from xml.sax.saxutils import escape

import pytest

from svue_gateway.core.config import clear_settings_cache
from svue_gateway.domains.session import SessionRecord, TokenCodec, clear_token_codec_cache
from svue_gateway.utils.datetime import millis_from_now

TEST_KEY = b"0123456789abcdef"
TEST_KEY_B64 = base64.b64encode(TEST_KEY).decode("ascii")


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[dict[str, str], None, None]:
    """Provide test environment variables.

    Yields:
        Dictionary of environment variables set for the test.
    """
    env = {
        "ENVIRONMENT": "development",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "ENKEY": TEST_KEY_B64,
        "STUDENTVUE_VERSION_KEY": "test-version-key",
    }
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("STUDENTVUE_DISTRICT_URL", raising=False)

    clear_settings_cache()
    clear_token_codec_cache()
    yield env
    clear_settings_cache()
    clear_token_codec_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (in-process app)"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def token_codec() -> TokenCodec:
    """Provide a codec using the test key."""
    return TokenCodec(TEST_KEY)


@pytest.fixture
def session_record() -> SessionRecord:
    """Provide a valid session record without an upstream cookie."""
    return SessionRecord(
        username="123456",
        password="hunter2",
        cookie=None,
        expiry=millis_from_now(hours=1),
        district_url="md-mcps-psv.edupoint.com",
    )


@pytest.fixture
def soap_response() -> Callable[[str], str]:
    """Provide a builder wrapping a result document in a SOAP response."""

    def build(result: str) -> str:
        return (
            '<?xml version="1.0" encoding="utf-8"?>'
            '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/" '
            'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xmlns:xsd="http://www.w3.org/2001/XMLSchema">'
            "<soap:Body>"
            '<ProcessWebServiceRequestResponse xmlns="http://edupoint.com/webservices/">'
            f"<ProcessWebServiceRequestResult>{escape(result)}</ProcessWebServiceRequestResult>"
            "</ProcessWebServiceRequestResponse>"
            "</soap:Body>"
            "</soap:Envelope>"
        )

    return build


@pytest.fixture
def gradebook_xml() -> str:
    """Provide a gradebook payload covering the numeric fallbacks."""
    return """<Gradebook xmlns:xsd="http://www.w3.org/2001/XMLSchema" Type="Traditional">
  <ReportingPeriods>
    <ReportPeriod Index="0" GradePeriod="Quarter 1" StartDate="8/28/2024" EndDate="11/1/2024" />
    <ReportPeriod Index="1" GradePeriod="Quarter 2" StartDate="11/4/2024" EndDate="1/24/2025" />
  </ReportingPeriods>
  <ReportingPeriod GradePeriod="Quarter 2" StartDate="11/4/2024" EndDate="1/24/2025" />
  <Courses>
    <Course Period="1" Title="Algebra II" Staff="J. Smith" ImageType="Math">
      <Marks>
        <Mark MarkName="Q2" CalculatedScoreString="91.2" CalculatedScoreRaw="91.2">
          <StandardViews />
          <GradeCalculationSummary>
            <AssignmentGradeCalc Type="Tests" Weight="25%" Points="1,045.00" PointsPossible="1,100.00" />
            <AssignmentGradeCalc Type="TOTAL" Weight="100%" Points="1,500.00" PointsPossible="1,600.00" />
          </GradeCalculationSummary>
          <Assignments>
            <Assignment Measure="Unit 1 Test" Type="Tests" ScoreCalValue="45" ScoreMaxValue="50" Points="45 / 50" Notes="" />
            <Assignment Measure="Mom&amp;apos;s Homework" Type="Homework" Points="45 / 50" Notes="late" />
            <Assignment Measure="Project" Type="Projects" Points="50 Points Possible" Notes="" />
            <Assignment Measure="Ungraded" Type="Homework" Points="Not Graded" Notes="" />
          </Assignments>
        </Mark>
      </Marks>
    </Course>
    <Course Period="2" Title="Homeroom" Staff="K. Lee" ImageType="Other">
      <Marks />
    </Course>
    <Course Period="3" Title="Art" Staff="R. Diaz" ImageType="Art">
      <Marks>
        <Mark MarkName="Q2" CalculatedScoreString="P" CalculatedScoreRaw="100">
          <GradeCalculationSummary />
          <Assignments />
        </Mark>
      </Marks>
    </Course>
  </Courses>
</Gradebook>"""
