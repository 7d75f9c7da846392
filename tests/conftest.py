"""Pytest fixtures for MindWell tests."""

import logging
from collections.abc import Generator
from datetime import UTC, datetime
from unittest.mock import patch

import pytest
import structlog

from mindwell.analysis.types import AssessmentRecord, InstrumentType, PatientIdentity
from mindwell.config.settings import ReportSettings, Settings

# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state or attach a
    structlog handler to the root logger don't affect other tests.
    """
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    root_logger.handlers = [
        h
        for h in root_logger.handlers
        if not isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    root_logger.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        ENVIRONMENT="test",
        log_level="DEBUG",
        report=ReportSettings(
            title="Test Assessment Report",
            organization_name="Test Clinic",
        ),
    )


@pytest.fixture
def patch_settings(mock_settings: Settings) -> Generator[Settings, None, None]:
    """Patch get_settings wherever it was imported."""
    with (
        patch("mindwell.core.logging.get_settings", return_value=mock_settings),
        patch("mindwell.reporting.report_renderer.get_settings", return_value=mock_settings),
    ):
        yield mock_settings


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def patient() -> PatientIdentity:
    """Create a sample patient identity."""
    return PatientIdentity(first_name="Jordan", last_name="Lee", patient_id="P-1001")


@pytest.fixture
def mixed_history() -> list[AssessmentRecord]:
    """PHQ-9, GAD-7 and PSS-10 records spread over two months."""
    rows = [
        ("a1", InstrumentType.PHQ9, datetime(2025, 1, 1, 9, tzinfo=UTC), 18, 27),
        ("a2", InstrumentType.GAD7, datetime(2025, 1, 2, 9, tzinfo=UTC), 12, 21),
        ("a3", InstrumentType.PHQ9, datetime(2025, 1, 15, 9, tzinfo=UTC), 12, 27),
        ("a4", InstrumentType.PSS10, datetime(2025, 1, 20, 9, tzinfo=UTC), 20, 40),
        ("a5", InstrumentType.GAD7, datetime(2025, 2, 1, 9, tzinfo=UTC), 6, 21),
        ("a6", InstrumentType.PHQ9, datetime(2025, 2, 1, 9, tzinfo=UTC), 11, 27),
    ]
    return [
        AssessmentRecord(
            id=record_id,
            user_id="user-1",
            instrument_type=instrument,
            date=taken_at,
            score=score,
            max_score=max_score,
        )
        for record_id, instrument, taken_at, score, max_score in rows
    ]
