"""Unit tests for assessment types."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from mindwell.analysis.types import (
    AssessmentRecord,
    InstrumentMismatchError,
    InstrumentType,
    InvalidRangeError,
    PatientIdentity,
    Report,
    RiskLevel,
    SeverityBand,
)
from mindwell.utils.exceptions import MindwellError


class TestInstrumentType:
    """Tests for InstrumentType."""

    def test_values(self):
        """Test stored instrument names."""
        assert [i.value for i in InstrumentType] == ["PHQ-9", "GAD-7", "PSS-10", "Custom"]

    def test_coerce(self):
        """Test coercion from strings."""
        assert InstrumentType.coerce("PSS-10") == InstrumentType.PSS10
        assert InstrumentType.coerce(InstrumentType.GAD7) == InstrumentType.GAD7
        assert InstrumentType.coerce("BDI-II") is None
        assert InstrumentType.coerce(None) is None

    def test_standard_max_scores(self):
        """Test published scale ceilings."""
        assert InstrumentType.PHQ9.standard_max_score == 27
        assert InstrumentType.GAD7.standard_max_score == 21
        assert InstrumentType.PSS10.standard_max_score == 40
        assert InstrumentType.CUSTOM.standard_max_score is None


class TestSeverityBand:
    """Tests for SeverityBand."""

    def test_rank_order(self):
        """Test ranks follow severity rather than spelling."""
        assert SeverityBand.MINIMAL.rank < SeverityBand.MILD.rank
        assert SeverityBand.MILD.rank < SeverityBand.MODERATE.rank
        assert SeverityBand.MODERATE.rank < SeverityBand.SEVERE.rank

    def test_coerce(self):
        """Test coercion from strings."""
        assert SeverityBand.coerce("moderate") == SeverityBand.MODERATE
        assert SeverityBand.coerce("moderately severe") is None


class TestAssessmentRecord:
    """Tests for AssessmentRecord validation."""

    def test_storage_keys(self):
        """Test the camelCase keys of stored rows are accepted."""
        record = AssessmentRecord.model_validate(
            {
                "id": 42,
                "userId": 7,
                "type": "GAD-7",
                "date": "2025-01-05T10:15:00",
                "score": 8,
                "maxScore": 21,
                "severity": "mild",
                "responses": {"q1": 1, "q2": 2},
            }
        )

        assert record.id == "42"
        assert record.user_id == "7"
        assert record.instrument_type == InstrumentType.GAD7
        assert record.max_score == 21
        assert record.severity == SeverityBand.MILD
        assert record.responses == {"q1": 1, "q2": 2}

    def test_naive_date_is_utc(self):
        """Test naive timestamps are read as UTC."""
        record = AssessmentRecord(
            id="r1",
            user_id="u1",
            instrument_type=InstrumentType.PHQ9,
            date=datetime(2025, 1, 5, 10, 15),
            score=3,
            max_score=27,
        )
        assert record.date == datetime(2025, 1, 5, 10, 15, tzinfo=UTC)

    def test_aware_date_kept(self):
        """Test timestamps with an offset are not shifted."""
        offset = timezone(timedelta(hours=-5))
        record = AssessmentRecord(
            id="r1",
            user_id="u1",
            instrument_type=InstrumentType.PHQ9,
            date=datetime(2025, 1, 5, 10, 15, tzinfo=offset),
            score=3,
            max_score=27,
        )
        assert record.date.utcoffset() == timedelta(hours=-5)

    def test_unknown_instrument_rejected(self):
        """Test instruments outside the enumeration fail validation."""
        with pytest.raises(ValidationError):
            AssessmentRecord.model_validate(
                {"id": "r1", "userId": "u1", "type": "BDI-II", "date": "2025-01-05",
                 "score": 3, "maxScore": 63}
            )

    def test_frozen(self):
        """Test records cannot be modified."""
        record = AssessmentRecord(
            id="r1",
            user_id="u1",
            instrument_type=InstrumentType.PHQ9,
            date=datetime(2025, 1, 5, tzinfo=UTC),
            score=3,
            max_score=27,
        )
        with pytest.raises(ValidationError):
            record.score = 10

    def test_to_dict(self):
        """Test record serialization."""
        record = AssessmentRecord(
            id="r1",
            user_id="u1",
            instrument_type=InstrumentType.PSS10,
            date=datetime(2025, 1, 5, tzinfo=UTC),
            score=14,
            max_score=40,
        )

        data = record.to_dict()

        assert data["instrument_type"] == "PSS-10"
        assert data["date"] == "2025-01-05T00:00:00+00:00"
        assert data["severity"] is None


class TestPatientIdentity:
    """Tests for PatientIdentity."""

    def test_full_name(self):
        """Test full name formatting."""
        assert PatientIdentity("Ada", "Byron", "P-1").full_name == "Ada Byron"
        assert PatientIdentity("Ada", "", "P-1").full_name == "Ada"


class TestReport:
    """Tests for the Report model."""

    def test_defaults(self):
        """Test default report fields."""
        report = Report(overview="text")

        assert report.risk_level == RiskLevel.UNKNOWN
        assert report.to_dict()["dominant_severity"] is None


class TestErrors:
    """Tests for analysis error types."""

    def test_hierarchy(self):
        """Test analysis errors share the package base class."""
        assert issubclass(InvalidRangeError, MindwellError)
        assert issubclass(InstrumentMismatchError, MindwellError)

    def test_invalid_range_message(self):
        """Test the range error message."""
        error = InvalidRangeError(30, 27, "score exceeds max_score")

        assert "30" in str(error)
        assert error.details == {"score": 30, "max_score": 27, "reason": "score exceeds max_score"}
