"""Unit tests for per-instrument assessment statistics."""

from datetime import UTC, datetime

import pytest

from mindwell.analysis.statistics import summarize_assessments
from mindwell.analysis.types import InstrumentType, SeverityBand

AS_OF = datetime(2025, 2, 10, tzinfo=UTC)


class TestSummarizeAssessments:
    """Tests for summarize_assessments."""

    def test_thirty_day_window(self, mixed_history):
        """Test only records in the last 30 days are summarised."""
        summaries = summarize_assessments(mixed_history, as_of=AS_OF)

        assert [s.instrument_type for s in summaries] == [
            InstrumentType.PHQ9,
            InstrumentType.GAD7,
            InstrumentType.PSS10,
        ]
        phq9, gad7, pss10 = summaries

        assert phq9.total_assessments == 2
        assert phq9.average_score == 11.5
        assert phq9.average_percentage == 42.6
        assert phq9.severity_breakdown == {SeverityBand.MODERATE: 2}
        assert phq9.latest_assessment == datetime(2025, 2, 1, 9, tzinfo=UTC)

        assert gad7.total_assessments == 1
        assert gad7.average_score == 6.0
        assert gad7.average_percentage == 28.6
        assert gad7.severity_breakdown == {SeverityBand.MILD: 1}

        assert pss10.average_percentage == 50.0

    def test_whole_history(self, mixed_history):
        """Test a missing window includes every record."""
        summaries = summarize_assessments(mixed_history, window_days=None)

        phq9 = summaries[0]
        assert phq9.total_assessments == 3
        assert phq9.average_score == round((18 + 12 + 11) / 3, 1)
        assert phq9.severity_breakdown == {SeverityBand.MODERATE: 2, SeverityBand.SEVERE: 1}

    def test_instrument_filter(self, mixed_history):
        """Test summarising a single instrument."""
        summaries = summarize_assessments(
            mixed_history, instrument_type=InstrumentType.GAD7, window_days=None
        )

        assert len(summaries) == 1
        assert summaries[0].instrument_type == InstrumentType.GAD7
        assert summaries[0].total_assessments == 2

    def test_window_excludes_everything(self, mixed_history):
        """Test a window with no records yields no summaries."""
        as_of = datetime(2026, 1, 1, tzinfo=UTC)
        assert summarize_assessments(mixed_history, as_of=as_of) == ()

    def test_naive_as_of_treated_as_utc(self, mixed_history):
        """Test a naive end of window is read as UTC."""
        aware = summarize_assessments(mixed_history, as_of=AS_OF)
        naive = summarize_assessments(mixed_history, as_of=AS_OF.replace(tzinfo=None))

        assert aware == naive

    def test_negative_window_rejected(self, mixed_history):
        """Test a negative window raises ValueError."""
        with pytest.raises(ValueError, match="must not be negative"):
            summarize_assessments(mixed_history, window_days=-1)

    def test_to_dict(self, mixed_history):
        """Test statistics serialization."""
        data = summarize_assessments(mixed_history, as_of=AS_OF)[1].to_dict()

        assert data == {
            "type": "GAD-7",
            "total_assessments": 1,
            "average_score": 6.0,
            "average_percentage": 28.6,
            "severity_breakdown": {"mild": 1},
            "latest_assessment": "2025-02-01T09:00:00+00:00",
        }
