"""Unit tests for risk aggregation."""

from datetime import UTC, datetime, timedelta

import pytest

from mindwell.analysis.risk_aggregator import (
    aggregate_risk,
    count_severities,
    dominant_severity,
    pick_dominant,
    risk_level_for,
    severity_distribution,
)
from mindwell.analysis.types import (
    AssessmentRecord,
    InstrumentType,
    InvalidRangeError,
    RiskLevel,
    SeverityBand,
)


def create_records(*scores: int, instrument: InstrumentType = InstrumentType.PHQ9):
    """Create one record per score, a day apart."""
    start = datetime(2025, 1, 1, tzinfo=UTC)
    return [
        AssessmentRecord(
            id=f"rec-{i}",
            user_id="user-1",
            instrument_type=instrument,
            date=start + timedelta(days=i),
            score=score,
            max_score=instrument.standard_max_score,
        )
        for i, score in enumerate(scores)
    ]


class TestSeverityDistribution:
    """Tests for severity_distribution."""

    def test_counts_in_band_order(self):
        """Test counts come back in band order without empty bands."""
        records = create_records(20, 2, 11, 12, 3)

        distribution = severity_distribution(records)

        assert list(distribution) == [
            SeverityBand.MINIMAL,
            SeverityBand.MODERATE,
            SeverityBand.SEVERE,
        ]
        assert distribution[SeverityBand.MINIMAL] == 2
        assert distribution[SeverityBand.MODERATE] == 2
        assert distribution[SeverityBand.SEVERE] == 1
        assert SeverityBand.MILD not in distribution

    def test_empty(self):
        """Test empty history."""
        assert severity_distribution([]) == {}

    def test_count_resolved_severities(self):
        """Test counting severities that were resolved beforehand."""
        severities = [SeverityBand.SEVERE, SeverityBand.MILD, SeverityBand.SEVERE]

        distribution = count_severities(severities)

        assert list(distribution) == [SeverityBand.MILD, SeverityBand.SEVERE]
        assert distribution[SeverityBand.SEVERE] == 2

    def test_rejects_out_of_range(self):
        """Test invalid records propagate the range error."""
        records = create_records(5)
        bad = records[0].model_copy(update={"score": 99})

        with pytest.raises(InvalidRangeError):
            severity_distribution([bad])


class TestDominantSeverity:
    """Tests for dominant severity selection."""

    def test_most_frequent(self):
        """Test the mode wins."""
        assert dominant_severity(create_records(10, 11, 12, 5)) == SeverityBand.MODERATE

    def test_tie_goes_to_higher_band(self):
        """Test equal counts resolve to the more severe band."""
        assert dominant_severity(create_records(5, 20)) == SeverityBand.SEVERE
        assert dominant_severity(create_records(20, 5)) == SeverityBand.SEVERE

    def test_empty(self):
        """Test no records means no dominant severity."""
        assert dominant_severity([]) is None

    def test_pick_dominant(self):
        """Test selection from a prepared distribution."""
        distribution = {SeverityBand.MINIMAL: 3, SeverityBand.MODERATE: 3, SeverityBand.MILD: 1}
        assert pick_dominant(distribution) == SeverityBand.MODERATE
        assert pick_dominant({}) is None


class TestRiskLevelFor:
    """Tests for the severity to risk mapping."""

    @pytest.mark.parametrize(
        ("severity", "expected"),
        [
            (SeverityBand.SEVERE, RiskLevel.HIGH),
            (SeverityBand.MODERATE, RiskLevel.MEDIUM),
            (SeverityBand.MILD, RiskLevel.LOW),
            (SeverityBand.MINIMAL, RiskLevel.LOW),
            ("severe", RiskLevel.HIGH),
            (None, RiskLevel.UNKNOWN),
            ("critical", RiskLevel.UNKNOWN),
        ],
    )
    def test_mapping(self, severity, expected):
        """Test each severity maps to its risk level."""
        assert risk_level_for(severity) == expected

    @pytest.mark.parametrize("alias", ["moderately severe", "Moderately Severe", " moderately severe "])
    def test_moderately_severe_alias(self, alias):
        """Test the PHQ-9 'moderately severe' label maps to high."""
        assert risk_level_for(alias) == RiskLevel.HIGH


class TestAggregateRisk:
    """Tests for aggregate_risk."""

    def test_empty_history_is_unknown(self):
        """Test no data is unknown rather than low."""
        assert aggregate_risk([]) == RiskLevel.UNKNOWN

    def test_mostly_moderate(self):
        """Test three moderate and one mild record is medium risk."""
        assert aggregate_risk(create_records(10, 12, 14, 6)) == RiskLevel.MEDIUM

    def test_mild_severe_tie(self):
        """Test a mild and severe tie is high risk."""
        assert aggregate_risk(create_records(6, 22)) == RiskLevel.HIGH

    def test_mixed_instruments(self):
        """Test records from all instruments are combined."""
        records = create_records(2, 3) + create_records(
            16, 18, 20, instrument=InstrumentType.GAD7
        )
        assert aggregate_risk(records) == RiskLevel.HIGH

    def test_order_independent(self):
        """Test shuffling records does not change the risk."""
        records = create_records(2, 11, 12, 20, 6)
        assert aggregate_risk(records) == aggregate_risk(list(reversed(records)))
