"""Per-instrument statistics over a window of assessment history."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from mindwell.analysis.risk_aggregator import severity_distribution
from mindwell.analysis.trend_analyzer import partition_by_instrument
from mindwell.analysis.types import AssessmentRecord, InstrumentType, SeverityBand

DEFAULT_WINDOW_DAYS = 30


@dataclass(frozen=True)
class InstrumentStatistics:
    """Summary of one instrument's records inside the window.

    Attributes:
        instrument_type: Instrument summarised.
        total_assessments: Number of records in the window.
        average_score: Mean raw score, one decimal.
        average_percentage: Mean percentage of the scale, one decimal.
        severity_breakdown: Record count per resolved severity.
        latest_assessment: Date of the most recent record.
    """

    instrument_type: InstrumentType
    total_assessments: int
    average_score: float
    average_percentage: float
    severity_breakdown: dict[SeverityBand, int] = field(default_factory=dict)
    latest_assessment: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.instrument_type.value,
            "total_assessments": self.total_assessments,
            "average_score": self.average_score,
            "average_percentage": self.average_percentage,
            "severity_breakdown": {
                band.value: count for band, count in self.severity_breakdown.items()
            },
            "latest_assessment": (
                self.latest_assessment.isoformat() if self.latest_assessment else None
            ),
        }


def summarize_assessments(
    records: Iterable[AssessmentRecord],
    instrument_type: InstrumentType | None = None,
    window_days: int | None = DEFAULT_WINDOW_DAYS,
    as_of: datetime | None = None,
) -> tuple[InstrumentStatistics, ...]:
    """Summarise records per instrument.

    Args:
        records: Records of one user.
        instrument_type: Only summarise this instrument.
        window_days: Only include records taken within this many days before
            ``as_of``. None includes the whole history.
        as_of: End of the window. Defaults to the current UTC time.

    Returns:
        One entry per instrument with records in the window, in instrument order.

    Raises:
        ValueError: If window_days is negative.
        InvalidRangeError: If a record's score is out of range.
    """
    if window_days is not None and window_days < 0:
        raise ValueError(f"window_days must not be negative, got {window_days}")

    selected = [
        r for r in records if instrument_type is None or r.instrument_type == instrument_type
    ]
    if window_days is not None:
        end = as_of or datetime.now(UTC)
        if end.tzinfo is None:
            end = end.replace(tzinfo=UTC)
        start = end - timedelta(days=window_days)
        selected = [r for r in selected if start <= r.date <= end]

    summaries: list[InstrumentStatistics] = []
    for instrument, group in partition_by_instrument(selected).items():
        breakdown = severity_distribution(group)
        count = len(group)
        summaries.append(
            InstrumentStatistics(
                instrument_type=instrument,
                total_assessments=count,
                average_score=round(sum(r.score for r in group) / count, 1),
                average_percentage=round(
                    sum(r.score * 100 / r.max_score for r in group) / count, 1
                ),
                severity_breakdown=breakdown,
                latest_assessment=max(r.date for r in group),
            )
        )
    return tuple(summaries)
