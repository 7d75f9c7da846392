"""Risk Aggregator for combining a history of severities into one risk level.

This module provides:
1. The severity distribution of a set of records
2. Dominant severity selection (mode, ties toward the higher band)
3. Mapping from dominant severity to overall risk level
"""

from collections import Counter
from collections.abc import Iterable

from mindwell.analysis.severity_classifier import resolve_severity
from mindwell.analysis.types import (
    SEVERITY_ORDER,
    AssessmentRecord,
    RiskLevel,
    SeverityBand,
)
from mindwell.core.logging import get_logger

logger = get_logger(__name__)

# "moderately severe" is the PHQ-9 15-19 band name; records fold it into severe.
MODERATELY_SEVERE = "moderately severe"


def severity_distribution(records: Iterable[AssessmentRecord]) -> dict[SeverityBand, int]:
    """Count records per resolved severity, in band order.

    Bands without records are omitted.

    Raises:
        InvalidRangeError: If a record's score is out of range.
    """
    return count_severities(resolve_severity(record) for record in records)


def count_severities(severities: Iterable[SeverityBand]) -> dict[SeverityBand, int]:
    """Count already resolved severities, in band order, omitting empty bands."""
    counts = Counter(severities)
    return {band: counts[band] for band in SEVERITY_ORDER if counts[band]}


def dominant_severity(records: Iterable[AssessmentRecord]) -> SeverityBand | None:
    """Get the most frequent severity across records.

    Equal counts resolve to the higher band so the result never
    understates risk. Returns None when there are no records.
    """
    distribution = severity_distribution(records)
    return pick_dominant(distribution)


def pick_dominant(distribution: dict[SeverityBand, int]) -> SeverityBand | None:
    """Select the mode of a severity distribution, ties toward the higher band."""
    if not distribution:
        return None
    return max(distribution, key=lambda band: (distribution[band], band.rank))


def risk_level_for(severity: SeverityBand | str | None) -> RiskLevel:
    """Map a dominant severity to a risk level.

    Args:
        severity: Dominant severity, or None when there is no data.

    Returns:
        HIGH for severe, MEDIUM for moderate, LOW for mild or minimal,
        UNKNOWN when the severity is missing or unrecognised.
    """
    if isinstance(severity, str) and severity.strip().lower() == MODERATELY_SEVERE:
        return RiskLevel.HIGH

    match SeverityBand.coerce(severity):
        case SeverityBand.SEVERE:
            return RiskLevel.HIGH
        case SeverityBand.MODERATE:
            return RiskLevel.MEDIUM
        case SeverityBand.MILD | SeverityBand.MINIMAL:
            return RiskLevel.LOW
        case _:
            return RiskLevel.UNKNOWN


def aggregate_risk(records: Iterable[AssessmentRecord]) -> RiskLevel:
    """Combine all records, regardless of instrument, into one risk level.

    An empty history is UNKNOWN rather than LOW: no data is not evidence
    of low risk.
    """
    distribution = severity_distribution(records)
    dominant = pick_dominant(distribution)
    level = risk_level_for(dominant)

    logger.debug(
        "Risk aggregated",
        dominant=dominant.value if dominant else None,
        level=level.value,
        distribution={band.value: count for band, count in distribution.items()},
    )
    return level
