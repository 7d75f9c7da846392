"""Severity Classifier for mapping questionnaire scores to severity bands.

This module provides:
1. Published score bands for PHQ-9, GAD-7 and PSS-10
2. A proportional fallback for custom or non-standard scales
3. Resolution of a record's severity, treating stored values as a cache
4. Percentage and description helpers for display
"""

from mindwell.analysis.types import (
    AssessmentRecord,
    InstrumentType,
    InvalidRangeError,
    SeverityBand,
)
from mindwell.core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Band Configuration
# =============================================================================


# Inclusive upper bound of each band, ascending; the last bound is the ceiling.
INSTRUMENT_BANDS: dict[InstrumentType, tuple[tuple[int, SeverityBand], ...]] = {
    InstrumentType.PHQ9: (
        (4, SeverityBand.MINIMAL),
        (9, SeverityBand.MILD),
        (14, SeverityBand.MODERATE),
        (27, SeverityBand.SEVERE),
    ),
    InstrumentType.GAD7: (
        (4, SeverityBand.MINIMAL),
        (9, SeverityBand.MILD),
        (14, SeverityBand.MODERATE),
        (21, SeverityBand.SEVERE),
    ),
    InstrumentType.PSS10: (
        (6, SeverityBand.MINIMAL),
        (13, SeverityBand.MILD),
        (26, SeverityBand.MODERATE),
        (40, SeverityBand.SEVERE),
    ),
}

# Exclusive upper percentage of each band for the proportional rule
PROPORTIONAL_BANDS: tuple[tuple[int, SeverityBand], ...] = (
    (25, SeverityBand.MINIMAL),
    (50, SeverityBand.MILD),
    (75, SeverityBand.MODERATE),
)

SEVERITY_DESCRIPTIONS: dict[SeverityBand, str] = {
    SeverityBand.MINIMAL: "Minimal symptoms - Continue monitoring",
    SeverityBand.MILD: "Mild symptoms - Consider self-help strategies",
    SeverityBand.MODERATE: "Moderate symptoms - Consider professional help",
    SeverityBand.SEVERE: "Severe symptoms - Seek professional help immediately",
}


# =============================================================================
# Classification
# =============================================================================


def classify_severity(
    instrument_type: InstrumentType | str,
    score: int,
    max_score: int,
) -> SeverityBand:
    """Classify a total score into a severity band.

    Known instruments scored on their published scale use the published
    cut-offs. Custom instruments, unrecognised instrument names and known
    instruments reported on a different ceiling use the proportional rule
    (<25% minimal, <50% mild, <75% moderate, otherwise severe).

    Args:
        instrument_type: Instrument the score comes from.
        score: Total score, 0 <= score <= max_score.
        max_score: Ceiling of the scale, at least 1.

    Returns:
        The severity band containing the score.

    Raises:
        InvalidRangeError: If the score or ceiling is out of range or not an integer.
    """
    _check_range(score, max_score)

    instrument = InstrumentType.coerce(instrument_type)
    bands = INSTRUMENT_BANDS.get(instrument) if instrument is not None else None

    if bands is not None and instrument.standard_max_score == max_score:
        for upper, band in bands:
            if score <= upper:
                return band

    if bands is not None:
        logger.debug(
            "Non-standard scale, using proportional bands",
            instrument=instrument.value,
            max_score=max_score,
        )
    return _classify_proportional(score, max_score)


def _classify_proportional(score: int, max_score: int) -> SeverityBand:
    """Band a score by its share of the scale, without float rounding."""
    for upper_pct, band in PROPORTIONAL_BANDS:
        if score * 100 < upper_pct * max_score:
            return band
    return SeverityBand.SEVERE


def _check_range(score: object, max_score: object) -> None:
    """Reject values the bands are not defined for."""
    for value in (score, max_score):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRangeError(score, max_score, "score and max_score must be integers")
    if max_score < 1:  # type: ignore[operator]
        raise InvalidRangeError(score, max_score, "max_score must be at least 1")
    if score < 0:  # type: ignore[operator]
        raise InvalidRangeError(score, max_score, "score must not be negative")
    if score > max_score:  # type: ignore[operator]
        raise InvalidRangeError(score, max_score, "score exceeds max_score")


def resolve_severity(record: AssessmentRecord) -> SeverityBand:
    """Get the severity of a record from the classifier.

    A stored severity is only a cache of the classifier's answer; when
    it disagrees the computed band wins and the mismatch is logged.

    Raises:
        InvalidRangeError: If the record's score is out of range.
    """
    computed = classify_severity(record.instrument_type, record.score, record.max_score)
    if record.severity is not None and record.severity != computed:
        logger.warning(
            "stored_severity_mismatch",
            record_id=record.id,
            instrument=record.instrument_type.value,
            stored=record.severity.value,
            computed=computed.value,
        )
    return computed


# =============================================================================
# Display Helpers
# =============================================================================


def percentage_score(record: AssessmentRecord) -> int:
    """Score as a percentage of the record's scale, halves rounded up."""
    _check_range(record.score, record.max_score)
    return (record.score * 200 + record.max_score) // (2 * record.max_score)


def severity_description(severity: SeverityBand | str | None) -> str:
    """One-line description of a severity band."""
    band = SeverityBand.coerce(severity)
    if band is None:
        return "Unknown severity level"
    return SEVERITY_DESCRIPTIONS[band]
