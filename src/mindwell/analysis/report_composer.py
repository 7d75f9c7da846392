"""Report Composer for turning an assessment history into one report.

This module orchestrates the analysis pipeline:
1. Resolves each record's severity once
2. Summarises the latest depression and anxiety results
3. Runs the trend analyzer per instrument
4. Aggregates the overall risk level
5. Selects recommendations for the dominant severity

Composition is pure: the same records always produce an equal Report.
"""

from collections import Counter
from collections.abc import Iterable, Sequence

from mindwell.analysis.recommendations import recommend
from mindwell.analysis.risk_aggregator import count_severities, pick_dominant, risk_level_for
from mindwell.analysis.severity_classifier import resolve_severity
from mindwell.analysis.trend_analyzer import analyze_trends
from mindwell.analysis.types import (
    AssessmentRecord,
    InstrumentType,
    Report,
    RiskLevel,
    SeverityBand,
)
from mindwell.core.logging import LogContext, get_logger

logger = get_logger(__name__)

NO_DATA_OVERVIEW = "No assessment data available yet."
FIRST_ASSESSMENT_RECOMMENDATION = (
    "Complete your first mental health assessment to receive personalized insights."
)

ResolvedRecord = tuple[AssessmentRecord, SeverityBand]


def compose_report(records: Iterable[AssessmentRecord]) -> Report:
    """Compose a report over a user's full assessment history.

    Args:
        records: All records of one user, in storage order.

    Returns:
        Report with overview, trends, recommendations and risk level.

    Raises:
        InvalidRangeError: If a record's score is out of range.
    """
    history = list(records)

    if not history:
        logger.warning("empty_assessment_history")
        return Report(
            overview=NO_DATA_OVERVIEW,
            trends=(),
            recommendations=(FIRST_ASSESSMENT_RECOMMENDATION,),
            risk_level=RiskLevel.UNKNOWN,
            dominant_severity=None,
            assessment_count=0,
        )

    with LogContext(operation="compose_report", record_count=len(history)):
        resolved = [(record, resolve_severity(record)) for record in history]

        overview = _build_overview(resolved)
        trends = analyze_trends(history)

        distribution = count_severities(severity for _, severity in resolved)
        dominant = pick_dominant(distribution)
        risk_level = risk_level_for(dominant)

        instrument = _representative(resolved, dominant)
        recommendations = recommend(instrument, dominant)

        logger.info(
            "Report composed",
            risk_level=risk_level.value,
            dominant_severity=dominant.value if dominant else None,
            trends=len(trends),
            representative_instrument=instrument.value,
        )

    return Report(
        overview=overview,
        trends=trends,
        recommendations=recommendations,
        risk_level=risk_level,
        dominant_severity=dominant,
        assessment_count=len(history),
    )


def latest_record(records: Sequence[AssessmentRecord]) -> AssessmentRecord | None:
    """Get the most recent record; equal dates resolve to the later input position."""
    latest: AssessmentRecord | None = None
    for record in records:
        if latest is None or record.date >= latest.date:
            latest = record
    return latest


def representative_instrument(
    records: Sequence[AssessmentRecord],
    dominant: SeverityBand | None,
) -> InstrumentType:
    """Pick the instrument whose table drives the recommendations.

    This is the instrument most common among records holding the dominant
    severity. A tie between instruments, or no dominant severity, yields PHQ-9.
    """
    if dominant is None:
        return InstrumentType.PHQ9
    return _representative([(r, resolve_severity(r)) for r in records], dominant)


def _representative(
    resolved: Sequence[ResolvedRecord],
    dominant: SeverityBand | None,
) -> InstrumentType:
    counts = Counter(
        record.instrument_type for record, severity in resolved if severity == dominant
    )
    ranked = counts.most_common(2)
    if not ranked:
        return InstrumentType.PHQ9
    if len(ranked) > 1 and ranked[0][1] == ranked[1][1]:
        return InstrumentType.PHQ9
    return ranked[0][0]


def _latest_of(
    resolved: Sequence[ResolvedRecord],
    instrument: InstrumentType,
) -> ResolvedRecord | None:
    latest: ResolvedRecord | None = None
    for record, severity in resolved:
        if record.instrument_type != instrument:
            continue
        if latest is None or record.date >= latest[0].date:
            latest = (record, severity)
    return latest


def _build_overview(resolved: Sequence[ResolvedRecord]) -> str:
    """Describe the latest PHQ-9 and GAD-7 results and the assessment count."""
    phq9 = _latest_of(resolved, InstrumentType.PHQ9)
    gad7 = _latest_of(resolved, InstrumentType.GAD7)

    overview = ""
    if phq9 is not None and gad7 is not None:
        (depression, depression_band), (anxiety, anxiety_band) = phq9, gad7
        overview = (
            f"Based on your recent assessments, you show {depression_band.value} "
            f"depression symptoms (PHQ-9: {depression.score}/{depression.max_score}) and "
            f"{anxiety_band.value} anxiety symptoms "
            f"(GAD-7: {anxiety.score}/{anxiety.max_score}). "
        )
    elif phq9 is not None:
        depression, depression_band = phq9
        overview = (
            f"Your latest PHQ-9 assessment indicates {depression_band.value} "
            f"depression symptoms with a score of {depression.score}/{depression.max_score}. "
        )
    elif gad7 is not None:
        anxiety, anxiety_band = gad7
        overview = (
            f"Your latest GAD-7 assessment shows {anxiety_band.value} "
            f"anxiety symptoms with a score of {anxiety.score}/{anxiety.max_score}. "
        )

    total = len(resolved)
    plural = "s" if total > 1 else ""
    return f"{overview}You have completed {total} assessment{plural} total."
