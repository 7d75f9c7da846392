"""Trend analysis over a user's assessment history.

Trends compare only the earliest and latest record of an instrument.
Fluctuation in between is neither smoothed nor weighted, so every
reported change can be checked against two rows of the history table.
"""

from collections.abc import Iterable, Sequence

from mindwell.analysis.types import (
    AssessmentRecord,
    InstrumentMismatchError,
    InstrumentType,
    TrendDirection,
    TrendResult,
)
from mindwell.core.logging import get_logger

logger = get_logger(__name__)

MIN_RECORDS_FOR_TREND = 2


def sort_by_date(records: Iterable[AssessmentRecord]) -> list[AssessmentRecord]:
    """Sort records ascending by date; equal dates keep their input order."""
    return sorted(records, key=lambda r: r.date)


def partition_by_instrument(
    records: Iterable[AssessmentRecord],
) -> dict[InstrumentType, list[AssessmentRecord]]:
    """Group records by instrument in instrument declaration order.

    Only instruments with at least one record appear in the result, and
    each group keeps the input order of its records.
    """
    groups: dict[InstrumentType, list[AssessmentRecord]] = {}
    for record in records:
        groups.setdefault(record.instrument_type, []).append(record)
    return {instrument: groups[instrument] for instrument in InstrumentType if instrument in groups}


def analyze_trend(
    records: Sequence[AssessmentRecord],
    instrument_type: InstrumentType | None = None,
) -> TrendResult | None:
    """Compute the change between the earliest and latest record.

    Args:
        records: Records of a single instrument, in any order.
        instrument_type: Instrument the records must belong to. Defaults to
            the instrument of the first record.

    Returns:
        TrendResult, or None when fewer than two records exist.

    Raises:
        InstrumentMismatchError: If records belong to different instruments.
    """
    if not records:
        return None

    expected = instrument_type or records[0].instrument_type
    for record in records:
        if record.instrument_type != expected:
            raise InstrumentMismatchError(expected, record.instrument_type)

    if len(records) < MIN_RECORDS_FOR_TREND:
        return None

    ordered = sort_by_date(records)
    change = ordered[-1].score - ordered[0].score

    if change > 0:
        direction = TrendDirection.INCREASING
    elif change < 0:
        direction = TrendDirection.DECREASING
    else:
        direction = TrendDirection.STABLE

    magnitude = abs(change)
    result = TrendResult(
        instrument_type=expected,
        direction=direction,
        magnitude=magnitude,
        message=_trend_message(expected, direction, magnitude),
    )

    logger.debug(
        "Trend analyzed",
        instrument=expected.value,
        direction=direction.value,
        magnitude=magnitude,
        data_points=len(records),
    )
    return result


def analyze_trends(records: Iterable[AssessmentRecord]) -> tuple[TrendResult, ...]:
    """Analyze every instrument with enough history, in instrument order."""
    trends: list[TrendResult] = []
    for instrument, group in partition_by_instrument(records).items():
        trend = analyze_trend(group, instrument)
        if trend is not None:
            trends.append(trend)
    return tuple(trends)


def _trend_message(
    instrument: InstrumentType,
    direction: TrendDirection,
    magnitude: int,
) -> str:
    noun = instrument.symptom_noun
    unit = "point" if magnitude == 1 else "points"
    match direction:
        case TrendDirection.INCREASING:
            return f"{noun} symptoms have increased by {magnitude} {unit}"
        case TrendDirection.DECREASING:
            return f"{noun} symptoms have decreased by {magnitude} {unit}"
        case _:
            return f"{noun} symptoms remain stable"
