"""Assessment analysis: severity, trends, risk and report composition.

Example:
    ```python
    from mindwell.analysis import AssessmentRecord, compose_report

    records = [AssessmentRecord.model_validate(row) for row in rows]
    report = compose_report(records)
    print(report.risk_level.value, report.overview)
    ```
"""

from mindwell.analysis.recommendations import RECOMMENDATIONS, recommend
from mindwell.analysis.report_composer import (
    FIRST_ASSESSMENT_RECOMMENDATION,
    NO_DATA_OVERVIEW,
    compose_report,
    latest_record,
    representative_instrument,
)
from mindwell.analysis.risk_aggregator import (
    aggregate_risk,
    count_severities,
    dominant_severity,
    pick_dominant,
    risk_level_for,
    severity_distribution,
)
from mindwell.analysis.severity_classifier import (
    INSTRUMENT_BANDS,
    SEVERITY_DESCRIPTIONS,
    classify_severity,
    percentage_score,
    resolve_severity,
    severity_description,
)
from mindwell.analysis.statistics import InstrumentStatistics, summarize_assessments
from mindwell.analysis.trend_analyzer import (
    analyze_trend,
    analyze_trends,
    partition_by_instrument,
    sort_by_date,
)
from mindwell.analysis.types import (
    SEVERITY_ORDER,
    AssessmentError,
    AssessmentRecord,
    InstrumentMismatchError,
    InstrumentType,
    InvalidRangeError,
    PatientIdentity,
    Report,
    RiskLevel,
    SeverityBand,
    TrendDirection,
    TrendResult,
)

__all__ = [
    # Records and results
    "AssessmentRecord",
    "PatientIdentity",
    "Report",
    "TrendResult",
    "InstrumentStatistics",
    # Enums
    "InstrumentType",
    "SeverityBand",
    "RiskLevel",
    "TrendDirection",
    "SEVERITY_ORDER",
    # Tables
    "INSTRUMENT_BANDS",
    "RECOMMENDATIONS",
    "SEVERITY_DESCRIPTIONS",
    # Errors
    "AssessmentError",
    "InvalidRangeError",
    "InstrumentMismatchError",
    # Severity
    "classify_severity",
    "resolve_severity",
    "percentage_score",
    "severity_description",
    # Recommendations
    "recommend",
    # Trends
    "analyze_trend",
    "analyze_trends",
    "partition_by_instrument",
    "sort_by_date",
    # Risk
    "aggregate_risk",
    "count_severities",
    "dominant_severity",
    "pick_dominant",
    "risk_level_for",
    "severity_distribution",
    # Reports
    "compose_report",
    "latest_record",
    "representative_instrument",
    "NO_DATA_OVERVIEW",
    "FIRST_ASSESSMENT_RECOMMENDATION",
    # Statistics
    "summarize_assessments",
]
