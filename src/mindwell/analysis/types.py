"""Core types and models for assessment analysis.

This module defines the enums, records, derived results and error types
shared by the severity classifier, recommendation tables, trend analyzer,
risk aggregator and report composer.

Records are plain data: derived values such as percentage scores or
severity descriptions are free functions in the analysis modules rather
than methods on the record.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from mindwell.utils.exceptions import MindwellError

# =============================================================================
# Enums
# =============================================================================


class InstrumentType(str, Enum):
    """Standardized questionnaires a record can come from.

    Declaration order is the order instruments appear in reports.
    """

    PHQ9 = "PHQ-9"
    GAD7 = "GAD-7"
    PSS10 = "PSS-10"
    CUSTOM = "Custom"

    @classmethod
    def coerce(cls, value: "InstrumentType | str | None") -> "InstrumentType | None":
        """Return the matching member, or None for unrecognised values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """Display label used in trend listings."""
        return _INSTRUMENT_LABELS[self]

    @property
    def symptom_noun(self) -> str:
        """Noun used in trend messages ("Depression symptoms ...")."""
        return _INSTRUMENT_NOUNS[self]

    @property
    def standard_max_score(self) -> int | None:
        """Published ceiling of the instrument, None for custom scales."""
        return _INSTRUMENT_MAX_SCORES[self]


_INSTRUMENT_LABELS: dict[InstrumentType, str] = {
    InstrumentType.PHQ9: "Depression (PHQ-9)",
    InstrumentType.GAD7: "Anxiety (GAD-7)",
    InstrumentType.PSS10: "Stress (PSS-10)",
    InstrumentType.CUSTOM: "Custom Assessment",
}

_INSTRUMENT_NOUNS: dict[InstrumentType, str] = {
    InstrumentType.PHQ9: "Depression",
    InstrumentType.GAD7: "Anxiety",
    InstrumentType.PSS10: "Stress",
    InstrumentType.CUSTOM: "Self-reported",
}

_INSTRUMENT_MAX_SCORES: dict[InstrumentType, int | None] = {
    InstrumentType.PHQ9: 27,
    InstrumentType.GAD7: 21,
    InstrumentType.PSS10: 40,
    InstrumentType.CUSTOM: None,
}


class SeverityBand(str, Enum):
    """Ordered severity classification of an assessment score.

    Compare bands through ``rank``; the str values sort alphabetically.
    """

    MINIMAL = "minimal"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @classmethod
    def coerce(cls, value: "SeverityBand | str | None") -> "SeverityBand | None":
        """Return the matching member, or None for unrecognised values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def rank(self) -> int:
        """Position in the total order (minimal=0 ... severe=3)."""
        return SEVERITY_ORDER.index(self)


SEVERITY_ORDER: tuple[SeverityBand, ...] = (
    SeverityBand.MINIMAL,
    SeverityBand.MILD,
    SeverityBand.MODERATE,
    SeverityBand.SEVERE,
)


class RiskLevel(str, Enum):
    """Overall risk level derived from the dominant severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"  # No assessment data


class TrendDirection(str, Enum):
    """Direction of score change between earliest and latest record."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


# =============================================================================
# Input Records
# =============================================================================


class AssessmentRecord(BaseModel):
    """A completed questionnaire, already validated and persisted upstream.

    Accepts both snake_case and the camelCase keys used by the storage
    layer (``userId``, ``maxScore``, ``type``). Numeric bounds are not
    checked here: the severity classifier rejects out-of-range scores.

    Attributes:
        id: Opaque record identifier.
        user_id: Opaque owner identifier.
        instrument_type: Questionnaire the record comes from.
        date: When the assessment was taken (UTC when no offset is given).
        score: Total score.
        max_score: Ceiling of the scale the score was taken on.
        severity: Stored severity; a cache of the classifier's result.
        responses: Question id to answer value, not interpreted here.
        notes: Free-text notes, not interpreted here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    user_id: str = Field(validation_alias=AliasChoices("user_id", "userId"))
    instrument_type: InstrumentType = Field(
        validation_alias=AliasChoices("instrument_type", "instrumentType", "type")
    )
    date: datetime
    score: int
    max_score: int = Field(validation_alias=AliasChoices("max_score", "maxScore"))
    severity: SeverityBand | None = None
    responses: dict[str, int] = Field(default_factory=dict)
    notes: str | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def stringify_identifier(cls, v: Any) -> Any:
        """Accept integer identifiers from the storage layer."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("date")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC so records compare consistently."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "instrument_type": self.instrument_type.value,
            "date": self.date.isoformat(),
            "score": self.score,
            "max_score": self.max_score,
            "severity": self.severity.value if self.severity else None,
            "responses": dict(self.responses),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class PatientIdentity:
    """Minimal identity projection printed on exported documents."""

    first_name: str
    last_name: str
    patient_id: str

    @property
    def full_name(self) -> str:
        """First and last name separated by a space."""
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "patient_id": self.patient_id,
        }


# =============================================================================
# Derived Results
# =============================================================================


@dataclass(frozen=True)
class TrendResult:
    """Change of one instrument's score between earliest and latest record.

    Attributes:
        instrument_type: Instrument the trend covers.
        direction: Sign of the change.
        magnitude: Absolute change in points.
        message: Human readable summary of the change.
    """

    instrument_type: InstrumentType
    direction: TrendDirection
    magnitude: int
    message: str

    @property
    def label(self) -> str:
        """Display label of the instrument, e.g. "Depression (PHQ-9)"."""
        return self.instrument_type.label

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.label,
            "instrument_type": self.instrument_type.value,
            "direction": self.direction.value,
            "magnitude": self.magnitude,
            "message": self.message,
        }


@dataclass(frozen=True)
class Report:
    """Analysis of a user's full assessment history.

    Contains no clock-dependent or generated values, so composing the
    same records twice yields equal reports.

    Attributes:
        overview: Summary of the latest depression and anxiety results.
        trends: Per-instrument trends in instrument order.
        recommendations: Advisory sentences for the dominant severity.
        risk_level: Overall risk level.
        dominant_severity: Most frequent severity, None without data.
        assessment_count: Number of records analysed.
    """

    overview: str
    trends: tuple[TrendResult, ...] = field(default_factory=tuple)
    recommendations: tuple[str, ...] = field(default_factory=tuple)
    risk_level: RiskLevel = RiskLevel.UNKNOWN
    dominant_severity: SeverityBand | None = None
    assessment_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "overview": self.overview,
            "trends": [t.to_dict() for t in self.trends],
            "recommendations": list(self.recommendations),
            "risk_level": self.risk_level.value,
            "dominant_severity": (
                self.dominant_severity.value if self.dominant_severity else None
            ),
            "assessment_count": self.assessment_count,
        }


# =============================================================================
# Error Types
# =============================================================================


class AssessmentError(MindwellError):
    """Base exception for assessment analysis errors."""

    def __init__(
        self,
        message: str,
        code: str = "ASSESSMENT_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class InvalidRangeError(AssessmentError):
    """Score or scale ceiling outside the range the classifier accepts.

    Attributes:
        score: The rejected score.
        max_score: The rejected scale ceiling.
    """

    def __init__(self, score: Any, max_score: Any, reason: str) -> None:
        super().__init__(
            message=f"Invalid score {score!r} for maximum {max_score!r}: {reason}",
            code="INVALID_RANGE",
            details={"score": score, "max_score": max_score, "reason": reason},
        )
        self.score = score
        self.max_score = max_score


class InstrumentMismatchError(AssessmentError):
    """Records passed to a single-instrument operation span several instruments."""

    def __init__(self, expected: InstrumentType, found: InstrumentType) -> None:
        super().__init__(
            message=f"Expected only {expected.value} records, found {found.value}",
            code="INSTRUMENT_MISMATCH",
            details={"expected": expected.value, "found": found.value},
        )
        self.expected = expected
        self.found = found
