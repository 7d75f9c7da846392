"""Recommendation tables keyed by instrument and severity.

Every (instrument, severity) pair maps to three or four advisory
sentences. Lookups never come back empty: an unrecognised instrument
reads the PHQ-9 table and an unrecognised severity reads the instrument's
``mild`` entry.
"""

from mindwell.analysis.types import InstrumentType, SeverityBand
from mindwell.core.logging import get_logger

logger = get_logger(__name__)


RecommendationTable = dict[SeverityBand, tuple[str, ...]]


PHQ9_RECOMMENDATIONS: RecommendationTable = {
    SeverityBand.MINIMAL: (
        "Continue monitoring your mood regularly.",
        "Maintain healthy routines and social connections.",
        "Practice stress management techniques.",
    ),
    SeverityBand.MILD: (
        "Increase pleasant activities and social contact.",
        "Consider journaling or taking short walks daily.",
        "Practice mindfulness or meditation.",
        "Consider speaking with a trusted friend or family member.",
    ),
    SeverityBand.MODERATE: (
        "Schedule enjoyable activities and talk to a trusted person.",
        "Consider speaking with a mental health professional.",
        "Practice cognitive behavioral therapy techniques.",
        "Maintain regular sleep and exercise routines.",
    ),
    SeverityBand.SEVERE: (
        "Seek professional mental health support promptly.",
        "If you are in crisis, contact emergency services or call the 988 Suicide & Crisis Lifeline.",
        "Consider a medication evaluation with a psychiatrist.",
        "Create a safety plan with your healthcare provider.",
    ),
}

GAD7_RECOMMENDATIONS: RecommendationTable = {
    SeverityBand.MINIMAL: (
        "Continue the stress-management habits that work for you.",
        "Practice regular relaxation techniques.",
        "Keep checking in on your anxiety levels with periodic assessments.",
    ),
    SeverityBand.MILD: (
        "Practice brief breathing exercises twice daily.",
        "Limit caffeine and alcohol intake.",
        "Establish regular sleep patterns.",
        "Use worry time scheduling techniques.",
    ),
    SeverityBand.MODERATE: (
        "Add structured worry time and limit stimulants.",
        "Consider CBT-based self-help or professional guidance.",
        "Practice progressive muscle relaxation.",
        "Consider speaking with a mental health professional.",
    ),
    SeverityBand.SEVERE: (
        "Consult a clinician about tailored anxiety management.",
        "Discuss medication options with a psychiatrist.",
        "Use crisis resources if your anxiety escalates.",
        "Practice grounding techniques during panic attacks.",
    ),
}

PSS10_RECOMMENDATIONS: RecommendationTable = {
    SeverityBand.MINIMAL: (
        "Keep up healthy boundaries and time management.",
        "Continue your stress-reduction practices.",
        "Notice early signs of stress so you can act on them quickly.",
    ),
    SeverityBand.MILD: (
        "Use task batching and micro-breaks during the day.",
        "Practice time management techniques.",
        "Maintain a healthy work-life balance.",
    ),
    SeverityBand.MODERATE: (
        "Prioritize tasks and delegate when possible.",
        "Schedule recovery time every day.",
        "Consider stress management counseling.",
        "Practice regular relaxation techniques.",
    ),
    SeverityBand.SEVERE: (
        "Seek workplace or academic support.",
        "Consider professional help with stress management.",
        "Evaluate and reduce your stressors where possible.",
        "Make time for regular self-care activities.",
    ),
}

RECOMMENDATIONS: dict[InstrumentType, RecommendationTable] = {
    InstrumentType.PHQ9: PHQ9_RECOMMENDATIONS,
    InstrumentType.GAD7: GAD7_RECOMMENDATIONS,
    InstrumentType.PSS10: PSS10_RECOMMENDATIONS,
}


def recommend(
    instrument_type: InstrumentType | str | None,
    severity: SeverityBand | str | None,
) -> tuple[str, ...]:
    """Get the advisory sentences for an instrument and severity.

    Args:
        instrument_type: Instrument the severity was measured on.
        severity: Severity band to advise on.

    Returns:
        Ordered, non-empty recommendations.
    """
    table = _table_for(InstrumentType.coerce(instrument_type))

    match SeverityBand.coerce(severity):
        case (
            SeverityBand.MINIMAL | SeverityBand.MILD | SeverityBand.MODERATE | SeverityBand.SEVERE
        ) as band:
            return table[band]
        case _:
            # Unrecognised severity reads the mild entry
            logger.debug("Unknown severity, using mild recommendations", severity=severity)
            return table[SeverityBand.MILD]


def _table_for(instrument: InstrumentType | None) -> RecommendationTable:
    """Select an instrument's table; custom and unknown instruments read PHQ-9."""
    match instrument:
        case InstrumentType.PHQ9 | InstrumentType.GAD7 | InstrumentType.PSS10:
            return RECOMMENDATIONS[instrument]
        case _:
            return PHQ9_RECOMMENDATIONS
