"""Report Renderer for exporting assessment reports as documents.

This module provides the ReportRenderer that:
1. Renders a composed Report plus the raw assessment history
2. Supports HTML and JSON output
3. Embeds patient identity, generation time, risk badge and a fixed disclaimer

Rendering is presentation only; all analysis happens in the composer.
"""

import json
import re
from collections.abc import Sequence
from datetime import UTC, datetime
from html import escape
from typing import Any

from pydantic import BaseModel, Field

from mindwell.analysis.severity_classifier import classify_severity
from mindwell.analysis.types import AssessmentRecord, PatientIdentity, Report
from mindwell.config.settings import get_settings
from mindwell.core.logging import get_logger, log_exception
from mindwell.reporting.types import (
    SECTION_ORDER,
    ExportDocument,
    OutputFormat,
    RenderingError,
    ReportSection,
)

logger = get_logger(__name__)

DISCLAIMER_TEXT = (
    "This report is generated from self-assessment questionnaires and is not a "
    "clinical diagnosis. Please consult a qualified mental health professional for "
    "proper evaluation and treatment. If you are experiencing a mental health crisis, "
    "call 988 (Suicide & Crisis Lifeline) or visit your nearest emergency room."
)

CONFIDENTIALITY_NOTICE = (
    "This report is confidential and intended solely for the patient and their "
    "healthcare providers."
)

NO_TRENDS_TEXT = "At least two assessments of the same type are needed to show a trend."

FILENAME_PREFIX = "MHMS_Assessment_Report"

SECTION_TITLES: dict[ReportSection, str] = {
    ReportSection.HEADER: "Patient",
    ReportSection.EXECUTIVE_SUMMARY: "Executive Summary",
    ReportSection.ASSESSMENT_HISTORY: "Assessment History",
    ReportSection.TREND_ANALYSIS: "Trend Analysis",
    ReportSection.RECOMMENDATIONS: "Recommendations",
    ReportSection.DISCLAIMER: "Important Disclaimer",
    ReportSection.FOOTER: "",
}


# =============================================================================
# Configuration
# =============================================================================


class RendererConfig(BaseModel):
    """Configuration for the ReportRenderer."""

    title: str = Field(default="Mental Health Assessment Report", description="Document heading")
    organization_name: str = Field(
        default="MindWell Mental Health Management System", description="Footer organisation"
    )
    default_format: OutputFormat = Field(
        default=OutputFormat.HTML, description="Default output format"
    )
    enable_html: bool = Field(default=True, description="Enable HTML rendering")
    enable_json: bool = Field(default=True, description="Enable JSON rendering")


# =============================================================================
# Report Renderer
# =============================================================================


class ReportRenderer:
    """Render composed reports into shareable documents.

    Example:
        ```python
        renderer = create_report_renderer()
        report = compose_report(records)

        document = renderer.render(
            report,
            records,
            PatientIdentity(first_name="Ada", last_name="Byron", patient_id="P-001"),
        )
        print(document.filename, document.size_bytes)
        ```

    Attributes:
        config: Renderer configuration.
    """

    def __init__(self, config: RendererConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Renderer configuration.
        """
        self.config = config or RendererConfig()

    def render(
        self,
        report: Report,
        records: Sequence[AssessmentRecord],
        patient: PatientIdentity,
        output_format: OutputFormat | None = None,
        generated_at: datetime | None = None,
    ) -> ExportDocument:
        """Render a report and its history.

        Args:
            report: Report composed from ``records``.
            records: Raw assessment history for the history table.
            patient: Identity printed in the header.
            output_format: Output format. Uses default from config if not specified.
            generated_at: Generation timestamp. Defaults to the current UTC time.

        Returns:
            ExportDocument with encoded content.

        Raises:
            RenderingError: If the format is disabled or rendering fails.
            InvalidRangeError: If a history record's score is out of range.
        """
        try:
            output_format = OutputFormat(output_format or self.config.default_format)
        except ValueError:
            raise RenderingError(str(output_format), "Unsupported output format") from None

        generated_at = generated_at or datetime.now(UTC)
        if generated_at.tzinfo is None:
            generated_at = generated_at.replace(tzinfo=UTC)

        logger.info(
            "Rendering report",
            format=output_format.value,
            patient_id=patient.patient_id,
            records=len(records),
        )

        history = self._history_rows(records)

        match output_format:
            case OutputFormat.HTML:
                content = self._render_html(report, history, patient, generated_at)
            case OutputFormat.JSON:
                content = self._render_json(report, history, patient, generated_at)

        document = ExportDocument(
            filename=self._filename(patient, output_format, generated_at),
            output_format=output_format,
            generated_at=generated_at,
            content=content,
        )

        logger.info(
            "Report rendered",
            document_id=str(document.document_id),
            format=output_format.value,
            size_bytes=document.size_bytes,
        )
        return document

    def _history_rows(self, records: Sequence[AssessmentRecord]) -> list[dict[str, Any]]:
        """Tabulate the history, most recent first.

        Severities come from the classifier; stored values are not consulted.
        """
        ordered = sorted(records, key=lambda r: r.date, reverse=True)
        return [
            {
                "date": record.date.date().isoformat(),
                "type": record.instrument_type.value,
                "score": record.score,
                "max_score": record.max_score,
                "severity": classify_severity(
                    record.instrument_type, record.score, record.max_score
                ).value,
            }
            for record in ordered
        ]

    def _filename(
        self,
        patient: PatientIdentity,
        output_format: OutputFormat,
        generated_at: datetime,
    ) -> str:
        """Build a download file name safe for any filesystem."""
        safe_id = re.sub(r"[^A-Za-z0-9_-]", "_", patient.patient_id) or "unknown"
        return f"{FILENAME_PREFIX}_{safe_id}_{generated_at.date().isoformat()}.{output_format.value}"

    def _render_json(
        self,
        report: Report,
        history: list[dict[str, Any]],
        patient: PatientIdentity,
        generated_at: datetime,
    ) -> bytes:
        """Render report as JSON.

        Raises:
            RenderingError: If JSON rendering is disabled or fails.
        """
        if not self.config.enable_json:
            raise RenderingError(OutputFormat.JSON, "JSON rendering is disabled")

        output: dict[str, Any] = {
            "title": self.config.title,
            "patient": patient.to_dict(),
            "generated_at": generated_at.isoformat(),
            "risk_level": report.risk_level.value,
            "report": report.to_dict(),
            "history": history,
            "disclaimer": DISCLAIMER_TEXT,
            "organization": self.config.organization_name,
        }
        try:
            return json.dumps(output, indent=2, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            log_exception(logger, e, format=OutputFormat.JSON.value)
            raise RenderingError(OutputFormat.JSON, str(e)) from e

    def _render_html(
        self,
        report: Report,
        history: list[dict[str, Any]],
        patient: PatientIdentity,
        generated_at: datetime,
    ) -> bytes:
        """Render report as a self-contained HTML page.

        Raises:
            RenderingError: If HTML rendering is disabled or fails.
        """
        if not self.config.enable_html:
            raise RenderingError(OutputFormat.HTML, "HTML rendering is disabled")

        try:
            html_parts = [
                "<!DOCTYPE html>",
                "<html>",
                "<head>",
                '<meta charset="UTF-8">',
                f"<title>{escape(self.config.title)}</title>",
                "<style>",
                self._get_default_css(),
                "</style>",
                "</head>",
                "<body>",
            ]

            for section in SECTION_ORDER:
                html_parts.append(
                    self._render_section_html(section, report, history, patient, generated_at)
                )

            html_parts.extend(["</body>", "</html>"])
            return "\n".join(html_parts).encode("utf-8")
        except Exception as e:
            log_exception(logger, e, format=OutputFormat.HTML.value)
            raise RenderingError(OutputFormat.HTML, str(e)) from e

    def _get_default_css(self) -> str:
        """Get default CSS for HTML reports."""
        return """
            body { font-family: Arial, sans-serif; padding: 40px; line-height: 1.6; color: #333; }
            .header { text-align: center; border-bottom: 3px solid #4F46E5; padding-bottom: 20px; }
            .header h1 { color: #4F46E5; margin: 0; }
            .section { margin: 30px 0; }
            .section h2 { color: #4F46E5; border-left: 4px solid #4F46E5; padding-left: 10px; }
            .risk-badge { display: inline-block; padding: 5px 15px; border-radius: 20px; font-weight: bold; }
            .risk-high { background: #FEE2E2; color: #DC2626; }
            .risk-medium { background: #FEF3C7; color: #D97706; }
            .risk-low { background: #D1FAE5; color: #059669; }
            .risk-unknown { background: #F3F4F6; color: #6B7280; }
            .trend-item { padding: 10px; margin: 5px 0; background: #EEF2FF; border-radius: 6px; }
            .disclaimer { background: #FEF3C7; padding: 15px; border-left: 4px solid #D97706; }
            .footer { margin-top: 50px; border-top: 2px solid #E5E7EB; text-align: center; font-size: 12px; }
            table { border-collapse: collapse; width: 100%; }
            th, td { padding: 12px; text-align: left; border-bottom: 1px solid #E5E7EB; }
            th { background-color: #F3F4F6; }
        """

    def _render_section_html(
        self,
        section: ReportSection,
        report: Report,
        history: list[dict[str, Any]],
        patient: PatientIdentity,
        generated_at: datetime,
    ) -> str:
        """Render a single section as HTML."""
        title = SECTION_TITLES[section]

        match section:
            case ReportSection.HEADER:
                risk = report.risk_level.value
                return (
                    f'<div class="header" id="{section.value}">'
                    f"<h1>{escape(self.config.title)}</h1>"
                    f"<p><strong>Patient:</strong> {escape(patient.full_name)}</p>"
                    f"<p><strong>Patient ID:</strong> {escape(patient.patient_id)}</p>"
                    f"<p><strong>Report Generated:</strong> "
                    f'<time datetime="{generated_at.isoformat()}">'
                    f"{generated_at.strftime('%B %d, %Y %H:%M %Z')}</time></p>"
                    f'<p><strong>Risk Level:</strong> <span class="risk-badge risk-{risk}">'
                    f"{risk.upper()}</span></p>"
                    "</div>"
                )
            case ReportSection.EXECUTIVE_SUMMARY:
                body = f"<p>{escape(report.overview)}</p>"
            case ReportSection.ASSESSMENT_HISTORY:
                rows = "".join(
                    "<tr>"
                    f"<td>{row['date']}</td>"
                    f"<td>{escape(row['type'])}</td>"
                    f"<td>{row['score']}/{row['max_score']}</td>"
                    f"<td><strong>{row['severity'].upper()}</strong></td>"
                    "</tr>"
                    for row in history
                )
                body = (
                    "<table><thead><tr>"
                    "<th>Date</th><th>Assessment Type</th><th>Score</th><th>Severity</th>"
                    f"</tr></thead><tbody>{rows}</tbody></table>"
                )
            case ReportSection.TREND_ANALYSIS:
                if report.trends:
                    body = "".join(
                        f'<div class="trend-item trend-{trend.direction.value}">'
                        f"<strong>{escape(trend.label)}:</strong> {escape(trend.message)}</div>"
                        for trend in report.trends
                    )
                else:
                    body = f"<p>{escape(NO_TRENDS_TEXT)}</p>"
            case ReportSection.RECOMMENDATIONS:
                items = "".join(f"<li>{escape(r)}</li>" for r in report.recommendations)
                body = f"<ul>{items}</ul>"
            case ReportSection.DISCLAIMER:
                body = f'<p class="disclaimer">{escape(DISCLAIMER_TEXT)}</p>'
            case _:
                return (
                    f'<div class="footer" id="{section.value}">'
                    f"<p><strong>{escape(self.config.organization_name)}</strong></p>"
                    f"<p>{escape(CONFIDENTIALITY_NOTICE)}</p>"
                    f"<p>Generated on {generated_at.isoformat()}</p>"
                    "</div>"
                )

        return f'<div class="section" id="{section.value}"><h2>{title}</h2>{body}</div>'


# =============================================================================
# Factory Functions
# =============================================================================


def create_report_renderer(config: RendererConfig | None = None) -> ReportRenderer:
    """Factory function to create a report renderer.

    Without an explicit config, branding and enabled formats come from
    the application settings.

    Args:
        config: Optional renderer configuration.

    Returns:
        Configured ReportRenderer instance.
    """
    if config is None:
        report_settings = get_settings().report
        config = RendererConfig(
            title=report_settings.title,
            organization_name=report_settings.organization_name,
            enable_html=report_settings.enable_html,
            enable_json=report_settings.enable_json,
        )
    return ReportRenderer(config=config)
