"""Core types for exported assessment reports.

This module defines the output formats, section identifiers, the
exported document model and the rendering error types.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from uuid_utils import UUID, uuid7

from mindwell.utils.exceptions import MindwellError

# =============================================================================
# Enums
# =============================================================================


class OutputFormat(str, Enum):
    """Supported output formats for exported reports."""

    HTML = "html"
    JSON = "json"

    @property
    def media_type(self) -> str:
        """MIME type of documents in this format."""
        return _MEDIA_TYPES[self]


_MEDIA_TYPES: dict[OutputFormat, str] = {
    OutputFormat.HTML: "text/html",
    OutputFormat.JSON: "application/json",
}


class ReportSection(str, Enum):
    """Sections of an exported report, in document order."""

    HEADER = "header"
    EXECUTIVE_SUMMARY = "executive_summary"
    ASSESSMENT_HISTORY = "assessment_history"
    TREND_ANALYSIS = "trend_analysis"
    RECOMMENDATIONS = "recommendations"
    DISCLAIMER = "disclaimer"
    FOOTER = "footer"


SECTION_ORDER: tuple[ReportSection, ...] = tuple(ReportSection)


# =============================================================================
# Document Model
# =============================================================================


@dataclass
class ExportDocument:
    """A rendered, downloadable report.

    Attributes:
        document_id: Unique identifier of this rendering.
        filename: Suggested download file name.
        output_format: Format of the content.
        generated_at: When the document was rendered.
        content: Encoded document (UTF-8).
    """

    document_id: UUID = field(default_factory=uuid7)
    filename: str = ""
    output_format: OutputFormat = OutputFormat.HTML
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    content: bytes = field(default_factory=bytes)

    @property
    def media_type(self) -> str:
        """MIME type of the content."""
        return self.output_format.media_type

    @property
    def size_bytes(self) -> int:
        """Size of the encoded content."""
        return len(self.content)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (without content bytes)."""
        return {
            "document_id": str(self.document_id),
            "filename": self.filename,
            "output_format": self.output_format.value,
            "media_type": self.media_type,
            "generated_at": self.generated_at.isoformat(),
            "size_bytes": self.size_bytes,
        }


# =============================================================================
# Error Types
# =============================================================================


class ReportGenerationError(MindwellError):
    """Base exception for report export errors."""

    def __init__(
        self,
        message: str,
        code: str = "REPORT_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class RenderingError(ReportGenerationError):
    """Error when rendering report content."""

    def __init__(self, output_format: OutputFormat | str, reason: str) -> None:
        format_name = (
            output_format.value if isinstance(output_format, OutputFormat) else output_format
        )
        super().__init__(
            message=f"Failed to render {format_name} report: {reason}",
            code="RENDERING_ERROR",
            details={"format": format_name, "reason": reason},
        )
