"""Reporting module for exporting composed assessment reports.

Example:
    ```python
    from mindwell.analysis import PatientIdentity, compose_report
    from mindwell.reporting import OutputFormat, create_report_renderer

    report = compose_report(records)
    document = create_report_renderer().render(
        report,
        records,
        PatientIdentity(first_name="Ada", last_name="Byron", patient_id="P-001"),
        output_format=OutputFormat.HTML,
    )
    ```
"""

from mindwell.reporting.report_renderer import (
    DISCLAIMER_TEXT,
    RendererConfig,
    ReportRenderer,
    create_report_renderer,
)
from mindwell.reporting.types import (
    SECTION_ORDER,
    ExportDocument,
    OutputFormat,
    RenderingError,
    ReportGenerationError,
    ReportSection,
)

__all__ = [
    # Main classes
    "ReportRenderer",
    "RendererConfig",
    # Data models
    "ExportDocument",
    # Enums
    "OutputFormat",
    "ReportSection",
    "SECTION_ORDER",
    # Constants
    "DISCLAIMER_TEXT",
    # Errors
    "ReportGenerationError",
    "RenderingError",
    # Factory functions
    "create_report_renderer",
]
