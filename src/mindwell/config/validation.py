"""Configuration validation for startup checks.

Validates that report export configuration is usable before the
calling service starts producing documents.

Usage:
    from mindwell.config.validation import validate_configuration

    # During startup
    errors = validate_configuration()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        sys.exit(1)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mindwell.config.settings import Settings, get_settings
from mindwell.utils.exceptions import ConfigurationError

logger = logging.getLogger("mindwell.config")


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Must be fixed, exports cannot be produced
    WARNING = "warning"  # Should be fixed, exports work but may look wrong


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(settings: Settings | None = None) -> list[ValidationResult]:
    """Validate application configuration.

    Args:
        settings: Settings to validate (default: global settings)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ValidationResult] = []
    results.extend(_validate_report(settings))
    results.extend(_validate_environment(settings))
    return results


def validate_or_raise(settings: Settings | None = None) -> None:
    """Validate configuration and raise if errors found.

    Args:
        settings: Settings to validate

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    warnings = [r for r in results if r.severity == ValidationSeverity.WARNING]
    for warning in warnings:
        logger.warning(str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_report(settings: Settings) -> list[ValidationResult]:
    """Validate report export configuration."""
    results: list[ValidationResult] = []
    report = settings.report

    if not report.enable_html and not report.enable_json:
        results.append(
            ValidationResult(
                field="report.enable_html",
                severity=ValidationSeverity.ERROR,
                message="All export formats are disabled",
                suggestion="Set REPORT__ENABLE_HTML=true or REPORT__ENABLE_JSON=true",
            )
        )

    if not report.title.strip():
        results.append(
            ValidationResult(
                field="report.title",
                severity=ValidationSeverity.ERROR,
                message="Report title is empty",
                suggestion="Set REPORT__TITLE to a non-empty heading",
            )
        )

    if not report.organization_name.strip():
        results.append(
            ValidationResult(
                field="report.organization_name",
                severity=ValidationSeverity.WARNING,
                message="Organization name is empty - exported footers will be blank",
            )
        )

    return results


def _validate_environment(settings: Settings) -> list[ValidationResult]:
    """Validate environment-specific settings."""
    results: list[ValidationResult] = []

    # Log level recommendations
    if settings.ENVIRONMENT == "production" and settings.log_level == "DEBUG":
        results.append(
            ValidationResult(
                field="log_level",
                severity=ValidationSeverity.WARNING,
                message="DEBUG log level in production may expose assessment scores",
                suggestion="Use INFO or WARNING for production",
            )
        )

    return results


def get_configuration_summary(settings: Settings | None = None) -> dict[str, Any]:
    """Get a summary of current configuration (safe for logging).

    Args:
        settings: Settings to summarize

    Returns:
        Dictionary with configuration summary
    """
    if settings is None:
        settings = get_settings()

    return {
        "environment": settings.ENVIRONMENT,
        "log_level": settings.log_level,
        "report_title": settings.report.title,
        "html_export_enabled": settings.report.enable_html,
        "json_export_enabled": settings.report.enable_json,
    }
