"""Configuration module for MindWell."""

from mindwell.config.settings import ReportSettings, Settings, get_settings
from mindwell.config.validation import (
    ValidationResult,
    ValidationSeverity,
    get_configuration_summary,
    validate_configuration,
    validate_or_raise,
)

__all__ = [
    "ReportSettings",
    "Settings",
    "ValidationResult",
    "ValidationSeverity",
    "get_configuration_summary",
    "get_settings",
    "validate_configuration",
    "validate_or_raise",
]
