"""Custom exceptions for MindWell."""


class MindwellError(Exception):
    """Base exception for all MindWell errors."""

    pass


class ConfigurationError(MindwellError):
    """Error in configuration or settings."""

    pass
