"""Utility modules for MindWell."""

from mindwell.utils.exceptions import ConfigurationError, MindwellError

__all__ = [
    "MindwellError",
    "ConfigurationError",
]
