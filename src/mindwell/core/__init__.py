"""Core infrastructure shared across MindWell modules."""

from mindwell.core.logging import LogContext, get_logger, log_exception, setup_logging

__all__ = [
    "LogContext",
    "get_logger",
    "log_exception",
    "setup_logging",
]
