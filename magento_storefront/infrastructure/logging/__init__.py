"""
Logging Infrastructure

Structured logging setup and performance timing helpers.
"""

from .logger_config import (
    LoggingConfigOptions,
    PerformanceLogger,
    get_structured_logger,
    setup_logging,
)

__all__ = [
    "LoggingConfigOptions",
    "PerformanceLogger",
    "get_structured_logger",
    "setup_logging",
]
