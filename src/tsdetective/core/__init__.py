"""Core module exports."""

from tsdetective.core.errors import (
    ConfigError,
    ErrorCode,
    InvalidInputError,
    ParseError,
    TsDetectiveError,
)
from tsdetective.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InvalidInputError",
    "ParseError",
    "TsDetectiveError",
    # Logging
    "configure_logging",
    "get_logger",
]
