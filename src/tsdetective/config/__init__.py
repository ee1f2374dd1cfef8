"""Config module exports."""

from tsdetective.config.loader import load_config
from tsdetective.config.models import (
    ExtractConfig,
    LoggingConfig,
    LogOutputConfig,
    TsDetectiveConfig,
)

__all__ = [
    "load_config",
    "ExtractConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "TsDetectiveConfig",
]
