from __future__ import annotations

from dated_logger.errors import (
    ConfigError,
    DatedLoggerError,
    FilterPatternError,
    UnsupportedPlatformError,
)
from dated_logger.logger import Logger
from dated_logger.platform import Platform, current_platform, resolve_platform

__version__ = "0.1.0"

__all__ = [
    "Logger",
    "Platform",
    "current_platform",
    "resolve_platform",
    "DatedLoggerError",
    "UnsupportedPlatformError",
    "FilterPatternError",
    "ConfigError",
]
