from __future__ import annotations


class DatedLoggerError(Exception):
    """Base error for the dated logger."""


class UnsupportedPlatformError(DatedLoggerError, OSError):
    """Line terminator / path separator cannot be determined for this host."""


class FilterPatternError(DatedLoggerError, ValueError):
    """Cleanup filter is not a valid regular expression."""


class ConfigError(DatedLoggerError, RuntimeError):
    pass
