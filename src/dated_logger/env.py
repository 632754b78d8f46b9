from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dated_logger.errors import ConfigError

# ------------------------------------------------------------
# Defaults
# ------------------------------------------------------------

DEFAULT_LOG_DIR = Path("logs")
DEFAULT_FILE_FORMAT = "%Y-%m-%d.log"
DEFAULT_LINE_FORMAT = "%Y-%m-%d %H:%M:%S "
DEFAULT_LOG_LEVEL = "WARNING"

# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_retention(v: Optional[str]) -> Optional[int]:
    """
    Empty or unset disables cleanup. Anything else must be a
    non-negative integer.
    """
    if v is None or not v.strip():
        return None

    try:
        days = int(v.strip())
    except ValueError:
        raise ConfigError(f"DLOG_RETENTION_DAYS must be an integer, got {v!r}") from None

    if days < 0:
        raise ConfigError(f"DLOG_RETENTION_DAYS must be >= 0, got {days}")
    return days


def debug_enabled() -> bool:
    """Debug echo flag alone, readable without validating the rest of the config."""
    return _as_bool(os.environ.get("DLOG_DEBUG", "0"))


# ------------------------------------------------------------
# Logger environment
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggerEnvironment:
    log_dir: Path
    file_format: str
    line_format: str
    retention_days: Optional[int]
    debug: bool
    verbose: bool
    quiet: bool
    log_level: str

    def as_dict(self) -> dict:
        return {
            "Destination": {
                "log_dir": str(self.log_dir),
                "file_format": self.file_format,
                "line_format": self.line_format,
            },
            "Retention": {
                "retention_days": (
                    "disabled" if self.retention_days is None else self.retention_days
                ),
            },
            "Diagnostics": {
                "debug": self.debug,
                "verbose": self.verbose,
                "quiet": self.quiet,
                "log_level": self.log_level,
            },
        }


def _read_env() -> LoggerEnvironment:
    raw_dir = os.environ.get("DLOG_DIR")
    log_dir = Path(raw_dir).expanduser() if raw_dir else DEFAULT_LOG_DIR

    return LoggerEnvironment(
        log_dir=log_dir,
        file_format=os.environ.get("DLOG_FILE_FORMAT") or DEFAULT_FILE_FORMAT,
        line_format=os.environ.get("DLOG_LINE_FORMAT", DEFAULT_LINE_FORMAT),
        retention_days=_as_retention(os.environ.get("DLOG_RETENTION_DAYS")),
        debug=debug_enabled(),
        verbose=_as_bool(os.environ.get("DLOG_VERBOSE", "0")),
        quiet=_as_bool(os.environ.get("DLOG_QUIET", "0")),
        log_level=os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )


_ENV: Optional[LoggerEnvironment] = None


def reset_env_caches() -> None:
    """Invalidate cached views of environment variables."""
    global _ENV
    _ENV = None


def get_logger_env() -> LoggerEnvironment:
    global _ENV
    if _ENV is None:
        _ENV = _read_env()
    return _ENV
