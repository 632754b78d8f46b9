from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from dated_logger.console import echo_line
from dated_logger.env import LoggerEnvironment, debug_enabled, get_logger_env
from dated_logger.errors import UnsupportedPlatformError
from dated_logger.file import append_record, encode_record, open_append, write_durably
from dated_logger.paths import dated_file_name, dated_log_path, ensure_log_dir
from dated_logger.platform import Platform, current_platform
from dated_logger.retention import enforce_retention

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _check_retention(retention_days: Optional[int]) -> Optional[int]:
    if retention_days is None:
        return None
    if isinstance(retention_days, bool) or not isinstance(retention_days, int):
        raise ValueError(f"retention_days must be an int or None, got {retention_days!r}")
    if retention_days < 0:
        raise ValueError(f"retention_days must be >= 0, got {retention_days}")
    return retention_days


class Logger:
    """
    Appends timestamped lines to a dated log file and prunes old files.

    The target file is re-resolved from `file_name_format` on every write,
    so it follows the calendar (e.g. a new file after midnight) without any
    explicit rollover. No file handle is kept between calls.

    Concurrent writers get no locking: each write is one O_APPEND write of
    the whole record, which is only as atomic as the platform makes it.
    `log_clean` may delete a file between a writer resolving its name and
    opening it; the writer then recreates it.
    """

    def __init__(
        self,
        directory: str | os.PathLike,
        file_name_format: str,
        line_date_format: str,
        retention_days: Optional[int] = None,
        *,
        platform: Optional[Platform] = None,
        echo: Optional[bool] = None,
        clock: Optional[Clock] = None,
    ):
        self._platform = platform if platform is not None else current_platform()
        terminator = self._platform.line_terminator
        if terminator is None:
            raise UnsupportedPlatformError("Unsupported platform")

        self._retention_days = _check_retention(retention_days)
        self._directory = ensure_log_dir(directory)
        self._file_name_format = file_name_format
        self._line_date_format = line_date_format
        self._echo = debug_enabled() if echo is None else bool(echo)
        self._clock = clock or datetime.now

        # Session separator; also proves the file is writable.
        append_record(self.log_path(), terminator.encode("utf-8"))

    @classmethod
    def from_env(cls, env: Optional[LoggerEnvironment] = None, **kwargs) -> "Logger":
        env = env or get_logger_env()
        kwargs.setdefault("echo", env.debug)
        return cls(
            env.log_dir,
            env.file_format,
            env.line_format,
            env.retention_days,
            **kwargs,
        )

    # ---------------------------------------------------------------
    # Configuration (read-only)
    # ---------------------------------------------------------------

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def file_name_format(self) -> str:
        return self._file_name_format

    @property
    def line_date_format(self) -> str:
        return self._line_date_format

    @property
    def retention_days(self) -> Optional[int]:
        return self._retention_days

    @property
    def platform(self) -> Platform:
        return self._platform

    def __repr__(self) -> str:
        return (
            f"Logger(directory={str(self._directory)!r}, "
            f"file_name_format={self._file_name_format!r}, "
            f"line_date_format={self._line_date_format!r}, "
            f"retention_days={self._retention_days!r})"
        )

    # ---------------------------------------------------------------
    # Operations
    # ---------------------------------------------------------------

    def log_path(self, now: Optional[datetime] = None) -> Path:
        now = now or self._clock()
        return dated_log_path(self._directory, self._file_name_format, now)

    def write_log(self, line: str) -> bool:
        """
        Append `<timestamp><line><terminator>` to the current dated file.

        Returns True only once the record has been flushed and fsynced.
        Never raises.
        """
        terminator = self._platform.line_terminator
        if terminator is None:
            return False

        try:
            now = self._clock()
            timestamp = now.strftime(self._line_date_format)
            logfile = self._directory / dated_file_name(self._file_name_format, now)
            record = encode_record(timestamp, line, terminator)
        except (ValueError, TypeError) as e:
            log.debug("write_log: could not build record: %s", e)
            return False

        try:
            with open_append(logfile) as fh:
                if self._echo:
                    echo_line(line)
                write_durably(fh, record)
        except Exception as e:
            log.debug("write_log: %s: %s", logfile, e)
            return False

        return True

    def log_clean(self, filter: Optional[str] = None) -> None:
        """
        Delete files older than `retention_days`, optionally only those whose
        name matches the `filter` regular expression.

        Problems are written to the log itself; nothing is raised.
        """
        enforce_retention(
            self._directory,
            self._retention_days,
            filter,
            report=self.write_log,
            platform=self._platform,
        )
