from __future__ import annotations

import logging
import os
import re
import time
from pathlib import Path
from typing import Callable, Optional

from dated_logger.errors import FilterPatternError
from dated_logger.platform import Platform

log = logging.getLogger(__name__)

SECS_PER_DAY = 86400

Reporter = Callable[[str], object]


def compile_filter(pattern: Optional[str]) -> Optional[re.Pattern]:
    """None or empty disables filtering."""
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise FilterPatternError(f"invalid filter pattern {pattern!r}: {e}") from e


def cutoff_for(retention_days: int, now: Optional[float] = None) -> int:
    current = int(time.time() if now is None else now)
    return current - retention_days * SECS_PER_DAY


def _printable_name(name: str) -> Optional[str]:
    # os.listdir() smuggles undecodable bytes through as lone surrogates.
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return name


def enforce_retention(
    log_dir: str | os.PathLike,
    retention_days: Optional[int],
    pattern: Optional[str] = None,
    *,
    report: Reporter,
    platform: Platform,
) -> None:
    """
    Delete files in log_dir whose mtime is older than retention_days.

    Never raises. Every problem is passed to `report` as a single line and
    the scan moves on to the next entry. Subdirectories and names that do
    not match `pattern` are never touched.
    """
    if not platform.supported:
        return

    log_dir = Path(log_dir)

    try:
        names = os.listdir(log_dir)
    except OSError as e:
        report(f"Log cleaner error: could not read directory {log_dir}: {e}")
        return

    if retention_days is None:
        return

    threshold = cutoff_for(retention_days)

    try:
        matcher = compile_filter(pattern)
    except FilterPatternError as e:
        report(f"Log cleaner error: {e}")
        return

    for raw_name in names:
        name = _printable_name(raw_name)
        if name is None:
            report("Log cleaner error: could not convert file name")
            continue

        if matcher is not None and not matcher.search(name):
            continue

        path = log_dir / raw_name

        if path.is_dir():
            continue

        try:
            st = path.stat()
        except OSError as e:
            report(f"Log cleaner error: could not read metadata from file {name} | {e}")
            continue

        try:
            modified = int(st.st_mtime)
        except (OverflowError, ValueError) as e:
            report(f"Log cleaner error: could not read modified time from file {name} | {e}")
            continue

        if modified >= threshold:
            continue

        try:
            path.unlink()
        except OSError as e:
            report(f"Log cleaner error: could not delete file {name} | {e}")
            continue

        log.debug("Deleted %s (mtime %d < cutoff %d)", path, modified, threshold)
