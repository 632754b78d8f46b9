from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console

from dated_logger.env import get_logger_env
from dated_logger.errors import DatedLoggerError
from dated_logger.logger import Logger

RENDER = Console(highlight=False)


# ----------------------------
# Logger construction
# ----------------------------


def open_logger() -> Optional[Logger]:
    """
    Build the Logger from the resolved environment.

    Construction failures are reported on stderr and turned into None so
    handlers can exit with a status instead of a traceback.
    """
    try:
        return Logger.from_env(get_logger_env())
    except (OSError, ValueError, DatedLoggerError) as e:
        print(f"Cannot open log directory: {e}", file=sys.stderr)
        return None


# ----------------------------
# Log file helpers
# ----------------------------


def iter_log_files(log_dir: Path) -> Iterable[Path]:
    if not log_dir.exists():
        return []
    return sorted(p for p in log_dir.iterdir() if p.is_file())


def find_log_file(log_dir: Path, name: str) -> Path | None:
    if not log_dir.exists():
        return None

    candidate = log_dir / name
    if candidate.is_file():
        return candidate

    for p in log_dir.iterdir():
        if p.is_file() and p.stem == name:
            return p

    return None


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def print_tail(path: Path, lines: int) -> None:
    try:
        data = read_text(path).splitlines()
    except OSError as e:
        print(f"[error reading log] {e}", file=sys.stderr)
        return

    tail = data[-lines:] if lines > 0 else data
    for line in tail:
        print(line)
