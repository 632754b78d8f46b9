from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path


def ensure_log_dir(directory: str | os.PathLike) -> Path:
    """
    Create the log directory if it is absent.

    Only the last level is created; a missing parent raises
    FileNotFoundError. An existing directory is left untouched.
    """
    path = Path(directory)
    if not path.exists():
        path.mkdir()
    return path


def dated_file_name(template: str, now: datetime) -> str:
    return now.strftime(template)


def dated_log_path(directory: str | os.PathLike, template: str, now: datetime) -> Path:
    return Path(directory) / dated_file_name(template, now)
