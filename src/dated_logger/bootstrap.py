"""
Process bootstrap for the dated-logger CLI.

Rules:
1) Only bootstrap mutates os.environ.
2) Call bootstrap_env() once at the entrypoint, before anything reads config.
3) Shell / CI variables always win over the .env file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from dated_logger.env import reset_env_caches

_BOOTSTRAPPED = False


def bootstrap_env(env_file: Optional[Path] = None) -> None:
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return

    path = env_file if env_file is not None else Path.cwd() / ".env"
    if path.exists():
        load_dotenv(path, override=False)

    reset_env_caches()
    _BOOTSTRAPPED = True


def apply_overrides(
    *,
    log_dir: Optional[str] = None,
    file_format: Optional[str] = None,
    line_format: Optional[str] = None,
    retention_days: Optional[int] = None,
    debug: Optional[bool] = None,
    verbose: Optional[bool] = None,
    quiet: Optional[bool] = None,
) -> None:
    """Stamp CLI flags over the environment so every reader sees one config."""

    if log_dir is not None:
        os.environ["DLOG_DIR"] = log_dir
    if file_format is not None:
        os.environ["DLOG_FILE_FORMAT"] = file_format
    if line_format is not None:
        os.environ["DLOG_LINE_FORMAT"] = line_format
    if retention_days is not None:
        os.environ["DLOG_RETENTION_DAYS"] = str(retention_days)

    # Flags only ever switch things on.
    if debug:
        os.environ["DLOG_DEBUG"] = "1"
    if verbose:
        os.environ["DLOG_VERBOSE"] = "1"
    if quiet:
        os.environ["DLOG_QUIET"] = "1"

    # Context changes must invalidate cached env views.
    reset_env_caches()
