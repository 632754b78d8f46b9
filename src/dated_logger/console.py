from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from dated_logger.env import get_logger_env

# No explicit file: rich resolves sys.stdout on every print, so redirected
# or captured stdout is honoured.
ECHO_CONSOLE = Console(soft_wrap=True)

# Diagnostics stay off stdout so `logs show` output can be piped.
DIAG_CONSOLE = Console(stderr=True, soft_wrap=True)


def echo_line(line: str) -> None:
    """Print a raw log line to stdout, exactly as given."""
    # Console.print expands tabs and strips control codes; bypass rendering.
    out = ECHO_CONSOLE.file
    out.write(line + "\n")
    out.flush()


def _level_to_int(level: str | int) -> int:
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(str(level).upper())
    return lvl if isinstance(lvl, int) else logging.WARNING


def build_console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        console=DIAG_CONSOLE,
        level=level,
        show_time=False,
        show_level=True,
        show_path=False,
        markup=False,
    )
    # RichHandler renders the level column itself.
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    return handler


def init_logging() -> None:
    """
    Attach diagnostic console output to the root logger.

    Only the CLI calls this; the library never installs handlers.
    Safe to call multiple times; handlers are replaced, not stacked.
    """
    env = get_logger_env()
    root = logging.getLogger()

    for h in list(root.handlers):
        if isinstance(h, RichHandler):
            root.removeHandler(h)

    if env.quiet:
        root.setLevel(logging.CRITICAL + 1)
        return

    level = logging.DEBUG if env.verbose else _level_to_int(env.log_level)
    root.setLevel(level)
    root.addHandler(build_console_handler(level))
