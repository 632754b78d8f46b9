from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path

from dated_logger.cli.common import find_log_file, iter_log_files, print_tail
from dated_logger.env import get_logger_env
from dated_logger.paths import dated_file_name


def build_logs_parser(subparsers: argparse._SubParsersAction) -> None:
    logs = subparsers.add_parser("logs", help="Inspect files in the log directory")
    lsub = logs.add_subparsers(dest="action", required=True)

    lsub.add_parser("list", help="List files by name")

    show_p = lsub.add_parser("show", help="Print the tail of one file")
    show_p.add_argument(
        "name", nargs="?", default=None, help="File name or stem (default: today's file)"
    )
    show_p.add_argument("--tail", type=int, default=120, help="Lines from end")


def _list(log_dir: Path) -> int:
    for p in iter_log_files(log_dir):
        print(p.name)
    return 0


def _show(log_dir: Path, file_format: str, name: str | None, tail: int) -> int:
    # Default is the file a write would target right now.
    name = name or dated_file_name(file_format, datetime.now())
    path = find_log_file(log_dir, name)
    if path is None:
        print(f"Log not found: {name}")
        return 1
    print_tail(path, tail)
    return 0


def handle_logs(args: argparse.Namespace) -> int:
    env = get_logger_env()

    if args.action == "list":
        return _list(env.log_dir)
    return _show(env.log_dir, env.file_format, args.name, args.tail)
