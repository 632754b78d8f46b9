from __future__ import annotations

import argparse

from dated_logger.cli.common import open_logger


def build_write_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("write", help="Append one line to today's log")
    p.add_argument("text", nargs="+", help="Line text (words are joined by spaces)")
    p.set_defaults(action="write")


def handle_write(args: argparse.Namespace) -> int:
    logger = open_logger()
    if logger is None:
        return 2

    return 0 if logger.write_log(" ".join(args.text)) else 1
