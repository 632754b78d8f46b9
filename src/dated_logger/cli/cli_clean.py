from __future__ import annotations

import argparse
import logging

from dated_logger.cli.common import open_logger

log = logging.getLogger(__name__)


def build_clean_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("clean", help="Delete log files past the retention window")
    p.add_argument(
        "--filter",
        dest="pattern",
        default=None,
        help=r"Only consider file names matching this regex (e.g. 'app_\d{8}\.log')",
    )
    p.set_defaults(action="clean")


def handle_clean(args: argparse.Namespace) -> int:
    logger = open_logger()
    if logger is None:
        return 2

    if logger.retention_days is None:
        log.info("Retention disabled; nothing will be deleted")

    logger.log_clean(args.pattern)
    return 0
