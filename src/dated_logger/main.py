#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from dated_logger.bootstrap import apply_overrides, bootstrap_env
from dated_logger.errors import ConfigError


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dated-logger",
        description="Append timestamped lines to dated log files and prune old ones.",
    )

    p.add_argument("--dir", dest="log_dir", help="Log directory (DLOG_DIR)")
    p.add_argument("--file-format", help="strftime template for file names")
    p.add_argument("--line-format", help="strftime template for line timestamps")
    p.add_argument(
        "--retention-days", type=int, help="Days to keep files when cleaning"
    )
    p.add_argument("--debug", action="store_true", help="Echo written lines to stdout")
    p.add_argument("-v", "--verbose", action="store_true", help="Diagnostic output")
    p.add_argument("-q", "--quiet", action="store_true", help="No diagnostic output")

    sub = p.add_subparsers(dest="command", required=True)

    # Keep imports inside builder to avoid early side effects.
    from dated_logger.cli.cli_clean import build_clean_parser
    from dated_logger.cli.cli_env import build_env_parser
    from dated_logger.cli.cli_logs import build_logs_parser
    from dated_logger.cli.cli_write import build_write_parser

    build_write_parser(sub)
    build_clean_parser(sub)
    build_logs_parser(sub)
    build_env_parser(sub)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    bootstrap_env()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.retention_days is not None and args.retention_days < 0:
        parser.error("--retention-days must be >= 0")

    apply_overrides(
        log_dir=args.log_dir,
        file_format=args.file_format,
        line_format=args.line_format,
        retention_days=args.retention_days,
        debug=args.debug,
        verbose=args.verbose,
        quiet=args.quiet,
    )

    from dated_logger.console import init_logging

    try:
        init_logging()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    log = logging.getLogger(__name__)
    log.debug("Command: %s", args.command)

    if args.command == "write":
        from dated_logger.cli.cli_write import handle_write

        return handle_write(args)

    if args.command == "clean":
        from dated_logger.cli.cli_clean import handle_clean

        return handle_clean(args)

    if args.command == "logs":
        from dated_logger.cli.cli_logs import handle_logs

        return handle_logs(args)

    if args.command == "env":
        from dated_logger.cli.cli_env import handle_env

        return handle_env(args)

    raise RuntimeError(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
