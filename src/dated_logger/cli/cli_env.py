from __future__ import annotations

import argparse

from rich.table import Table

from dated_logger.cli.common import RENDER
from dated_logger.env import get_logger_env


def build_env_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("env", help="Show resolved logger configuration")
    p.set_defaults(action="env")


def handle_env(args: argparse.Namespace) -> int:
    table = Table(title="Logger Configuration", show_header=False)
    table.add_column("section", style="bold cyan")
    table.add_column("key")
    table.add_column("value")

    for section, values in get_logger_env().as_dict().items():
        for key, value in values.items():
            table.add_row(section, key, str(value))
            section = ""

    RENDER.print(table)
    return 0
