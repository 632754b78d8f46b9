from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO


def open_append(logfile: Path) -> BinaryIO:
    """Binary append, created if absent. Binary so terminators are written as given."""
    return open(logfile, "ab")


def write_durably(fh: BinaryIO, data: bytes) -> None:
    # Single write call per record, then flush + fsync before reporting success.
    fh.write(data)
    fh.flush()
    os.fsync(fh.fileno())


def append_record(logfile: Path, data: bytes) -> None:
    """
    Append one record and force it to disk.

    The file is opened and closed within the call; no handle outlives it.
    Errors propagate.
    """
    with open_append(logfile) as fh:
        write_durably(fh, data)


def encode_record(timestamp: str, line: str, terminator: str) -> bytes:
    return f"{timestamp}{line}{terminator}".encode("utf-8")
