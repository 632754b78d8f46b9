from __future__ import annotations

import os
from enum import Enum
from functools import lru_cache
from typing import Optional


class Platform(Enum):
    """
    Line-ending + path-separator policy.

    Resolved once from the host and handed to the Logger, so the write and
    cleanup paths never branch on the OS themselves.
    """

    UNIX = "unix"
    WINDOWS = "windows"
    UNSUPPORTED = "unsupported"

    @property
    def line_terminator(self) -> Optional[str]:
        return _LINE_TERMINATORS.get(self)

    @property
    def path_separator(self) -> Optional[str]:
        return _PATH_SEPARATORS.get(self)

    @property
    def supported(self) -> bool:
        return self is not Platform.UNSUPPORTED


_LINE_TERMINATORS = {
    Platform.UNIX: "\n",
    Platform.WINDOWS: "\r\n",
}

_PATH_SEPARATORS = {
    Platform.UNIX: "/",
    Platform.WINDOWS: "\\",
}


def resolve_platform(os_name: str) -> Platform:
    if os_name == "posix":
        return Platform.UNIX
    if os_name == "nt":
        return Platform.WINDOWS
    return Platform.UNSUPPORTED


@lru_cache(maxsize=1)
def current_platform() -> Platform:
    return resolve_platform(os.name)
