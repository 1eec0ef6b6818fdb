"""System category selection.

`system_category()` returns the process-wide category for native OS error
numbers: the Win32 table on Windows, errno elsewhere. `platform.target` in
config can force either one (useful for exercising the Win32 table on a
non-Windows host). A config that fails to load never makes this raise; the
host default is used instead.
"""
from __future__ import annotations

import logging
import sys
from functools import lru_cache

from syserror.config import ConfigError, get_config
from syserror.config.schemas.platform import MessagesConfig

from .base import SystemCategory
from .posix import PosixSystemCategory
from .win32 import Win32SystemCategory

log = logging.getLogger("syserror.platform")


def resolve_target(target: str) -> str:
    if target == "auto":
        return "win32" if sys.platform == "win32" else "posix"
    return target


@lru_cache(maxsize=1)
def system_category() -> SystemCategory:
    try:
        cfg = get_config()
        target, messages = cfg.platform.target, cfg.messages
    except ConfigError as e:
        log.warning("config unusable, using host system category: %s", e)
        target, messages = "auto", MessagesConfig()
    if resolve_target(target) == "win32":
        return Win32SystemCategory(messages=messages)
    return PosixSystemCategory()


def reset_for_tests() -> None:
    """Forget the cached system category (next call re-reads config)."""
    system_category.cache_clear()


__all__ = [
    "SystemCategory",
    "PosixSystemCategory",
    "Win32SystemCategory",
    "system_category",
    "resolve_target",
    "reset_for_tests",
]
