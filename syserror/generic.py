"""Built-in categories: generic (portable conditions) and interop marker."""
from __future__ import annotations

import errno
import os
from functools import lru_cache

from .category import ErrorCategory
from .condition import ERRNO_NAMES

GENERIC_CATEGORY_ID = 0xB2AB117A257EDF0D
SYSTEM_CATEGORY_ID = GENERIC_CATEGORY_ID + 1
INTEROP_CATEGORY_ID = 0x943F2817FD3A8FAF


def strerror(value: int) -> str:
    """os.strerror that never raises."""
    try:
        return os.strerror(value)
    except (ValueError, OverflowError):
        return f"Unknown error {value}"


class GenericCategory(ErrorCategory):
    """Category of the portable `Errc` conditions.

    Values use the fixed Linux numbering; text comes from the host's
    strerror for the matching errno symbol.
    """

    def __init__(self) -> None:
        super().__init__(GENERIC_CATEGORY_ID)

    @property
    def name(self) -> str:
        return "generic"

    def message(self, value: int) -> str:
        symbol = ERRNO_NAMES.get(value)
        if symbol is None:
            return strerror(value)
        host_value = getattr(errno, symbol, None)
        if host_value is None:
            return f"Unknown error {value}"
        return strerror(host_value)


class InteropCategory(ErrorCategory):
    """Marker category reported by codes holding a foreign payload."""

    def __init__(self) -> None:
        super().__init__(INTEROP_CATEGORY_ID)

    @property
    def name(self) -> str:
        return "interop"

    def message(self, value: int) -> str:
        return f"Unknown interop error {value}"


@lru_cache(maxsize=None)
def generic_category() -> GenericCategory:
    return GenericCategory()


@lru_cache(maxsize=None)
def interop_category() -> InteropCategory:
    return InteropCategory()


__all__ = [
    "GENERIC_CATEGORY_ID",
    "SYSTEM_CATEGORY_ID",
    "INTEROP_CATEGORY_ID",
    "GenericCategory",
    "InteropCategory",
    "generic_category",
    "interop_category",
    "strerror",
]
