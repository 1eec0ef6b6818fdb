"""POSIX system category: host errno values.

Classification goes through the errno symbol, so a host whose numbering
differs from Linux still lands on the right portable kind.
"""
from __future__ import annotations

import errno

from syserror.condition import ERRNO_SYMBOL_TO_ERRC, ErrorCondition
from syserror.generic import generic_category, strerror

from .base import SystemCategory


def errno_to_errc(value: int) -> int | None:
    """Portable value for a host errno, or None if it has no counterpart."""
    if value == 0:
        return 0
    symbol = errno.errorcode.get(value)
    if symbol is None:
        return None
    return ERRNO_SYMBOL_TO_ERRC.get(symbol)


class PosixSystemCategory(SystemCategory):
    def message(self, value: int) -> str:
        return strerror(value)

    def default_error_condition(self, value: int) -> ErrorCondition:
        portable = errno_to_errc(value)
        if portable is None:
            return ErrorCondition(value, self)
        return ErrorCondition(portable, generic_category())


__all__ = ["PosixSystemCategory", "errno_to_errc"]
