"""Portable error codes: (value, category) pairs and OS error classification.

Typical use:

    from syserror import ErrorCode, Errc, system_category

    ec = ErrorCode(native_errno, system_category())
    if ec.matches(Errc.file_exists):
        ...

No side effects on import beyond building the enum tables.
"""

from .category import ErrorCategory  # noqa: F401
from .code import ErrorCode, is_error_code_enum, make_error_code  # noqa: F401
from .condition import (  # noqa: F401
    Errc,
    ErrorCondition,
    is_error_condition_enum,
    make_error_condition,
)
from .foreign import ForeignErrorCode  # noqa: F401
from .generic import generic_category, interop_category  # noqa: F401
from .hashing import hash_value  # noqa: F401
from .platform import system_category  # noqa: F401

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "ErrorCondition",
    "Errc",
    "ForeignErrorCode",
    "generic_category",
    "hash_value",
    "interop_category",
    "is_error_code_enum",
    "is_error_condition_enum",
    "make_error_code",
    "make_error_condition",
    "system_category",
]
