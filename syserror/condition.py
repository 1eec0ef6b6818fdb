"""Portable condition registry.

`Errc` is the fixed vocabulary of portable failure kinds. Values follow the
Linux errno numbering so they are identical on every host; each member also
carries its errno symbol so messages can be rendered with the host's own
strerror table (see `generic.py`).

`ErrorCondition` is the value type callers compare against:

    code.matches(Errc.permission_denied)
"""
from __future__ import annotations

import operator
from enum import IntEnum
from functools import singledispatch, total_ordering
from typing import Any

from .category import Buffer, ErrorCategory
from .hashing import hash_value, to_int32


class Errc(IntEnum):
    success = 0
    address_family_not_supported = 97
    address_in_use = 98
    address_not_available = 99
    already_connected = 106
    argument_list_too_long = 7
    argument_out_of_domain = 33
    bad_address = 14
    bad_file_descriptor = 9
    bad_message = 74
    broken_pipe = 32
    connection_aborted = 103
    connection_already_in_progress = 114
    connection_refused = 111
    connection_reset = 104
    cross_device_link = 18
    destination_address_required = 89
    device_or_resource_busy = 16
    directory_not_empty = 39
    executable_format_error = 8
    file_exists = 17
    file_too_large = 27
    filename_too_long = 36
    function_not_supported = 38
    host_unreachable = 113
    identifier_removed = 43
    illegal_byte_sequence = 84
    inappropriate_io_control_operation = 25
    interrupted = 4
    invalid_argument = 22
    invalid_seek = 29
    io_error = 5
    is_a_directory = 21
    message_size = 90
    network_down = 100
    network_reset = 102
    network_unreachable = 101
    no_buffer_space = 105
    no_child_process = 10
    no_link = 67
    no_lock_available = 37
    no_message_available = 61
    no_message = 42
    no_protocol_option = 92
    no_space_on_device = 28
    no_stream_resources = 63
    no_such_device_or_address = 6
    no_such_device = 19
    no_such_file_or_directory = 2
    no_such_process = 3
    not_a_directory = 20
    not_a_socket = 88
    not_a_stream = 60
    not_connected = 107
    not_enough_memory = 12
    not_supported = 95
    operation_canceled = 125
    operation_in_progress = 115
    operation_not_permitted = 1
    operation_not_supported = 95  # alias of not_supported
    operation_would_block = 11
    owner_dead = 130
    permission_denied = 13
    protocol_error = 71
    protocol_not_supported = 93
    read_only_file_system = 30
    resource_deadlock_would_occur = 35
    resource_unavailable_try_again = 11  # alias of operation_would_block
    result_out_of_range = 34
    state_not_recoverable = 131
    stream_timeout = 62
    text_file_busy = 26
    timed_out = 110
    too_many_files_open_in_system = 23
    too_many_files_open = 24
    too_many_links = 31
    too_many_symbolic_link_levels = 40
    value_too_large = 75
    wrong_protocol_type = 91

    @property
    def errno_name(self) -> str | None:
        """errno symbol for this kind (None for success)."""
        return ERRNO_NAMES.get(self.value)


# value -> errno symbol; aliases share a symbol
ERRNO_NAMES: dict[int, str] = {
    1: "EPERM",
    2: "ENOENT",
    3: "ESRCH",
    4: "EINTR",
    5: "EIO",
    6: "ENXIO",
    7: "E2BIG",
    8: "ENOEXEC",
    9: "EBADF",
    10: "ECHILD",
    11: "EAGAIN",
    12: "ENOMEM",
    13: "EACCES",
    14: "EFAULT",
    16: "EBUSY",
    17: "EEXIST",
    18: "EXDEV",
    19: "ENODEV",
    20: "ENOTDIR",
    21: "EISDIR",
    22: "EINVAL",
    23: "ENFILE",
    24: "EMFILE",
    25: "ENOTTY",
    26: "ETXTBSY",
    27: "EFBIG",
    28: "ENOSPC",
    29: "ESPIPE",
    30: "EROFS",
    31: "EMLINK",
    32: "EPIPE",
    33: "EDOM",
    34: "ERANGE",
    35: "EDEADLK",
    36: "ENAMETOOLONG",
    37: "ENOLCK",
    38: "ENOSYS",
    39: "ENOTEMPTY",
    40: "ELOOP",
    42: "ENOMSG",
    43: "EIDRM",
    60: "ENOSTR",
    61: "ENODATA",
    62: "ETIME",
    63: "ENOSR",
    67: "ENOLINK",
    71: "EPROTO",
    74: "EBADMSG",
    75: "EOVERFLOW",
    84: "EILSEQ",
    88: "ENOTSOCK",
    89: "EDESTADDRREQ",
    90: "EMSGSIZE",
    91: "EPROTOTYPE",
    92: "ENOPROTOOPT",
    93: "EPROTONOSUPPORT",
    95: "EOPNOTSUPP",
    97: "EAFNOSUPPORT",
    98: "EADDRINUSE",
    99: "EADDRNOTAVAIL",
    100: "ENETDOWN",
    101: "ENETUNREACH",
    102: "ENETRESET",
    103: "ECONNABORTED",
    104: "ECONNRESET",
    105: "ENOBUFS",
    106: "EISCONN",
    107: "ENOTCONN",
    110: "ETIMEDOUT",
    111: "ECONNREFUSED",
    113: "EHOSTUNREACH",
    114: "EALREADY",
    115: "EINPROGRESS",
    125: "ECANCELED",
    130: "EOWNERDEAD",
    131: "ENOTRECOVERABLE",
}

# errno symbol -> portable value (includes symbols that alias on Linux)
ERRNO_SYMBOL_TO_ERRC: dict[str, int] = {
    **{name: value for value, name in ERRNO_NAMES.items()},
    "EWOULDBLOCK": 11,
    "ENOTSUP": 95,
    "EDEADLOCK": 35,
}


@total_ordering
class ErrorCondition:
    """Portable (value, category) pair, usually drawn from `Errc`."""

    __slots__ = ("_value", "_category")

    def __init__(
        self, value: Any = 0, category: ErrorCategory | None = None
    ) -> None:
        if category is None:
            if is_error_condition_enum(value):
                cond = make_error_condition(value)
                value, category = cond._value, cond._category
            elif value == 0:
                from .generic import generic_category  # local import (cycle)

                category = generic_category()
            else:
                raise TypeError(
                    "ErrorCondition(value) needs a category unless value "
                    "is a registered condition enum"
                )
        if not isinstance(category, ErrorCategory):
            raise TypeError(f"not an ErrorCategory: {category!r}")
        self._value = to_int32(operator.index(value))
        self._category = category

    def assign(self, value: int, category: ErrorCategory) -> None:
        self._value = to_int32(operator.index(value))
        self._category = category

    def clear(self) -> None:
        from .generic import generic_category

        self._value = 0
        self._category = generic_category()

    def value(self) -> int:
        return self._value

    def category(self) -> ErrorCategory:
        return self._category

    def message(self) -> str:
        return self._category.message(self._value)

    def message_to(self, buffer: Buffer, length: int | None = None) -> Buffer:
        return self._category.message_to(self._value, buffer, length)

    def failed(self) -> bool:
        return self._category.failed(self._value)

    def __bool__(self) -> bool:
        return self.failed()

    def __eq__(self, other: object) -> bool:
        if is_error_condition_enum(other):
            other = make_error_condition(other)
        if not isinstance(other, ErrorCondition):
            return NotImplemented
        return (
            self._value == other._value and self._category == other._category
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ErrorCondition):
            return NotImplemented
        return self._category < other._category or (
            self._category == other._category and self._value < other._value
        )

    def __hash__(self) -> int:
        return hash_value(self)

    def __str__(self) -> str:
        return f"{self._category.name}:{self._value}"

    def __repr__(self) -> str:
        return f"ErrorCondition({self._value}, {self._category.name!r})"


def _no_condition_factory(value: Any) -> ErrorCondition:
    raise TypeError(f"{type(value).__name__} is not a registered condition enum")


make_error_condition = singledispatch(_no_condition_factory)
make_error_condition.__doc__ = """Build an ErrorCondition from a condition enum.

Domains opt in with ``@make_error_condition.register(MyEnum)``.
"""


def is_error_condition_enum(value: Any) -> bool:
    return make_error_condition.dispatch(type(value)) is not _no_condition_factory


@make_error_condition.register(Errc)
def _errc_condition(value: Errc) -> ErrorCondition:
    from .generic import generic_category

    return ErrorCondition(int(value), generic_category())


__all__ = [
    "Errc",
    "ErrorCondition",
    "ERRNO_NAMES",
    "ERRNO_SYMBOL_TO_ERRC",
    "make_error_condition",
    "is_error_condition_enum",
]
