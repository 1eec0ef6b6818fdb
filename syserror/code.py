"""ErrorCode: the (value, category) value type.

An ErrorCode is in exactly one of four states:

    EMPTY          default constructed; value 0, system category, not failed
    FOREIGN        holds a foreign error-code object (see `foreign.py`)
    NATIVE_OK      (value, category) the category classified as success
    NATIVE_FAILED  (value, category) the category classified as failure

The failure flag is decided once, when the state is entered, so `failed()`
and `bool()` never call back into the category. Every transition goes
through one of the `_set_*` methods, which replace tag and payload together.

A truthy ErrorCode means *something failed*:

    ec = ErrorCode(5, system_category())
    if ec:
        log.warning("open failed: %s", ec.message())
    if ec.matches(Errc.permission_denied):
        ...

Values are stored as signed 32-bit integers; wider inputs wrap the way a C
int does.

`Errc` is registered as a code enum as well as a condition enum, so
`ErrorCode(Errc.io_error)` builds a generic-category code directly. Portable
checks should still go through `matches()`; a generic code only compares
equal to other generic codes.
"""
from __future__ import annotations

import logging
import operator
from enum import IntEnum
from functools import singledispatch, total_ordering
from typing import Any, Callable

from . import metrics
from .category import Buffer, ErrorCategory, bounded_size, write_terminated
from .condition import Errc, ErrorCondition, make_error_condition
from .foreign import ForeignErrorCode, is_foreign_code
from .generic import generic_category, interop_category
from .hashing import category_identity, hash_value, to_int32
from .platform import system_category

log = logging.getLogger("syserror.code")

# 2**30 - 35; keeps foreign-derived values clear of typical native ranges
FOREIGN_VALUE_PRIME = 1073741789

ForeignFactory = Callable[[int, Any], Any]


class _State(IntEnum):
    EMPTY = 0
    FOREIGN = 1
    NATIVE_OK = 2
    NATIVE_FAILED = 3


@total_ordering
class ErrorCode:
    __slots__ = ("_state", "_value", "_category", "_foreign")

    def __init__(
        self, value: Any = None, category: ErrorCategory | None = None
    ) -> None:
        if category is not None:
            self._set_native(value, category)
        elif value is None:
            self._set_empty()
        elif isinstance(value, ErrorCode):
            self._adopt(value)
        elif is_error_code_enum(value):
            self._adopt(make_error_code(value))
        elif is_foreign_code(value):
            self._adopt(ErrorCode.from_foreign(value))
        else:
            raise TypeError(
                f"cannot build ErrorCode from {type(value).__name__} "
                "without a category"
            )

    # ---- state transitions ----

    def _set_empty(self) -> None:
        self._state = _State.EMPTY
        self._value = 0
        self._category = None
        self._foreign = None

    def _set_native(self, value: Any, category: ErrorCategory) -> None:
        if not isinstance(category, ErrorCategory):
            raise TypeError(f"not an ErrorCategory: {category!r}")
        # values are C ints: 0x80004005 and -2147467259 are the same code
        value = to_int32(operator.index(value))
        failed = category.failed(value)
        self._state = _State.NATIVE_FAILED if failed else _State.NATIVE_OK
        self._value = value
        self._category = category
        self._foreign = None

    def _set_foreign(self, foreign: Any) -> None:
        self._state = _State.FOREIGN
        self._value = 0
        self._category = None
        self._foreign = foreign

    def _adopt(self, other: "ErrorCode") -> None:
        self._state = other._state
        self._value = other._value
        self._category = other._category
        self._foreign = other._foreign

    # ---- construction helpers / mutators ----

    @classmethod
    def from_foreign(cls, foreign: Any) -> "ErrorCode":
        """Adopt a foreign code.

        A foreign code wrapping one of our own categories is unwrapped to
        the native state, which keeps native -> foreign -> native lossless.
        """
        if not is_foreign_code(foreign):
            raise TypeError(f"not a foreign error code: {foreign!r}")
        code = cls.__new__(cls)
        if isinstance(foreign.category, ErrorCategory):
            code._set_native(foreign.value, foreign.category)
        else:
            code._set_foreign(foreign)
        return code

    def assign(self, value: int, category: ErrorCategory) -> None:
        self._set_native(value, category)

    def assign_enum(self, value: Any) -> None:
        self._adopt(make_error_code(value))

    def clear(self) -> None:
        self._set_empty()

    # ---- observers ----

    def value(self) -> int:
        if self._state is _State.FOREIGN:
            # approximation only; exact round-trip goes through to_foreign()
            f = self._foreign
            offset = category_identity(f.category) % FOREIGN_VALUE_PRIME
            return to_int32(f.value + offset)
        return self._value

    def category(self) -> ErrorCategory:
        if self._state is _State.EMPTY:
            return system_category()
        if self._state is _State.FOREIGN:
            return interop_category()
        return self._category

    def default_error_condition(self) -> ErrorCondition:
        return self.category().default_error_condition(self.value())

    def message(self) -> str:
        if self._state is _State.FOREIGN:
            return self._foreign.message()
        return self.category().message(self.value())

    def message_to(self, buffer: Buffer, length: int | None = None) -> Buffer:
        if self._state is _State.FOREIGN:
            size = bounded_size(buffer, length)
            if size <= 0:
                return buffer
            try:
                text = self._foreign.message()
            except Exception:  # noqa: BLE001
                log.debug("foreign message() failed; using interop text")
            else:
                write_terminated(buffer, str(text), size)
                return buffer
        return self.category().message_to(self.value(), buffer, length)

    def failed(self) -> bool:
        if self._state is _State.FOREIGN:
            return self._foreign.value != 0
        return self._state is _State.NATIVE_FAILED

    def __bool__(self) -> bool:
        return self.failed()

    def is_foreign(self) -> bool:
        return self._state is _State.FOREIGN

    def matches(self, condition: Any) -> bool:
        """Portable failure test against an ErrorCondition or Errc member."""
        if not isinstance(condition, ErrorCondition):
            condition = make_error_condition(condition)
        return self.category().equivalent(
            self.value(), condition
        ) or condition.category().equivalent_code(self, condition.value())

    # ---- foreign bridge ----

    def to_foreign(self, factory: ForeignFactory = ForeignErrorCode) -> Any:
        if self._state is _State.FOREIGN:
            return self._foreign
        if self._state is _State.EMPTY:
            return factory(0, system_category())
        return factory(self._value, self._category)

    def materialize_as_foreign(
        self, factory: ForeignFactory = ForeignErrorCode
    ) -> Any:
        """Switch this code to the foreign state for good and return it.

        Mutates the instance: afterwards value() is the foreign-encoded
        approximation and category() is the interop category. Not safe if
        other threads use the same instance concurrently.
        """
        if self._state is not _State.FOREIGN:
            foreign = self.to_foreign(factory)
            self._set_foreign(foreign)
            metrics.inc_foreign_materialized()
            log.debug("materialized %r as foreign payload", foreign)
        return self._foreign

    # ---- relationals ----

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCode):
            return NotImplemented
        return (
            self.value() == other.value()
            and self.category() == other.category()
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ErrorCode):
            return NotImplemented
        lhs, rhs = self.category(), other.category()
        return lhs < rhs or (lhs == rhs and self.value() < other.value())

    def __hash__(self) -> int:
        return hash_value(self)

    # ---- rendering ----

    def __str__(self) -> str:
        if self._state is _State.FOREIGN:
            f = self._foreign
            name = getattr(f.category, "name", type(f.category).__name__)
            return f"foreign:{name}:{f.value}"
        return f"{self.category().name}:{self.value()}"

    def __repr__(self) -> str:
        if self._state is _State.EMPTY:
            return "ErrorCode()"
        if self._state is _State.FOREIGN:
            return f"ErrorCode(foreign={self._foreign!r})"
        return f"ErrorCode({self._value}, {self._category.name!r})"


def _no_code_factory(value: Any) -> ErrorCode:
    raise TypeError(f"{type(value).__name__} is not a registered error code enum")


make_error_code = singledispatch(_no_code_factory)
make_error_code.__doc__ = """Build an ErrorCode from an error-code enum.

Domains opt in with ``@make_error_code.register(MyEnum)``; the factory must
return an ErrorCode in a native state.
"""


def is_error_code_enum(value: Any) -> bool:
    return make_error_code.dispatch(type(value)) is not _no_code_factory


@make_error_code.register(Errc)
def _errc_code(value: Errc) -> ErrorCode:
    return ErrorCode(int(value), generic_category())


__all__ = [
    "ErrorCode",
    "FOREIGN_VALUE_PRIME",
    "make_error_code",
    "is_error_code_enum",
]
