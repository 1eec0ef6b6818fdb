"""ErrorCategory: the polymorphic domain object behind every code.

A category gives a numeric value meaning: a display name, message text and a
default mapping onto the portable condition set. Categories are process-wide
singletons handed out by accessor functions (see `generic.py` and
`platform/`). They are compared by identity, or by numeric id when one was
registered, so two independently created instances of the same category with
the same id compare equal.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import total_ordering
from typing import TYPE_CHECKING, Union

from .hashing import category_identity

if TYPE_CHECKING:  # pragma: no cover
    from .code import ErrorCode
    from .condition import ErrorCondition

Buffer = Union[bytearray, memoryview]

_MASK64 = 0xFFFFFFFFFFFFFFFF


def bounded_size(buffer: Buffer, length: int | None) -> int:
    return len(buffer) if length is None else min(length, len(buffer))


def write_terminated(buffer: Buffer, text: str, length: int) -> None:
    """Write UTF-8 `text` plus a NUL into the first `length` bytes.

    Truncates on a character boundary. `length` must be >= 1.
    """
    data = text.encode("utf-8", "replace")[: length - 1]
    data = data.decode("utf-8", "ignore").encode("utf-8")
    buffer[: len(data)] = data
    buffer[len(data)] = 0


@total_ordering
class ErrorCategory(ABC):
    """Base class for error categories.

    Subclasses must provide `name` and `message()`. Everything else has a
    working default.
    """

    def __init__(self, category_id: int = 0) -> None:
        self._id = category_id & _MASK64

    @property
    def id(self) -> int:
        """Numeric identity; 0 means the object itself is the identity."""
        return self._id

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name (not unique; never used for comparison)."""

    @abstractmethod
    def message(self, value: int) -> str:
        """Message text for `value`. Must not raise for unknown values."""

    def message_to(
        self, value: int, buffer: Buffer, length: int | None = None
    ) -> Buffer:
        """Bounded, allocation-light variant of message().

        Writes at most `length` bytes (NUL included) and never raises.
        """
        size = bounded_size(buffer, length)
        if size <= 0:
            return buffer
        try:
            text = self.message(value)
        except Exception:  # noqa: BLE001
            text = f"No message text available for error {value}"
        write_terminated(buffer, text, size)
        return buffer

    def default_error_condition(self, value: int) -> "ErrorCondition":
        from .condition import ErrorCondition  # local import (cycle)

        return ErrorCondition(value, self)

    def equivalent(self, value: int, condition: "ErrorCondition") -> bool:
        return self.default_error_condition(value) == condition

    def equivalent_code(self, code: "ErrorCode", condition_value: int) -> bool:
        return self == code.category() and code.value() == condition_value

    def failed(self, value: int) -> bool:
        return value != 0

    # identity -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCategory):
            return NotImplemented
        if other._id == 0:
            return self is other
        return self._id == other._id

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ErrorCategory):
            return NotImplemented
        if self._id < other._id:
            return True
        if self._id > other._id:
            return False
        if other._id != 0:
            return False
        return id(self) < id(other)

    def __hash__(self) -> int:
        return category_identity(self)

    # singletons are never copied
    def __copy__(self) -> "ErrorCategory":
        return self

    def __deepcopy__(self, memo: dict) -> "ErrorCategory":
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} id={self._id:#x}>"


__all__ = ["ErrorCategory", "bounded_size", "write_terminated"]
