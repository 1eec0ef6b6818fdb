"""Foreign error-code representation bridged by `ErrorCode`.

Anything with an integer `value`, a `category` exposing `name`, and a
`message()` method qualifies. `ForeignErrorCode` is the concrete type the
bridge produces; it is constructible from `(value, category)` like any
conforming foreign type must be.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ForeignCategory(Protocol):
    name: str

    def message(self, value: int) -> str:
        ...


@runtime_checkable
class ForeignCode(Protocol):
    value: int
    category: Any

    def message(self) -> str:
        ...


@dataclass(frozen=True, slots=True)
class ForeignErrorCode:
    value: int
    category: Any

    def message(self) -> str:
        return self.category.message(self.value)

    def failed(self) -> bool:
        return self.value != 0

    def __bool__(self) -> bool:
        return self.failed()

    def __str__(self) -> str:
        return f"{self.category.name}:{self.value}"


def is_foreign_code(obj: Any) -> bool:
    """True for foreign-shaped objects (attribute `value`, not a method)."""
    return isinstance(obj, ForeignCode) and isinstance(
        getattr(obj, "value", None), int
    )


__all__ = [
    "ForeignCategory",
    "ForeignCode",
    "ForeignErrorCode",
    "is_foreign_code",
]
