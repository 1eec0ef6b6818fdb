"""Stable hashing of (category identity, value) pairs.

64-bit FNV-1a style mix, one round per input. Pure function of the pair, so
two codes that compare equal always hash equal.
"""
from __future__ import annotations

from typing import Any

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF


def category_identity(category: Any) -> int:
    """Numeric identity if registered (nonzero), else the object's id()."""
    ident = getattr(category, "id", 0)
    if isinstance(ident, int) and ident:
        return ident
    return id(category)


def to_int32(value: int) -> int:
    """Fold an integer to a signed 32-bit value (C int wraparound)."""
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def fnv1a_pair(identity: int, value: int) -> int:
    hv = FNV_OFFSET_BASIS
    hv ^= identity & _MASK64
    hv = (hv * FNV_PRIME) & _MASK64
    # values are folded as unsigned 32-bit
    hv ^= value & _MASK32
    hv = (hv * FNV_PRIME) & _MASK64
    return hv


def hash_value(code: Any) -> int:
    """Hash an ErrorCode / ErrorCondition by its category and value()."""
    return fnv1a_pair(category_identity(code.category()), code.value())


__all__ = [
    "FNV_OFFSET_BASIS",
    "FNV_PRIME",
    "category_identity",
    "fnv1a_pair",
    "to_int32",
    "hash_value",
]
