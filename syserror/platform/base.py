"""Shared base for the per-OS system categories."""
from __future__ import annotations

from syserror.category import ErrorCategory
from syserror.generic import SYSTEM_CATEGORY_ID


class SystemCategory(ErrorCategory):
    """Native OS error numbers. Every implementation shares one id, so
    whichever one the process uses is "the" system category."""

    def __init__(self) -> None:
        super().__init__(SYSTEM_CATEGORY_ID)

    @property
    def name(self) -> str:
        return "system"
