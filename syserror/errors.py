"""Internal error taxonomy for problems raised by this package itself.

These are not error codes in the `ErrorCode` sense: they label the few
conditions under which syserror refuses to proceed (bad configuration).
Everything about a failed OS call is expressed as an `ErrorCode`.
"""
from __future__ import annotations

_ALLOWED_ERROR_TYPES = {
    # config.load
    "config-invalid",
    "config-out-of-range",
    "config-unknown-key",
}


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


def map_exception(e: Exception, phase: str) -> str:
    msg = str(e).lower()
    if phase == "config.load":
        if "extra" in msg or "not permitted" in msg:
            return "config-unknown-key"
        return "config-invalid"
    return "config-invalid"


__all__ = ["validate_error_type", "map_exception"]
