"""In-memory metrics for syserror.

Only two places in the package have anything worth counting: the Windows
message lookup (which calls into the OS and may retry) and the config
loader. Foreign materialization is counted too, since it mutates a code.

Counters (labels in braces):
    - win32_message_lookup_total{result}     # ok|unknown
    - win32_message_buffer_grow_total        # one per buffer retry
    - foreign_materialized_total
    - env_override_total{path}
    - config_validation_errors_total{path,code}

Samples:
    - win32_message_buffer_chars             # buffer size that succeeded

`snapshot()` renders series as ``name{k=v,...}`` with label keys sorted.
"""
from __future__ import annotations

from collections import defaultdict
from threading import RLock
from time import time
from typing import Any, DefaultDict, Dict, List, Mapping, Optional

_LOCK = RLock()
_COUNTERS: DefaultDict[str, float] = defaultdict(float)
_SAMPLES: DefaultDict[str, List[float]] = defaultdict(list)


def _series(name: str, labels: Optional[Mapping[str, Any]]) -> str:
    if not labels:
        return name
    parts = sorted(f"{k}={v}" for k, v in labels.items())
    return f"{name}{{{','.join(parts)}}}"


def inc(
    name: str,
    labels: Optional[Mapping[str, Any]] = None,
    value: float = 1.0,
) -> None:
    series = _series(name, labels)
    with _LOCK:
        _COUNTERS[series] += value


def observe(
    name: str,
    value: float,
    labels: Optional[Mapping[str, Any]] = None,
) -> None:
    series = _series(name, labels)
    with _LOCK:
        _SAMPLES[series].append(value)


def _summary(values: List[float]) -> Dict[str, float]:
    ordered = sorted(values)
    return {
        "count": len(values),
        "min": ordered[0],
        "max": ordered[-1],
        "p50": ordered[len(ordered) // 2],
        "last": values[-1],
    }


def snapshot() -> dict[str, Any]:
    """Copy of all series; safe to keep after further updates."""
    with _LOCK:
        return {
            "ts": time(),
            "counters": dict(_COUNTERS),
            "histograms": {
                series: _summary(values)
                for series, values in _SAMPLES.items()
                if values
            },
        }


def reset_for_tests() -> None:  # pragma: no cover
    with _LOCK:
        _COUNTERS.clear()
        _SAMPLES.clear()


# ------------------- Helper wrappers -------------------

def inc_win32_message_lookup(result: str) -> None:
    """Count a Windows message lookup.

    result: ok (OS produced text) | unknown (placeholder returned).
    """
    inc("win32_message_lookup_total", {"result": result})


def inc_win32_buffer_grow() -> None:
    """Count one retry with a larger buffer (ERROR_INSUFFICIENT_BUFFER)."""
    inc("win32_message_buffer_grow_total")


def inc_foreign_materialized() -> None:
    inc("foreign_materialized_total")


__all__ = [
    "inc",
    "observe",
    "snapshot",
    "reset_for_tests",
    "inc_win32_message_lookup",
    "inc_win32_buffer_grow",
    "inc_foreign_materialized",
]
