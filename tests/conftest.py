"""Pytest configuration ensuring project root is importable.

Adds repository root to sys.path explicitly to avoid interpreter/path quirks.
"""
from __future__ import annotations

import sys
from pathlib import Path
import os
import pytest


ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolate_config_env():  # noqa: D401
    """Ensure global config/env side effects do not leak between tests.

    - Clear aggregated config cache and the cached system category
    - Reset in-memory metrics
    - Restore SYSERROR_CONFIG_DIR and drop SYSERROR__* overrides
    """
    from syserror import metrics, platform  # local import
    from syserror.config import clear_config_cache

    prev = os.environ.get("SYSERROR_CONFIG_DIR")
    os.environ["SYSERROR_CONFIG_DIR"] = str(ROOT / "configs")
    clear_config_cache()
    platform.reset_for_tests()
    metrics.reset_for_tests()
    try:
        yield
    finally:
        for key in [k for k in os.environ if k.startswith("SYSERROR__")]:
            os.environ.pop(key, None)
        clear_config_cache()
        platform.reset_for_tests()
        if prev is None:
            os.environ.pop("SYSERROR_CONFIG_DIR", None)
        else:
            os.environ["SYSERROR_CONFIG_DIR"] = prev


class FakeMessageSource:
    """Scripted FormatMessageW stand-in.

    `texts` maps code -> full message. A lookup whose message does not fit
    in `size` chars fails with ERROR_INSUFFICIENT_BUFFER; unknown codes fail
    with `missing_error`.
    """

    def __init__(self, texts=None, missing_error=317):
        self.texts = dict(texts or {})
        self.missing_error = missing_error
        self.sizes = []
        self._last = 0

    def format_message(self, code, size):
        self.sizes.append(size)
        text = self.texts.get(code)
        if text is None:
            self._last = self.missing_error
            return None
        if len(text) + 1 > size:
            self._last = 122
            return None
        self._last = 0
        return text

    def last_error(self):
        return self._last


@pytest.fixture
def fake_source():
    return FakeMessageSource(
        {
            5: "Access is denied.\r\n",
            2: "The system cannot find the file specified.\r\n",
        }
    )


@pytest.fixture
def make_source():
    return FakeMessageSource
