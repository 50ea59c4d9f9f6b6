"""Helpers for safe debug logging.

Query values can be arbitrarily long (concatenated TLE sets end up in a
single parameter). This module shortens them before they reach a log line.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def truncate_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a shortened copy of *value* suitable for log output."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated {len(value) - max_string} chars>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, Mapping):
        return {str(k): truncate_for_log(v, max_string=max_string, _depth=_depth + 1) for k, v in value.items()}

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [truncate_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
