"""Read-only dotted path resolution into nested state mappings."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final


class _Absent:
    """Marker for a path that does not resolve."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()


def resolve(path: str | Sequence[str], obj: Any, separator: str = ".") -> Any:
    """Return the value at *path* inside *obj*, or :data:`ABSENT`.

    Each segment must name a key of a :class:`~collections.abc.Mapping`;
    a missing key or a non-mapping intermediate value yields ``ABSENT``.
    """
    segments = path.split(separator) if isinstance(path, str) else list(path)
    current = obj
    for segment in segments:
        if not isinstance(current, Mapping) or segment not in current:
            return ABSENT
        current = current[segment]
    return current
