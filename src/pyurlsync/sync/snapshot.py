"""Defaults snapshot: the omission oracle for outbound synchronization."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pyurlsync.sync.fields import SyncFieldSpec
from pyurlsync.sync.path import ABSENT, resolve


class DefaultsSnapshot(Mapping[str, Any]):
    """Immutable field name -> default value mapping for one store.

    Values are stored unserialized and deep-copied at capture time, so
    later in-place mutation of store values cannot move the baseline.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(copy.deepcopy(dict(values)))

    @classmethod
    def capture(cls, state: Mapping[str, Any], specs: Iterable[SyncFieldSpec]) -> DefaultsSnapshot:
        """Record the current value of every field present in *state*."""
        values: dict[str, Any] = {}
        for spec in specs:
            value = resolve(spec.name, state)
            if value is not ABSENT:
                values[spec.name] = value
        return cls(values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DefaultsSnapshot({dict(self._values)!r})"

    def serialized(self, spec: SyncFieldSpec) -> str | None:
        """Serialize the default for *spec*, or ``None`` when none was captured."""
        if spec.name not in self._values:
            return None
        return spec.encode(self._values[spec.name])
