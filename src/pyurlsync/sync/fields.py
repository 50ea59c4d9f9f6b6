"""Field descriptors for URL synchronization.

A :class:`SyncFieldSpec` describes how one store field maps to one query
parameter. Decoding never raises: :meth:`SyncFieldSpec.decode` returns an
:class:`Accepted` or :class:`Rejected` result and the inbound synchronizer
branches on that.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pyurlsync.exceptions import UrlSyncConfigError
from pyurlsync.query import QueryValue


def _default_serialize(value: Any) -> str:
    return str(value)


def _default_deserialize(text: str) -> Any:
    return str(text)


@dataclass(frozen=True, slots=True)
class Accepted:
    value: Any


@dataclass(frozen=True, slots=True)
class Rejected:
    reason: str
    error: Exception | None = None


DecodeResult = Accepted | Rejected


class SyncFieldSpec(BaseModel):
    """One synchronized field.

    Parameters
    ----------
    name : str
        State field name. Dotted names are resolved for reading only.
    url_param : str or None
        Query parameter name. Defaults to ``name``.
    serialize : callable
        Encode the live value to query text. Defaults to ``str``.
    deserialize : callable
        Decode query text to a value. Defaults to returning the text.
    valid : callable or None
        Acceptance predicate applied after a successful decode.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    url_param: str | None = None
    serialize: Callable[[Any], str] = Field(default=_default_serialize)
    deserialize: Callable[[str], Any] = Field(default=_default_deserialize)
    valid: Callable[[Any], bool] | None = None

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name

    @property
    def param(self) -> str:
        """Effective query parameter name."""
        return self.url_param or self.name

    def encode(self, value: Any) -> str:
        return self.serialize(value)

    def decode(self, raw: QueryValue) -> DecodeResult:
        """Decode and validate one raw query value."""
        if not isinstance(raw, str):
            return Rejected("query param is not a single string")
        try:
            value = self.deserialize(raw)
        except Exception as exc:
            return Rejected(f"deserialize failed: {exc}", error=exc)
        if self.valid is not None:
            try:
                accepted = self.valid(value)
            except Exception as exc:
                return Rejected(f"validation raised: {exc}", error=exc)
            if not accepted:
                return Rejected("validation failed")
        return Accepted(value)


class SyncConfiguration(BaseModel):
    """Synchronization configuration declared by a store definition.

    Synchronization is opt-in: a configuration with neither ``enabled``
    nor a ``fields`` list is inactive. An explicit empty ``fields`` list
    still counts as declared.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool | None = None
    fields: tuple[SyncFieldSpec, ...] | None = None

    @model_validator(mode="after")
    def _check_unique(self) -> SyncConfiguration:
        names: set[str] = set()
        params: set[str] = set()
        for spec in self.specs:
            if spec.name in names:
                raise UrlSyncConfigError(f"duplicate sync field {spec.name!r}")
            if spec.param in params:
                raise UrlSyncConfigError(f"duplicate url param {spec.param!r}")
            names.add(spec.name)
            params.add(spec.param)
        return self

    @property
    def is_active(self) -> bool:
        return bool(self.enabled) or self.fields is not None

    @property
    def specs(self) -> tuple[SyncFieldSpec, ...]:
        return self.fields or ()

    def field(self, name: str) -> SyncFieldSpec | None:
        for spec in self.specs:
            if spec.name == name:
                return spec
        return None
