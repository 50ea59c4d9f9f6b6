"""Store mutation events.

Every write to a :class:`pyurlsync.store.Store` is reported to subscribers
as one of these events, one per mutation batch.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MutationKind(StrEnum):
    DIRECT = "direct"
    PATCH = "patch"


class StoreMutation(BaseModel):
    """A batch of field writes applied to one store."""

    model_config = ConfigDict(frozen=True)

    store_id: str = Field(..., description="Id of the mutated store")
    kind: MutationKind
    keys: tuple[str, ...] = Field(default=(), description="Fields written in this batch, in write order")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("store_id")
    @classmethod
    def _normalize_store_id(cls, value: str) -> str:
        store_id = value.strip()
        if not store_id:
            raise ValueError("store_id must be non-empty")
        return store_id
