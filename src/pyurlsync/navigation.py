"""Navigation handle consumed by the synchronizers.

:class:`Navigation` is the structural interface the sync layer depends on.
:class:`MemoryNavigation` is an in-process implementation that keeps an
explicit history stack, so hosts without a real browser (and the test
suite) can observe pushes and replacements.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from pyurlsync.query import Query, QueryValue, build_search, parse_query

_logger = logging.getLogger(__name__)


@runtime_checkable
class Navigation(Protocol):
    """Read and write the query string of the current location."""

    def current_query(self) -> Mapping[str, QueryValue]: ...

    def replace_query(self, query: Mapping[str, QueryValue], *, safe: str | None = None) -> None: ...

    def push_query(self, query: Mapping[str, QueryValue], *, safe: str | None = None) -> None: ...

    async def wait_ready(self) -> None: ...


class HistoryEntry(BaseModel):
    """One navigable location."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = "/"
    search: str = ""

    @property
    def href(self) -> str:
        return f"{self.path}{self.search}"


class MemoryNavigation:
    """In-memory history with browser-like push/replace semantics.

    The navigation starts *not ready*; call :meth:`mark_ready` once the
    initial location is resolved. Synchronizers awaiting
    :meth:`wait_ready` resume at that point.
    """

    def __init__(self, path: str = "/", search: str = "", *, safe: str = ",") -> None:
        if search and not search.startswith("?"):
            search = f"?{search}"
        self._safe = safe
        self._entries: list[HistoryEntry] = [HistoryEntry(path=path, search=search)]
        self._index = 0
        self._ready = asyncio.Event()

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    def mark_ready(self) -> None:
        _logger.debug("Navigation ready at %s", self.current.href)
        self._ready.set()

    async def wait_ready(self) -> None:
        await self._ready.wait()

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------

    @property
    def current(self) -> HistoryEntry:
        return self._entries[self._index]

    @property
    def history_length(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def current_query(self) -> Query:
        """Return a fresh, mutable copy of the current query."""
        return parse_query(self.current.search)

    def replace_query(self, query: Mapping[str, QueryValue], *, safe: str | None = None) -> None:
        """Rewrite the current entry without adding to history.

        *safe* overrides the characters left unescaped for this write.
        """
        entry = HistoryEntry(path=self.current.path, search=self._search(query, safe))
        self._entries[self._index] = entry
        _logger.debug("Replaced location with %s", entry.href)

    def push_query(self, query: Mapping[str, QueryValue], *, safe: str | None = None) -> None:
        """Add a new history entry, dropping any forward entries."""
        entry = HistoryEntry(path=self.current.path, search=self._search(query, safe))
        del self._entries[self._index + 1 :]
        self._entries.append(entry)
        self._index = len(self._entries) - 1
        _logger.debug("Pushed location %s", entry.href)

    def _search(self, query: Mapping[str, QueryValue], safe: str | None) -> str:
        return build_search(query, safe=self._safe if safe is None else safe)

    def navigate(self, path: str, search: str = "") -> None:
        """Push a new location with a different path."""
        if search and not search.startswith("?"):
            search = f"?{search}"
        del self._entries[self._index + 1 :]
        self._entries.append(HistoryEntry(path=path, search=search))
        self._index = len(self._entries) - 1

    def back(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        return True

    def forward(self) -> bool:
        if self._index >= len(self._entries) - 1:
            return False
        self._index += 1
        return True
