"""Observable in-memory state stores.

A :class:`Store` owns a flat mapping of field values and notifies
subscribers after each mutation batch. A :class:`StoreRegistry` creates
stores from definitions and runs registered plugins on every new store;
the URL synchronization layer attaches through that hook.
"""

from __future__ import annotations

import contextlib
import copy
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pyurlsync.events import MutationKind, StoreMutation
from pyurlsync.exceptions import StoreDisposedError, UrlSyncConfigError

if TYPE_CHECKING:
    from pyurlsync.sync.fields import SyncConfiguration

_logger = logging.getLogger(__name__)

Subscriber = Callable[[StoreMutation, Mapping[str, Any]], None]
Plugin = Callable[["Store", "StoreDefinition"], None]


class Store:
    """Named, mutable, observable state container.

    Subscribers receive a :class:`StoreMutation` and a read-only view of
    the state. Writes made inside :meth:`batch` (or through :meth:`patch`)
    are coalesced into a single notification.
    """

    def __init__(self, store_id: str, state: Mapping[str, Any] | None = None) -> None:
        self._id = store_id
        self._state: dict[str, Any] = dict(state or {})
        self._subscribers: list[Subscriber] = []
        self._batch_depth = 0
        self._batch_keys: list[str] = []
        self._batch_kind = MutationKind.DIRECT
        self._disposed = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def state(self) -> Mapping[str, Any]:
        """Read-only live view of the state."""
        return MappingProxyType(self._state)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __getitem__(self, key: str) -> Any:
        return self._state[key]

    def __contains__(self, key: object) -> bool:
        return key in self._state

    def __setitem__(self, key: str, value: Any) -> None:
        with self._mutation(MutationKind.DIRECT):
            self._write(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the current state."""
        return copy.deepcopy(self._state)

    def patch(self, values: Mapping[str, Any]) -> None:
        """Write several fields as one mutation batch."""
        with self._mutation(MutationKind.PATCH):
            for key, value in values.items():
                self._write(key, value)

    @contextlib.contextmanager
    def batch(self) -> Iterator[Store]:
        """Coalesce every write inside the block into one notification."""
        with self._mutation(MutationKind.PATCH):
            yield self

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for mutation batches; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._subscribers.remove(callback)

        return _unsubscribe

    def dispose(self) -> None:
        """Drop all subscribers and refuse further writes."""
        self._subscribers.clear()
        self._disposed = True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _write(self, key: str, value: Any) -> None:
        if self._disposed:
            raise StoreDisposedError(f"store {self._id!r} has been disposed")
        self._state[key] = value
        if key not in self._batch_keys:
            self._batch_keys.append(key)

    @contextlib.contextmanager
    def _mutation(self, kind: MutationKind) -> Iterator[None]:
        if self._batch_depth == 0:
            self._batch_kind = kind
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                keys, self._batch_keys = tuple(self._batch_keys), []
                if keys:
                    self._notify(StoreMutation(store_id=self._id, kind=self._batch_kind, keys=keys))

    def _notify(self, mutation: StoreMutation) -> None:
        view = self.state
        for callback in list(self._subscribers):
            try:
                callback(mutation, view)
            except Exception:
                _logger.debug("Store subscriber failed for store=%s", self._id, exc_info=True)


@dataclass(frozen=True, slots=True)
class StoreDefinition:
    """How to build one store: its id, initial state and optional URL sync."""

    store_id: str
    state_factory: Callable[[], dict[str, Any]]
    urlsync: SyncConfiguration | None = None


class StoreRegistry:
    """Create stores from definitions and run plugins on each new store.

    Usage::

        registry = StoreRegistry()
        registry.use(UrlSyncPlugin(navigation))
        registry.define("sat", lambda: {"enabledTags": []}, urlsync=config)
        sat = registry.create("sat")
    """

    def __init__(self) -> None:
        self._definitions: dict[str, StoreDefinition] = {}
        self._stores: dict[str, Store] = {}
        self._plugins: list[Plugin] = []

    def use(self, plugin: Plugin) -> None:
        """Register *plugin*; it runs for every store created afterwards."""
        self._plugins.append(plugin)

    def define(
        self,
        store_id: str,
        state_factory: Callable[[], dict[str, Any]],
        *,
        urlsync: SyncConfiguration | None = None,
    ) -> StoreDefinition:
        if store_id in self._definitions:
            raise UrlSyncConfigError(f"store {store_id!r} is already defined")
        definition = StoreDefinition(store_id=store_id, state_factory=state_factory, urlsync=urlsync)
        self._definitions[store_id] = definition
        return definition

    def create(self, store_id: str) -> Store:
        """Return the store for *store_id*, creating it on first use."""
        existing = self._stores.get(store_id)
        if existing is not None and not existing.disposed:
            return existing

        definition = self._definitions.get(store_id)
        if definition is None:
            raise UrlSyncConfigError(f"store {store_id!r} is not defined")

        store = Store(store_id, definition.state_factory())
        self._stores[store_id] = store
        for plugin in self._plugins:
            plugin(store, definition)
        return store

    def get(self, store_id: str) -> Store | None:
        return self._stores.get(store_id)
