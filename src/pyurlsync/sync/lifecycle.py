"""Store plugin wiring URL synchronization into the store lifecycle."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from pyurlsync.config import UrlSyncSettings
from pyurlsync.events import StoreMutation
from pyurlsync.exceptions import UrlSyncConfigError, UrlSyncError
from pyurlsync.navigation import Navigation
from pyurlsync.query import Query
from pyurlsync.store import Store, StoreDefinition
from pyurlsync.sync.fields import SyncConfiguration
from pyurlsync.sync.inbound import InboundResult, PresetOverrides, url_to_state
from pyurlsync.sync.outbound import state_to_url
from pyurlsync.sync.snapshot import DefaultsSnapshot

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UrlSyncBinding:
    """Per-store synchronization state owned by :class:`UrlSyncPlugin`."""

    store: Store
    config: SyncConfiguration
    snapshot: DefaultsSnapshot | None = None
    task: asyncio.Task[None] | None = None
    unsubscribe: Callable[[], None] | None = None
    inbound_runs: int = 0
    last_inbound: InboundResult | None = field(default=None, repr=False)

    @property
    def subscribed(self) -> bool:
        return self.unsubscribe is not None


class UrlSyncPlugin:
    """Attach URL synchronization to every store that declares it.

    Usage::

        navigation = MemoryNavigation("/", "?tags=Point,Label")
        registry = StoreRegistry()
        plugin = UrlSyncPlugin(navigation, presets={"sat": {"enabledTags": ["Weather"]}})
        registry.use(plugin)
        sat = registry.create("sat")
        navigation.mark_ready()
        await plugin.wait_synced("sat")

    For each configured store the plugin waits for navigation readiness,
    runs inbound synchronization once and only then subscribes outbound
    synchronization to the store's mutations. Stores must therefore be
    created while an event loop is running.
    """

    def __init__(
        self,
        navigation: Navigation,
        presets: PresetOverrides | None = None,
        *,
        settings: UrlSyncSettings | None = None,
    ) -> None:
        self._navigation = navigation
        self._presets = presets or {}
        self._settings = settings or UrlSyncSettings()
        self._bindings: dict[str, UrlSyncBinding] = {}

    def __call__(self, store: Store, definition: StoreDefinition) -> None:
        config = definition.urlsync
        if config is None or not config.is_active:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise UrlSyncConfigError(
                f"store {store.id!r} declares URL sync but was created outside a running event loop"
            ) from exc

        binding = UrlSyncBinding(store=store, config=config)
        self._bindings[store.id] = binding
        binding.task = loop.create_task(self._start(binding), name=f"urlsync-{store.id}")
        binding.task.add_done_callback(self._on_task_done)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def binding(self, store_id: str) -> UrlSyncBinding | None:
        return self._bindings.get(store_id)

    async def wait_synced(self, store_id: str) -> UrlSyncBinding:
        """Wait until inbound sync finished and outbound is subscribed."""
        binding = self._require(store_id)
        if binding.task is not None:
            await binding.task
        return binding

    def sync_inbound(self, store_id: str) -> InboundResult:
        """Run inbound synchronization for *store_id*.

        Repeated runs re-apply presets and URL values but keep the
        snapshot from the first run as the omission baseline.
        """
        binding = self._require(store_id)
        result = url_to_state(
            binding.store,
            binding.config,
            self._navigation,
            presets=self._presets,
            snapshot=binding.snapshot,
            settings=self._settings,
        )
        binding.snapshot = result.snapshot
        binding.inbound_runs += 1
        binding.last_inbound = result
        return result

    def sync_outbound(self, store_id: str) -> Query:
        """Write the store's current state to the URL immediately."""
        binding = self._require(store_id)
        return state_to_url(
            binding.store.state,
            binding.config,
            binding.snapshot,
            self._navigation,
            settings=self._settings,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, store_id: str) -> UrlSyncBinding:
        binding = self._bindings.get(store_id)
        if binding is None:
            raise UrlSyncError(f"store {store_id!r} has no URL sync binding")
        return binding

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.warning("URL sync failed for task %s: %s", task.get_name(), exc, exc_info=exc)

    async def _start(self, binding: UrlSyncBinding) -> None:
        await self._navigation.wait_ready()
        if binding.store.disposed:
            _logger.debug("Store %s disposed before navigation was ready", binding.store.id)
            return

        self.sync_inbound(binding.store.id)

        def _on_mutation(mutation: StoreMutation, _state: object) -> None:
            _logger.debug("Store %s mutated keys=%s", mutation.store_id, list(mutation.keys))
            self.sync_outbound(mutation.store_id)

        binding.unsubscribe = binding.store.subscribe(_on_mutation)
        _logger.debug("URL sync active for store=%s", binding.store.id)
