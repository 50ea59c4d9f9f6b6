from __future__ import annotations

import pytest

from pyurlsync.events import MutationKind, StoreMutation
from pyurlsync.exceptions import StoreDisposedError, UrlSyncConfigError
from pyurlsync.store import Store, StoreRegistry


def _collect(store: Store) -> list[StoreMutation]:
    seen: list[StoreMutation] = []
    store.subscribe(lambda mutation, _state: seen.append(mutation))
    return seen


def test_direct_write_notifies_once() -> None:
    store = Store("sat", {"tags": []})
    seen = _collect(store)

    store["tags"] = ["A"]

    assert store["tags"] == ["A"]
    assert len(seen) == 1
    assert seen[0].kind == MutationKind.DIRECT
    assert seen[0].keys == ("tags",)
    assert seen[0].store_id == "sat"


def test_patch_is_one_batch() -> None:
    store = Store("sat")
    seen = _collect(store)

    store.patch({"a": 1, "b": 2})

    assert [m.keys for m in seen] == [("a", "b")]
    assert seen[0].kind == MutationKind.PATCH


def test_nested_batches_coalesce() -> None:
    store = Store("sat")
    seen = _collect(store)

    with store.batch():
        store["a"] = 1
        with store.batch():
            store["b"] = 2
        store.patch({"a": 3})

    assert [m.keys for m in seen] == [("a", "b")]
    assert store.state == {"a": 3, "b": 2}


def test_empty_batch_does_not_notify() -> None:
    store = Store("sat")
    seen = _collect(store)

    with store.batch():
        pass

    assert seen == []


def test_state_view_is_read_only() -> None:
    store = Store("sat", {"a": 1})

    with pytest.raises(TypeError):
        store.state["a"] = 2  # type: ignore[index]


def test_failing_subscriber_does_not_block_others() -> None:
    store = Store("sat")

    def _boom(_mutation, _state) -> None:
        raise RuntimeError("boom")

    store.subscribe(_boom)
    seen = _collect(store)

    store["a"] = 1

    assert len(seen) == 1


def test_unsubscribe_stops_notifications() -> None:
    store = Store("sat")
    seen: list[StoreMutation] = []
    unsubscribe = store.subscribe(lambda mutation, _state: seen.append(mutation))

    unsubscribe()
    unsubscribe()
    store["a"] = 1

    assert seen == []


def test_dispose_rejects_writes() -> None:
    store = Store("sat")
    seen = _collect(store)
    store.dispose()

    with pytest.raises(StoreDisposedError):
        store["a"] = 1
    assert seen == []
    assert store.disposed


def test_snapshot_is_deep_copy() -> None:
    store = Store("sat", {"tags": ["A"]})

    snap = store.snapshot()
    snap["tags"].append("B")

    assert store["tags"] == ["A"]


def test_registry_creates_singletons_and_runs_plugins() -> None:
    registry = StoreRegistry()
    calls = []
    registry.use(lambda store, definition: calls.append((store.id, definition.store_id)))
    registry.define("sat", lambda: {"tags": []})

    first = registry.create("sat")
    second = registry.create("sat")

    assert first is second
    assert calls == [("sat", "sat")]
    assert registry.get("sat") is first


def test_registry_recreates_disposed_store() -> None:
    registry = StoreRegistry()
    registry.define("sat", lambda: {"tags": []})
    first = registry.create("sat")
    first.dispose()

    assert registry.create("sat") is not first


def test_registry_state_factory_gives_fresh_state() -> None:
    registry = StoreRegistry()
    registry.define("a", lambda: {"tags": []})
    registry.define("b", lambda: {"tags": []})

    registry.create("a")["tags"].append("x")

    assert registry.create("b")["tags"] == []


def test_registry_rejects_duplicate_and_unknown_ids() -> None:
    registry = StoreRegistry()
    registry.define("sat", dict)

    with pytest.raises(UrlSyncConfigError):
        registry.define("sat", dict)
    with pytest.raises(UrlSyncConfigError):
        registry.create("cesium")


def test_mutation_event_requires_store_id() -> None:
    with pytest.raises(ValueError):
        StoreMutation(store_id="  ", kind=MutationKind.DIRECT)
