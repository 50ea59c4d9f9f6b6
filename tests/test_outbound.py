from __future__ import annotations

from pyurlsync.codecs import bool_codec, list_codec, sync_field
from pyurlsync.config import UrlSyncSettings
from pyurlsync.navigation import MemoryNavigation
from pyurlsync.store import Store
from pyurlsync.sync.fields import SyncConfiguration, SyncFieldSpec
from pyurlsync.sync.inbound import url_to_state
from pyurlsync.sync.outbound import compute_query, state_to_url
from pyurlsync.sync.snapshot import DefaultsSnapshot

_TAGS = sync_field("tags", list_codec(None))
_ENABLED = sync_field("enabled", bool_codec())


def _config(*fields: SyncFieldSpec) -> SyncConfiguration:
    return SyncConfiguration(enabled=True, fields=fields)


def test_non_default_value_is_written_and_default_is_removed() -> None:
    store = Store("sat", {"tags": ["Weather"]})
    nav = MemoryNavigation("/", "?tags=Point,Label")
    config = _config(_TAGS)
    snapshot = url_to_state(store, config, nav).snapshot

    state_to_url(store.state, config, snapshot, nav)
    assert nav.current.search == "?tags=Point,Label"

    store["tags"] = ["Weather"]
    state_to_url(store.state, config, snapshot, nav)
    assert "tags" not in nav.current_query()
    assert nav.current.search == ""


def test_only_non_default_fields_remain() -> None:
    config = _config(_TAGS, _ENABLED)
    snapshot = DefaultsSnapshot({"tags": ["Weather"], "enabled": False})

    query = compute_query({"tags": ["Weather"], "enabled": True}, config, snapshot, {})

    assert query == {"enabled": "1"}


def test_unrelated_params_are_preserved() -> None:
    config = _config(_TAGS)
    snapshot = DefaultsSnapshot({"tags": []})

    query = compute_query({"tags": ["A"]}, config, snapshot, {"layers": "OSM", "tags": "old"})

    assert query == {"layers": "OSM", "tags": "A"}


def test_comparison_uses_field_serializer_on_both_sides() -> None:
    spec = SyncFieldSpec(name="zoom", serialize=lambda v: f"{float(v):.1f}")
    snapshot = DefaultsSnapshot({"zoom": 2})

    query = compute_query({"zoom": 2.0}, _config(spec), snapshot, {"zoom": "5.0"})

    assert query == {}


def test_field_without_snapshot_is_always_written() -> None:
    query = compute_query({"tags": ["Weather"]}, _config(_TAGS), None, {})

    assert query == {"tags": "Weather"}


def test_nested_name_is_read_through_path() -> None:
    spec = SyncFieldSpec(name="view.zoom", url_param="zoom")
    state = {"view": {"zoom": 3}}
    snapshot = DefaultsSnapshot.capture({"view": {"zoom": 2}}, [spec])

    query = compute_query(state, _config(spec), snapshot, {})

    assert snapshot["view.zoom"] == 2
    assert query == {"zoom": "3"}


def test_absent_field_removes_param() -> None:
    spec = SyncFieldSpec(name="view.zoom", url_param="zoom")

    query = compute_query({"view": 7}, _config(spec), None, {"zoom": "3"})

    assert query == {}


def test_each_update_is_a_new_history_entry() -> None:
    store = Store("sat", {"tags": ["Weather"]})
    nav = MemoryNavigation("/")
    config = _config(_TAGS)
    snapshot = DefaultsSnapshot.capture(store.state, config.specs)

    store["tags"] = ["A"]
    state_to_url(store.state, config, snapshot, nav)
    store["tags"] = ["A", "B"]
    state_to_url(store.state, config, snapshot, nav)

    assert nav.history_length == 3
    assert [entry.search for entry in nav.entries] == ["", "?tags=A", "?tags=A,B"]
    assert nav.back()
    assert nav.current_query() == {"tags": "A"}


def test_replace_mode_keeps_history_length() -> None:
    nav = MemoryNavigation("/")
    config = _config(_TAGS)

    state_to_url({"tags": ["A"]}, config, DefaultsSnapshot({"tags": []}), nav, settings=UrlSyncSettings(push_history=False))

    assert nav.history_length == 1
    assert nav.current.search == "?tags=A"


def test_special_characters_are_escaped_except_comma() -> None:
    nav = MemoryNavigation("/")
    spec = SyncFieldSpec(name="track", serialize=str)

    state_to_url({"track": "ISS (ZARYA), 25544&x"}, _config(spec), DefaultsSnapshot({"track": ""}), nav)

    assert nav.current.search == "?track=ISS+%28ZARYA%29,+25544%26x"
    assert nav.current_query() == {"track": "ISS (ZARYA), 25544&x"}


def test_safe_chars_setting_is_passed_to_navigation() -> None:
    nav = MemoryNavigation("/")

    state_to_url({"tags": ["A", "B"]}, _config(_TAGS), DefaultsSnapshot({"tags": []}), nav, settings=UrlSyncSettings(safe_chars=""))

    assert nav.current.search == "?tags=A%2CB"
