"""URL -> state synchronization.

Runs once per store after navigation is ready:

1. apply the application's preset overrides for the store (typed values,
   no codec involved)
2. capture the defaults snapshot, unless one was already taken
3. decode each configured query parameter into its field; rejected
   parameters are logged and stripped from the URL with a replace, and the
   field keeps its post-override default
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pyurlsync._redact import truncate_for_log
from pyurlsync.config import UrlSyncSettings
from pyurlsync.navigation import Navigation
from pyurlsync.store import Store
from pyurlsync.sync.fields import Accepted, Rejected, SyncConfiguration
from pyurlsync.sync.snapshot import DefaultsSnapshot

_logger = logging.getLogger(__name__)

PresetOverrides = Mapping[str, Mapping[str, Any]]


@dataclass
class InboundResult:
    """Outcome of one inbound run."""

    snapshot: DefaultsSnapshot
    snapshot_taken: bool = False
    overrides: dict[str, Any] = field(default_factory=dict)
    applied: dict[str, Any] = field(default_factory=dict)
    rejected: dict[str, Rejected] = field(default_factory=dict)


def apply_presets(store: Store, presets: PresetOverrides | None) -> dict[str, Any]:
    """Assign preset overrides for *store* directly; returns what was applied."""
    overrides = dict((presets or {}).get(store.id) or {})
    for key, value in overrides.items():
        store[key] = value
    return overrides


def url_to_state(
    store: Store,
    config: SyncConfiguration,
    navigation: Navigation,
    *,
    presets: PresetOverrides | None = None,
    snapshot: DefaultsSnapshot | None = None,
    settings: UrlSyncSettings | None = None,
) -> InboundResult:
    """Apply presets and URL parameters to *store*.

    Pass the snapshot from a previous run as *snapshot* to keep the
    original baseline; a new one is captured only when it is ``None``.
    """
    settings = settings or UrlSyncSettings()

    with store.batch():
        overrides = apply_presets(store, presets)

        snapshot_taken = snapshot is None
        if snapshot is None:
            snapshot = DefaultsSnapshot.capture(store.state, config.specs)
            _logger.debug("Captured defaults for store=%s fields=%s", store.id, list(snapshot))

        result = InboundResult(snapshot=snapshot, snapshot_taken=snapshot_taken, overrides=overrides)

        for spec in config.specs:
            query = dict(navigation.current_query())
            param = spec.param
            if param not in query:
                continue

            raw = query[param]
            _logger.debug(
                "Parse url param %s=%s",
                param,
                truncate_for_log(raw, max_string=settings.log_max_value),
            )
            outcome = spec.decode(raw)
            if isinstance(outcome, Accepted):
                store[spec.name] = outcome.value
                result.applied[spec.name] = outcome.value
                continue

            _logger.warning(
                "Invalid url param %s %s: %s",
                param,
                truncate_for_log(raw, max_string=settings.log_max_value),
                outcome.reason,
            )
            result.rejected[param] = outcome
            if settings.strip_invalid_params:
                del query[param]
                navigation.replace_query(query, safe=settings.safe_chars)

    return result
