"""State -> URL synchronization.

The query is rebuilt from the navigation's current query on every run so
parameters owned by other stores survive. A field whose serialized live
value equals its serialized default is removed; anything else is set.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyurlsync._redact import truncate_for_log
from pyurlsync.config import UrlSyncSettings
from pyurlsync.navigation import Navigation
from pyurlsync.query import Query, QueryValue
from pyurlsync.sync.fields import SyncConfiguration
from pyurlsync.sync.path import ABSENT, resolve
from pyurlsync.sync.snapshot import DefaultsSnapshot

_logger = logging.getLogger(__name__)


def compute_query(
    state: Mapping[str, Any],
    config: SyncConfiguration,
    snapshot: DefaultsSnapshot | None,
    base: Mapping[str, QueryValue],
) -> Query:
    """Return *base* updated with the minimal encoding of *state*."""
    query: Query = dict(base)
    for spec in config.specs:
        param = spec.param
        value = resolve(spec.name, state)
        if value is ABSENT:
            query.pop(param, None)
            continue

        serialized = spec.encode(value)
        default = snapshot.serialized(spec) if snapshot is not None else None
        if default is not None and default == serialized:
            query.pop(param, None)
        else:
            query[param] = serialized
    return query


def state_to_url(
    state: Mapping[str, Any],
    config: SyncConfiguration,
    snapshot: DefaultsSnapshot | None,
    navigation: Navigation,
    *,
    settings: UrlSyncSettings | None = None,
) -> Query:
    """Write the minimal query for *state* to *navigation*."""
    settings = settings or UrlSyncSettings()
    query = compute_query(state, config, snapshot, navigation.current_query())
    _logger.debug(
        "State update fields=%s query=%s",
        [spec.name for spec in config.specs],
        truncate_for_log(query, max_string=settings.log_max_value),
    )
    if settings.push_history:
        navigation.push_query(query, safe=settings.safe_chars)
    else:
        navigation.replace_query(query, safe=settings.safe_chars)
    return query
