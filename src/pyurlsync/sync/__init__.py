"""URL synchronization layer.

Inbound (URL -> state) runs once per store after navigation is ready;
outbound (state -> URL) runs on every mutation batch afterwards.
"""

from pyurlsync.sync.fields import Accepted, DecodeResult, Rejected, SyncConfiguration, SyncFieldSpec
from pyurlsync.sync.inbound import InboundResult, apply_presets, url_to_state
from pyurlsync.sync.lifecycle import UrlSyncBinding, UrlSyncPlugin
from pyurlsync.sync.outbound import compute_query, state_to_url
from pyurlsync.sync.path import ABSENT, resolve
from pyurlsync.sync.snapshot import DefaultsSnapshot

__all__ = [
    "ABSENT",
    "Accepted",
    "DecodeResult",
    "DefaultsSnapshot",
    "InboundResult",
    "Rejected",
    "SyncConfiguration",
    "SyncFieldSpec",
    "UrlSyncBinding",
    "UrlSyncPlugin",
    "apply_presets",
    "compute_query",
    "resolve",
    "state_to_url",
    "url_to_state",
]
