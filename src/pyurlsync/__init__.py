"""pyurlsync - Keep observable state stores in sync with the URL query string."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyurlsync")
except PackageNotFoundError:
    __version__ = "0+local"
from pyurlsync.config import UrlSyncSettings
from pyurlsync.events import MutationKind, StoreMutation
from pyurlsync.exceptions import (
    CodecError,
    StoreDisposedError,
    UrlSyncConfigError,
    UrlSyncError,
)
from pyurlsync.navigation import MemoryNavigation, Navigation
from pyurlsync.query import build_search, encode_query, parse_query
from pyurlsync.store import Store, StoreDefinition, StoreRegistry
from pyurlsync.sync import (
    ABSENT,
    DefaultsSnapshot,
    SyncConfiguration,
    SyncFieldSpec,
    UrlSyncPlugin,
    resolve,
)

__all__ = [
    "__version__",
    "ABSENT",
    "CodecError",
    "DefaultsSnapshot",
    "MemoryNavigation",
    "MutationKind",
    "Navigation",
    "Store",
    "StoreDefinition",
    "StoreDisposedError",
    "StoreMutation",
    "StoreRegistry",
    "SyncConfiguration",
    "SyncFieldSpec",
    "UrlSyncConfigError",
    "UrlSyncError",
    "UrlSyncPlugin",
    "UrlSyncSettings",
    "build_search",
    "encode_query",
    "parse_query",
    "resolve",
]
