"""Custom exception hierarchy for pyurlsync."""

from __future__ import annotations


class UrlSyncError(Exception):
    """Base exception for all pyurlsync errors."""


class UrlSyncConfigError(UrlSyncError):
    """Invalid or inconsistent synchronization configuration.

    Raised for duplicate field names or URL parameters inside one store,
    and for store ids that were never defined on a registry.
    """


class CodecError(UrlSyncError, ValueError):
    """A built-in codec could not decode query text."""

    def __init__(self, message: str, *, text: str = "") -> None:
        self.text = text
        super().__init__(message)


class StoreDisposedError(UrlSyncError):
    """Mutation attempted on a store that has already been disposed."""
