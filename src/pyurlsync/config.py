"""Runtime settings for pyurlsync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class UrlSyncSettings:
    """Synchronization settings.

    Parameters
    ----------
    safe_chars : str
        Characters left unescaped when a query is serialized. The comma
        stays literal so comma-separated list fields remain readable.
    log_max_value : int
        Raw query values longer than this are truncated in log output.
    strip_invalid_params : bool
        Remove rejected parameters from the URL (via a non-history
        replace) during inbound synchronization.
    push_history : bool
        Write outbound updates as new history entries. When disabled the
        current entry is replaced instead.
    """

    safe_chars: str = ","
    log_max_value: int = 256
    strip_invalid_params: bool = True
    push_history: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> UrlSyncSettings:
        """Create settings from ``URLSYNC_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        kwargs: dict[str, Any] = {}

        safe_env = env.get("URLSYNC_SAFE_CHARS")
        if safe_env is not None and "safe_chars" not in overrides:
            kwargs["safe_chars"] = safe_env

        max_env = env.get("URLSYNC_LOG_MAX_VALUE")
        if max_env is not None and "log_max_value" not in overrides:
            kwargs["log_max_value"] = int(max_env)

        if "strip_invalid_params" not in overrides:
            kwargs["strip_invalid_params"] = _env_bool(env.get("URLSYNC_STRIP_INVALID"), True)

        if "push_history" not in overrides:
            kwargs["push_history"] = _env_bool(env.get("URLSYNC_PUSH_HISTORY"), True)

        kwargs.update(overrides)
        return cls(**kwargs)
