from __future__ import annotations

import pytest

from pyurlsync.config import UrlSyncSettings


def test_defaults() -> None:
    settings = UrlSyncSettings()

    assert settings.safe_chars == ","
    assert settings.strip_invalid_params is True
    assert settings.push_history is True


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("URLSYNC_SAFE_CHARS", ",:")
    monkeypatch.setenv("URLSYNC_LOG_MAX_VALUE", "32")
    monkeypatch.setenv("URLSYNC_STRIP_INVALID", "off")
    monkeypatch.setenv("URLSYNC_PUSH_HISTORY", "garbage")

    settings = UrlSyncSettings.from_env()

    assert settings.safe_chars == ",:"
    assert settings.log_max_value == 32
    assert settings.strip_invalid_params is False
    assert settings.push_history is True


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("URLSYNC_PUSH_HISTORY", "0")
    monkeypatch.setenv("URLSYNC_LOG_MAX_VALUE", "32")

    settings = UrlSyncSettings.from_env(push_history=True, log_max_value=8)

    assert settings.push_history is True
    assert settings.log_max_value == 8
