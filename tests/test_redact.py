from __future__ import annotations

from pyurlsync._redact import truncate_for_log


def test_truncate_for_log_shortens_long_strings() -> None:
    redacted = truncate_for_log({"sat": "x" * 600}, max_string=10)

    assert redacted["sat"].startswith("x" * 10)
    assert "<truncated 590 chars>" in redacted["sat"]


def test_truncate_for_log_walks_lists_and_keeps_scalars() -> None:
    assert truncate_for_log(["ab", None, 3, True], max_string=1) == ["a…<truncated 1 chars>", None, 3, True]
    assert truncate_for_log(object()).startswith("<object object")
