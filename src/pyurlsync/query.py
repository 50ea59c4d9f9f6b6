"""Query string parsing and serialization.

Parsing keeps repeated keys as lists and bare keys (``?flag``) as ``None``
so the inbound synchronizer can tell a single text value from anything
else. Serialization percent-encodes with ``urllib.parse`` but leaves the
characters in ``safe`` literal (a comma by default).
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote_plus, unquote_plus

QueryValue = str | list[str | None] | None
"""A decoded query value: one string, several values, or a bare key."""

Query = dict[str, QueryValue]


def parse_query(query_string: str) -> Query:
    """Parse ``query_string`` (with or without a leading ``?``) into a dict.

    A key that appears more than once maps to the list of its values in
    order of appearance.
    """
    text = query_string[1:] if query_string.startswith("?") else query_string
    parsed: Query = {}
    if not text:
        return parsed

    for part in text.split("&"):
        if not part:
            continue
        if "=" in part:
            raw_key, raw_value = part.split("=", 1)
            value: str | None = unquote_plus(raw_value)
        else:
            raw_key, value = part, None
        key = unquote_plus(raw_key)

        if key not in parsed:
            parsed[key] = value
            continue
        existing = parsed[key]
        if isinstance(existing, list):
            existing.append(value)
        else:
            parsed[key] = [existing, value]
    return parsed


def _encode_pair(key: str, value: str | None, safe: str) -> str:
    encoded_key = quote_plus(key, safe=safe)
    if value is None:
        return encoded_key
    return f"{encoded_key}={quote_plus(value, safe=safe)}"


def encode_query(query: Mapping[str, QueryValue], *, safe: str = ",") -> str:
    """Serialize *query* without the leading ``?``.

    >>> encode_query({"tags": "Point,Label", "q": "a b"})
    'tags=Point,Label&q=a+b'
    """
    parts: list[str] = []
    for key, value in query.items():
        if isinstance(value, list):
            parts.extend(_encode_pair(key, item, safe) for item in value)
        else:
            parts.append(_encode_pair(key, value, safe))
    return "&".join(parts)


def build_search(query: Mapping[str, QueryValue], *, safe: str = ",") -> str:
    """Return the ``location.search`` form of *query*: ``""`` or ``"?..."``."""
    encoded = encode_query(query, safe=safe)
    return f"?{encoded}" if encoded else ""
