"""Reusable field codecs and validators.

Every codec here satisfies ``deserialize(serialize(v)) == v`` for the
values it is meant to carry (ground stations at 4-decimal precision).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pyurlsync.exceptions import CodecError
from pyurlsync.sync.fields import SyncFieldSpec

# A TLE line is exactly 69 characters; line 1 starts with "1 " and the
# 5-digit catalog number, line 2 with "2 " and the same.
TLE_LINE_LENGTH = 69
_TLE_LINE1 = re.compile(r"1 \d{5}")
_TLE_LINE2 = re.compile(r"2 \d{5}")


@dataclass(frozen=True, slots=True)
class Codec:
    serialize: Callable[[Any], str]
    deserialize: Callable[[str], Any]


def sync_field(
    name: str,
    codec: Codec | None = None,
    *,
    url: str | None = None,
    valid: Callable[[Any], bool] | None = None,
) -> SyncFieldSpec:
    """Build a :class:`SyncFieldSpec` from a codec."""
    kwargs: dict[str, Any] = {"name": name, "url_param": url, "valid": valid}
    if codec is not None:
        kwargs["serialize"] = codec.serialize
        kwargs["deserialize"] = codec.deserialize
    return SyncFieldSpec(**kwargs)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def bool_codec() -> Codec:
    """``True``/``False`` as ``"1"``/``"0"``. Anything but ``"1"`` is false."""
    return Codec(serialize=lambda v: "1" if v else "0", deserialize=lambda text: text == "1")


def bool_text_codec() -> Codec:
    """``True``/``False`` as ``"true"``/``"false"``."""
    return Codec(serialize=lambda v: "true" if v else "false", deserialize=lambda text: text == "true")


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


def list_codec(space: str | None = "-") -> Codec:
    """Comma-joined list of names.

    Spaces inside items are written as *space* (``None`` keeps them) and
    empty items are dropped on decode, so ``""`` decodes to ``[]``.
    """

    def _serialize(values: Sequence[str]) -> str:
        joined = ",".join(values)
        return joined.replace(" ", space) if space else joined

    def _deserialize(text: str) -> list[str]:
        if space:
            text = text.replace(space, " ")
        return [item for item in text.split(",") if item]

    return Codec(serialize=_serialize, deserialize=_deserialize)


def names_with_prefix(allowed: Collection[str], *, separator: str = "_") -> Callable[[Sequence[str]], bool]:
    """Validator accepting lists whose items start with an allowed name.

    ``"ArcGis_2"`` is accepted when ``"ArcGis"`` is allowed; the suffix
    after *separator* is free-form.
    """
    allowed_names = frozenset(allowed)

    def _valid(values: Sequence[str]) -> bool:
        return all(item.split(separator)[0] in allowed_names for item in values)

    return _valid


def non_empty(values: Sequence[Any]) -> bool:
    return len(values) > 0


# ---------------------------------------------------------------------------
# Ground stations
# ---------------------------------------------------------------------------


class GroundStation(BaseModel):
    """Observer position on the ground.

    ``_`` and ``,`` separate entries and coordinates in the URL, so they
    are not allowed in ``name``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)
    name: str | None = Field(default=None, pattern=r"^[^_,]*$")


def _format_ground_station(gs: GroundStation) -> str:
    text = f"{gs.lat:.4f},{gs.lon:.4f}"
    if gs.name:
        text = f"{text},{gs.name}"
    return text


def _parse_ground_station(text: str) -> GroundStation:
    parts = text.split(",")
    if len(parts) < 2:
        raise CodecError(f"ground station needs lat,lon: {text!r}", text=text)
    try:
        return GroundStation(
            lat=float(parts[0]),
            lon=float(parts[1]),
            name=parts[2] if len(parts) > 2 and parts[2] else None,
        )
    except (ValueError, ValidationError) as exc:
        raise CodecError(f"invalid ground station {text!r}: {exc}", text=text) from exc


def ground_station_codec() -> Codec:
    """Ground stations as ``lat,lon[,name]`` entries joined by ``_``."""

    def _serialize(stations: Sequence[GroundStation]) -> str:
        return "_".join(_format_ground_station(gs) for gs in stations)

    def _deserialize(text: str) -> list[GroundStation]:
        if not text:
            return []
        return [_parse_ground_station(part) for part in text.split("_")]

    return Codec(serialize=_serialize, deserialize=_deserialize)


# ---------------------------------------------------------------------------
# Two-line element sets
# ---------------------------------------------------------------------------


def parse_tles(text: str) -> list[str]:
    """Split concatenated TLE sets into ``"[name\\n]line1\\nline2"`` strings.

    Sets are located by their line markers, so no separator is needed
    between them and newlines flattened to spaces are tolerated. Parsing
    stops at the first set without a line 2.
    """
    tles: list[str] = []
    buffer = text.strip()

    while buffer:
        line1_match = _TLE_LINE1.search(buffer)
        if line1_match is None:
            break
        line1_start = line1_match.start()
        name = buffer[:line1_start].strip()
        line1_end = line1_start + TLE_LINE_LENGTH
        line1 = buffer[line1_start:line1_end]

        line2_match = _TLE_LINE2.search(buffer, line1_end)
        if line2_match is None:
            break
        line2_start = line2_match.start()
        line2 = buffer[line2_start : line2_start + TLE_LINE_LENGTH]

        tles.append(f"{name}\n{line1}\n{line2}" if name else f"{line1}\n{line2}")
        buffer = buffer[line2_start + TLE_LINE_LENGTH :].strip()

    return tles


def tle_codec() -> Codec:
    """Custom satellites as directly concatenated TLE sets."""

    def _serialize(tles: Sequence[str] | None) -> str:
        if not tles:
            return ""
        return "".join(tles)

    def _deserialize(text: str) -> list[str]:
        if not text:
            return []
        return parse_tles(text)

    return Codec(serialize=_serialize, deserialize=_deserialize)
