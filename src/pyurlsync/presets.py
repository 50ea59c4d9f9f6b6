"""Application presets selected by route path.

A preset carries the per-store preset overrides handed to
:class:`pyurlsync.sync.UrlSyncPlugin`, plus the page title and the TLE
sources the host loads for that route.
"""

from __future__ import annotations

import copy
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Preset(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    config: dict[str, dict[str, Any]] = Field(default_factory=dict, description="store id -> field -> value")
    tle_data: tuple[tuple[str, tuple[str, ...]], ...] = Field(
        default=(),
        description="(TLE file URL, tags) pairs loaded for this preset",
    )


def _groups(*names: tuple[str, str]) -> tuple[tuple[str, tuple[str, ...]], ...]:
    return tuple((f"data/tle/groups/{filename}.txt", (tag,)) for filename, tag in names)


PRESETS: dict[str, Preset] = {
    "default": Preset(
        title="Satellite Orbit Visualization",
        config={"sat": {"enabledTags": ["Weather"]}},
        tle_data=_groups(
            ("cubesat", "Cubesat"),
            ("globalstar", "Globalstar"),
            ("gnss", "GNSS"),
            ("iridium-NEXT", "IridiumNEXT"),
            ("last-30-days", "New"),
            ("oneweb", "OneWeb"),
            ("planet", "Planet"),
            ("resource", "Resource"),
            ("science", "Science"),
            ("spire", "Spire"),
            ("starlink", "Starlink"),
            ("stations", "Stations"),
            ("weather", "Weather"),
            ("eutelsat", "Eutelsat"),
        ),
    ),
    "move": Preset(
        title="MOVE Satellite Orbit Visualization",
        config={"sat": {"enabledTags": ["MOVE"]}},
        tle_data=(("data/tle/move.txt", ("MOVE",)),),
    ),
    "ot": Preset(
        title="OT Satellite Orbit Visualization",
        config={
            "sat": {
                "enabledTags": ["OT"],
                "enabledComponents": ["Point", "Label", "Orbit", "Sensor cone", "Ground track"],
                "overpassMode": "swath",
            },
            "cesium": {"layers": ["ArcGis"]},
        },
        tle_data=(
            ("data/tle/ot.txt", ("OT",)),
            ("data/tle/wfs.txt", ("WFS",)),
            ("data/tle/otc.txt", ("OTC",)),
            ("data/tle/groups/iridium-NEXT.txt", ("IridiumNEXT",)),
        ),
    ),
}


def route_name(path: str) -> str:
    """``"/ot.html"`` -> ``"ot"``; ``"/"`` -> ``""``."""
    return re.sub(r"\.html$", "", re.sub(r"^/", "", path))


def get_config_preset(path: str = "/") -> Preset:
    """Return the preset for *path*, falling back to ``default``."""
    name = route_name(path)
    if name != "default" and name in PRESETS:
        return PRESETS[name]
    return PRESETS["default"]


def preset_overrides(path: str = "/") -> dict[str, dict[str, Any]]:
    """Preset override mapping (store id -> field -> value) for *path*."""
    return copy.deepcopy(get_config_preset(path).config)
