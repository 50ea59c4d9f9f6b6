"""Application store definitions: satellite selection and globe view."""

from __future__ import annotations

from typing import Any

from pyurlsync.codecs import (
    bool_codec,
    bool_text_codec,
    ground_station_codec,
    list_codec,
    names_with_prefix,
    sync_field,
    tle_codec,
)
from pyurlsync.store import StoreRegistry
from pyurlsync.sync.fields import SyncConfiguration

IMAGERY_LAYERS = ("Offline", "OfflineHighres", "ArcGis", "OSM", "Topo", "BlackMarble", "Tiles", "GOES-IR", "Nextrad")
SKY_MAPS = ("MilkyWay", "Tycho2K", "HipTyc16K", "Constellations")
LOCAL_DEV_SKY_MAPS = ("MilkyWay8K", "Starmap8K")


def sat_state() -> dict[str, Any]:
    return {
        "enabledComponents": ["Point", "Label"],
        "availableSatellitesByTag": [],
        "availableTags": [],
        "enabledSatellites": [],
        "enabledTags": [],
        "groundStations": [],
        "trackedSatellite": "",
        "overpassMode": "elevation",
        "hideSunlightPasses": True,
        "showOnlyLitPasses": True,
        "useLocalTime": False,
        "enableSwathPasses": False,
        "debugConsoleLog": False,
        "customSatellites": [],
    }


SAT_URLSYNC = SyncConfiguration(
    enabled=True,
    fields=(
        sync_field("enabledComponents", list_codec("-"), url="elements"),
        # Satellite names contain dashes, so spaces travel as "~".
        sync_field("enabledSatellites", list_codec("~"), url="sats"),
        sync_field("enabledTags", list_codec("-"), url="tags"),
        sync_field("groundStations", ground_station_codec(), url="gs"),
        sync_field("trackedSatellite", url="track"),
        sync_field("overpassMode", url="overpass"),
        sync_field("hideSunlightPasses", bool_codec(), url="hideLight"),
        sync_field("showOnlyLitPasses", bool_codec(), url="onlyLit"),
        sync_field("useLocalTime", bool_codec(), url="localTime"),
        sync_field("customSatellites", tle_codec(), url="sat"),
    ),
)


def cesium_state() -> dict[str, Any]:
    return {
        "layers": ["OfflineHighres"],
        "skyMaps": ["Tycho2K_1"],
        "terrainProvider": "None",
        "sceneMode": "3D",
        "cameraMode": "Fixed",
        "qualityPreset": "high",
        "background": True,
        "showFps": False,
        "pickMode": False,
    }


def cesium_urlsync(*, local_dev: bool = False) -> SyncConfiguration:
    """Globe view sync configuration; *local_dev* unlocks the large sky maps."""
    sky_maps = SKY_MAPS + LOCAL_DEV_SKY_MAPS if local_dev else SKY_MAPS
    return SyncConfiguration(
        enabled=True,
        fields=(
            sync_field("layers", list_codec(None), url="layers", valid=names_with_prefix(IMAGERY_LAYERS)),
            sync_field("skyMaps", list_codec(None), url="sky", valid=names_with_prefix(sky_maps)),
            sync_field("terrainProvider", url="terrain"),
            sync_field("sceneMode", url="scene"),
            sync_field("cameraMode", url="camera"),
            sync_field("qualityPreset", url="quality"),
            sync_field("showFps", bool_text_codec(), url="fps"),
            sync_field("background", bool_text_codec(), url="bg"),
        ),
    )


def register_default_stores(registry: StoreRegistry, *, local_dev: bool = False) -> None:
    """Define the ``sat`` and ``cesium`` stores on *registry*."""
    registry.define("sat", sat_state, urlsync=SAT_URLSYNC)
    registry.define("cesium", cesium_state, urlsync=cesium_urlsync(local_dev=local_dev))
