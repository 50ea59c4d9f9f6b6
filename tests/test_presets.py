from __future__ import annotations

import pytest

from pyurlsync.presets import PRESETS, get_config_preset, preset_overrides, route_name


@pytest.mark.parametrize(
    ("path", "name"),
    [("/", ""), ("/ot", "ot"), ("/ot.html", "ot"), ("/move.html", "move"), ("index.html", "index")],
)
def test_route_name(path: str, name: str) -> None:
    assert route_name(path) == name


def test_known_routes_select_their_preset() -> None:
    assert get_config_preset("/ot") is PRESETS["ot"]
    assert get_config_preset("/move.html") is PRESETS["move"]


def test_unknown_route_falls_back_to_default() -> None:
    assert get_config_preset("/") is PRESETS["default"]
    assert get_config_preset("/nowhere") is PRESETS["default"]


def test_preset_overrides_are_copies() -> None:
    overrides = preset_overrides("/ot")
    overrides["sat"]["enabledTags"].append("Extra")

    assert PRESETS["ot"].config["sat"]["enabledTags"] == ["OT"]
    assert preset_overrides("/ot")["cesium"] == {"layers": ["ArcGis"]}


def test_default_preset_tle_sources() -> None:
    sources = dict(PRESETS["default"].tle_data)

    assert sources["data/tle/groups/weather.txt"] == ("Weather",)
    assert len(sources) == 14
