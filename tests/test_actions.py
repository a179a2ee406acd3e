"""Tests for action normalization."""

from __future__ import annotations

from remote_layout.actions import (
    ActionNormalizer,
    format_display_name,
    infer_button_style,
    tokenize_action_name,
)
from remote_layout.models import CommandParameter, DeviceGroup, DeviceGroups, GroupAction


def test_tokenize_handles_separators_and_camel_case() -> None:
    assert tokenize_action_name("setInput-source_hdmi1") == ["set", "input", "source", "hdmi1"]


def test_display_names_use_irregular_overrides() -> None:
    assert format_display_name("volume_up") == "Volume Up"
    assert format_display_name("hdmi1") == "Hdmi1"
    assert format_display_name("OK", {"ok": "OK"}) == "OK"


def test_button_styles_follow_keywords() -> None:
    """Recording is destructive even though it does not contain 'stop'."""

    assert infer_button_style("play") == "primary"
    assert infer_button_style("stop") == "destructive"
    assert infer_button_style("power_off") == "destructive"
    assert infer_button_style("rec") == "destructive"
    assert infer_button_style("zoom") == "secondary"


def test_normalize_copies_parameters_and_sets_hints() -> None:
    """Normalized actions should not share parameter objects with their source."""

    param = CommandParameter(name="level", type="range", min=0, max=50)
    source = GroupAction(name="set_volume", description="Set volume", params=[param])

    action = ActionNormalizer().normalize(source, "volume", zone_number=2)

    assert action.display_name == "Set Volume"
    assert action.group == "volume"
    assert action.ui_hints.has_parameters is True
    assert action.ui_hints.zone_number == 2
    assert action.has_range_parameter()
    action.parameters[0].max = 99
    assert param.max == 50


def test_normalize_groups_keeps_first_occurrence() -> None:
    groups = DeviceGroups(
        device_id="tv",
        groups=[
            DeviceGroup(group_id="menu", group_name="Menu", actions=[GroupAction(name="home")]),
            DeviceGroup(
                group_id="default",
                group_name="Default",
                actions=[GroupAction(name="home"), GroupAction(name="info")],
            ),
        ],
    )

    actions = ActionNormalizer().normalize_groups(groups)

    assert [(a.action_name, a.group) for a in actions] == [("home", "menu"), ("info", "default")]
