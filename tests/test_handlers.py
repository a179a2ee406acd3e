"""Tests for device class handlers."""

from __future__ import annotations

from typing import Any

import pytest

from remote_layout.compiler import compile_device_sync
from remote_layout.emitter import serialize_structure, structure_to_json
from remote_layout.errors import UnsupportedDeviceClassError
from remote_layout.groups import derive_groups
from remote_layout.handlers import HANDLERS, get_handler, supported_device_classes
from remote_layout.models import DeviceConfig


def _case(structure, case_type: str) -> dict[str, Any]:
    return next(case.configuration for case in structure.special_cases if case.case_type == case_type)


def test_registry_covers_every_device_class() -> None:
    assert supported_device_classes() == sorted(
        [
            "AppleTVDevice",
            "AuralicDevice",
            "BroadlinkKitchenHood",
            "EMotivaXMC2",
            "LgTv",
            "RevoxA77ReelToReel",
            "ScenarioDevice",
            "WirenboardIRDevice",
        ]
    )
    assert all(HANDLERS[name].device_class == name for name in HANDLERS)


def test_unknown_device_class_is_rejected() -> None:
    with pytest.raises(UnsupportedDeviceClassError) as excinfo:
        get_handler("ToasterOven")

    assert excinfo.value.device_class == "ToasterOven"


def test_derive_groups_puts_default_first() -> None:
    config = DeviceConfig.model_validate(
        {
            "device_id": "tv",
            "device_name": "TV",
            "device_class": "LgTv",
            "commands": {
                "volume_up": {"action": "volume_up", "group": "volume"},
                "info": {"action": "show_info"},
            },
        }
    )

    groups = derive_groups(config)

    assert [(g.group_id, g.group_name) for g in groups.groups] == [("default", "Default"), ("volume", "Volume")]
    assert [a.name for a in groups.groups[0].actions] == ["show_info"]
    assert all(g.status == "active" for g in groups.groups)


def test_emotiva_adds_zone2_toggle_in_middle(emotiva_config) -> None:
    """The derived zone 2 toggle sits between off and on with zone=2."""

    structure = compile_device_sync(emotiva_config)

    buttons = structure.zone("power").content.power_buttons
    assert [(b.position, b.action.action_name) for b in buttons] == [
        ("left", "power_off"),
        ("middle", "zone2_power_toggle"),
        ("right", "power_on"),
    ]
    toggle = buttons[1]
    assert toggle.button_type == "zone2-power"
    zone_param = next(p for p in toggle.action.parameters if p.name == "zone")
    assert (zone_param.type, zone_param.required, zone_param.default) == ("integer", True, 2)
    assert toggle.action.display_name == "Zone 2 Toggle"
    assert any(h.action_name == "zone2_power_toggle" for h in structure.action_handlers)
    assert _case(structure, "emotiva-xmc2-power")["hasZone2Power"] is True


def test_emotiva_partitions_zone_commands(emotiva_config) -> None:
    structure = compile_device_sync(emotiva_config)

    slider = structure.zone("volume").content.volume_slider
    assert slider.action.action_name == "set_volume"
    assert slider.action.ui_hints.zone_number == 1
    assert slider.zone == 1
    assert slider.mute_action.action_name == "mute_toggle"
    assert structure.zone("menu").content.navigation_cluster.ok.action_name == "enter"
    assert _case(structure, "emotiva-xmc2-power")["zoneCount"] == 2


def test_ir_inputs_come_from_command_names(ir_config) -> None:
    structure = compile_device_sync(ir_config)

    dropdown = structure.zone("media-stack").content.inputs_dropdown
    assert dropdown.population_method == "commands"
    assert [(o.id, o.display_name, o.action_name) for o in dropdown.options] == [
        ("hdmi1", "Hdmi1", "input_hdmi1"),
        ("hdmi2", "Hdmi2", "input_hdmi2"),
    ]
    assert _case(structure, "ir-command-inputs")["inputOptions"] == ["hdmi1", "hdmi2"]


def test_ir_dropdown_absent_without_input_commands(ir_config) -> None:
    """Removing the input commands removes the dropdown from the output."""

    for name in ("input_hdmi1", "input_hdmi2"):
        ir_config["commands"].pop(name)

    structure = compile_device_sync(ir_config)

    media = serialize_structure(structure)["remoteZones"][1]
    assert media["zoneId"] == "media-stack"
    assert "inputsDropdown" not in media["content"]
    assert media["isEmpty"] is True


def test_lg_tv_routes_gestures_to_pointer_zone(lg_tv_config) -> None:
    structure = compile_device_sync(lg_tv_config)

    pad = structure.zone("pointer").content.pointer_pad
    assert pad.move_action.action_name == "move_cursor"
    assert pad.move_action.ui_hints.is_pointer_action is True
    assert pad.move_action.group == "pointer"
    assert pad.click_action.display_name == "Click"
    configuration = _case(structure, "lg-tv-inputs-apps")
    assert configuration == {"usesInputsAPI": True, "usesAppsAPI": True, "hasPointerControl": True}
    assert structure.zone("menu").content.navigation_cluster.ok.display_name == "OK"


def test_kitchen_hood_speed_becomes_slider(hood_config) -> None:
    structure = compile_device_sync(hood_config)

    volume = structure.zone("volume")
    assert volume.content.volume_buttons is None
    assert volume.content.volume_slider.action.action_name == "set_speed"
    assert volume.is_empty is False
    names = {a.action_name for a in structure.iter_actions()}
    assert "learn_code" not in names
    configuration = _case(structure, "kitchen-hood-controls")
    assert configuration["hasFanSpeedSlider"] is True
    assert configuration["hasLightControls"] is True


def test_revox_recording_is_destructive(revox_config) -> None:
    structure = compile_device_sync(revox_config)

    playback = {a.action_name: a for a in structure.zone("media-stack").content.playback_section.actions}
    assert playback["rec"].ui_hints.button_style == "destructive"
    assert playback["rec"].display_name == "Record"
    assert playback["stop"].ui_hints.button_style == "destructive"
    assert playback["play"].ui_hints.button_style == "primary"
    assert playback["ff"].icon.name == "FastForward"
    assert _case(structure, "revox-tape-deck")["hasRecording"] is True


def test_auralic_adds_inputs_dropdown_for_source_commands(auralic_config) -> None:
    structure = compile_device_sync(auralic_config)

    media = structure.zone("media-stack").content
    assert media.inputs_dropdown.population_method == "api"
    assert [a.action_name for a in media.tracks_section.actions] == ["next", "previous"]
    assert _case(structure, "auralic-streaming")["hasVolumeSlider"] is True


def test_apple_tv_streaming_case(apple_tv_config) -> None:
    structure = compile_device_sync(apple_tv_config)

    configuration = _case(structure, "appletv-streaming")
    assert configuration["hasSiri"] is True
    assert configuration["usesAppsAPI"] is True
    assert structure.zone("menu").content.navigation_cluster.ok.action_name == "select"
    assert structure.state_interface.interface_name == "AppleTVDeviceState"


@pytest.mark.parametrize(
    "fixture_name",
    ["emotiva_config", "ir_config", "lg_tv_config", "hood_config", "revox_config", "auralic_config"],
)
def test_compilation_is_stable_across_runs(fixture_name: str, request) -> None:
    """Compiling the same config twice produces identical output."""

    config = request.getfixturevalue(fixture_name)

    assert structure_to_json(compile_device_sync(config)) == structure_to_json(compile_device_sync(config))


def test_every_structure_has_one_volume_control(lg_tv_config, emotiva_config, hood_config) -> None:
    for config in (lg_tv_config, emotiva_config, hood_config):
        content = compile_device_sync(config).zone("volume").content
        assert (content.volume_slider is None) != (content.volume_buttons is None)
