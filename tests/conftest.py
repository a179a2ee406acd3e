"""Shared device configuration fixtures for the remote layout tests."""

from __future__ import annotations

from typing import Any

import pytest


def _commands(layout: dict[str, str | None], **params: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Build a commands mapping from ``{name: group}`` plus optional per-command params."""

    commands: dict[str, dict[str, Any]] = {}
    for name, group in layout.items():
        command: dict[str, Any] = {"action": name, "topic": f"/devices/test/{name}", "description": ""}
        if group is not None:
            command["group"] = group
        if name in params:
            command["params"] = params[name]
        commands[name] = command
    return commands


@pytest.fixture
def emotiva_config() -> dict[str, Any]:
    return {
        "device_id": "processor",
        "device_name": "eMotiva XMC-2",
        "device_class": "EMotivaXMC2",
        "config_class": "EMotivaXMC2DeviceConfig",
        "commands": _commands(
            {
                "power_on": "power",
                "power_off": "power",
                "zone2_power_on": "power",
                "zone2_power_off": "power",
                "set_volume": "volume",
                "zone2_set_volume": "volume",
                "mute_toggle": "volume",
                "set_input": "inputs",
                "up": "menu",
                "down": "menu",
                "left": "menu",
                "right": "menu",
                "enter": "menu",
            },
            power_on=[{"name": "zone", "type": "integer", "required": False, "default": 1}],
            set_volume=[{"name": "level", "type": "range", "min": -96, "max": 11}],
            zone2_set_volume=[{"name": "level", "type": "range", "min": -96, "max": 11}],
        ),
    }


@pytest.fixture
def ir_config() -> dict[str, Any]:
    return {
        "device_id": "projector_ir",
        "device_name": "Projector IR",
        "device_class": "WirenboardIRDevice",
        "commands": _commands(
            {
                "power_on": None,
                "power_off": None,
                "input_hdmi1": None,
                "input_hdmi2": None,
                "up": None,
                "down": None,
                "left": None,
                "right": None,
                "ok": None,
                "menu": None,
                "back": None,
                "aspect_ratio": None,
            }
        ),
    }


@pytest.fixture
def lg_tv_config() -> dict[str, Any]:
    return {
        "device_id": "living_room_tv",
        "device_name": "Living Room TV",
        "device_class": "LgTv",
        "commands": _commands(
            {
                "power_on": "power",
                "power_off": "power",
                "volume_up": "volume",
                "volume_down": "volume",
                "mute": "volume",
                "play": "playback",
                "pause": "playback",
                "stop": "playback",
                "up": "menu",
                "down": "menu",
                "left": "menu",
                "right": "menu",
                "ok": "menu",
                "home": "menu",
                "back": "menu",
                "launch_app": "apps",
                "set_input_source": "inputs",
                "move_cursor": "gestures",
                "click": "gestures",
            },
            move_cursor=[
                {"name": "x", "type": "integer", "required": True},
                {"name": "y", "type": "integer", "required": True},
            ],
        ),
    }


@pytest.fixture
def hood_config() -> dict[str, Any]:
    return {
        "device_id": "kitchen_hood",
        "device_name": "Kitchen Hood",
        "device_class": "BroadlinkKitchenHood",
        "commands": _commands(
            {
                "power_on": "power",
                "power_off": "power",
                "set_speed": "fan",
                "light_on": "light",
                "light_off": "light",
                "learn_code": "noops",
            },
            set_speed=[{"name": "speed", "type": "range", "min": 0, "max": 4}],
        ),
    }


@pytest.fixture
def revox_config() -> dict[str, Any]:
    return {
        "device_id": "reel_to_reel",
        "device_name": "Revox A77",
        "device_class": "RevoxA77ReelToReel",
        "commands": _commands(
            {
                "play": "playback",
                "stop": "playback",
                "rec": "playback",
                "ff": "playback",
                "rew": "playback",
                "tape_speed": "tape",
            }
        ),
    }


@pytest.fixture
def auralic_config() -> dict[str, Any]:
    return {
        "device_id": "streamer",
        "device_name": "Auralic Altair",
        "device_class": "AuralicDevice",
        "commands": _commands(
            {
                "power_on": "power",
                "power_off": "power",
                "play": "playback",
                "pause": "playback",
                "next": "tracks",
                "previous": "tracks",
                "set_volume": "volume",
                "mute": "volume",
                "select_source": None,
            },
            set_volume=[{"name": "level", "type": "range", "min": 0, "max": 100}],
        ),
    }


@pytest.fixture
def apple_tv_config() -> dict[str, Any]:
    return {
        "device_id": "apple_tv",
        "device_name": "Apple TV",
        "device_class": "AppleTVDevice",
        "commands": _commands(
            {
                "power_on": "power",
                "power_off": "power",
                "play": "playback",
                "pause": "playback",
                "up": "menu",
                "down": "menu",
                "left": "menu",
                "right": "menu",
                "select": "menu",
                "menu": "menu",
                "home": "menu",
                "siri": None,
                "launch_app": "apps",
            }
        ),
    }


@pytest.fixture
def amp_config() -> dict[str, Any]:
    """Donor amplifier used by scenario tests."""

    return {
        "device_id": "ampA",
        "device_name": "Amplifier",
        "device_class": "WirenboardIRDevice",
        "commands": _commands(
            {
                "power_on": "power",
                "power_off": "power",
                "volume_up": "volume",
                "volume_down": "volume",
                "mute": "volume",
                "input_cd": None,
            }
        ),
    }


@pytest.fixture
def tv_config(lg_tv_config: dict[str, Any]) -> dict[str, Any]:
    """Donor television used by scenario tests."""

    return {**lg_tv_config, "device_id": "tvB", "device_name": "Television"}


@pytest.fixture
def scenario_definition() -> dict[str, Any]:
    return {
        "scenario_id": "movie_night",
        "name": "Movie Night",
        "description": "Watch a film on the TV through the amplifier",
        "room_id": "living_room",
        "roles": {"volume": "ampA", "playback": "tvB", "navigation": "tvB", "inputs": "tvB"},
        "devices": ["ampA", "tvB"],
        "startup_sequence": [
            {"device": "ampA", "command": "power_on", "delay_after_ms": 500},
            {"device": "tvB", "command": "power_on"},
        ],
        "shutdown_sequence": [{"device": "tvB", "command": "power_off"}],
    }


@pytest.fixture
def scenario_config(scenario_definition: dict[str, Any]):
    from remote_layout.scenario_config import build_virtual_device_config, parse_scenario

    return build_virtual_device_config(parse_scenario(scenario_definition))


@pytest.fixture
def donor_configs(amp_config: dict[str, Any], tv_config: dict[str, Any]) -> dict[str, dict[str, Any]]:
    return {"ampA": amp_config, "tvB": tv_config}
