"""Scenario definition files and the virtual device configs built from them."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .const import (
    ROLE_APPS,
    ROLE_INPUTS,
    ROLE_MENU,
    ROLE_NAVIGATION,
    ROLE_PLAYBACK,
    ROLE_POINTER,
    ROLE_POWER,
    ROLE_SCREEN,
    ROLE_TRACKS,
    ROLE_VOLUME,
    SCENARIO_DEVICE_CLASS,
    SCENARIO_LOCATION,
)
from .errors import ScenarioConfigError
from .models import CommandParameter, DeviceCommand, DeviceConfig

_LOGGER = logging.getLogger(__name__)

SCENARIO_CONFIG_CLASS = "ScenarioDeviceConfig"


class CommandStep(BaseModel):
    model_config = ConfigDict(extra="ignore")

    device: str
    command: str
    params: dict[str, Any] | None = None
    condition: str | None = None
    delay_after_ms: int | None = None


class ManualInstructions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    startup: list[str] = Field(default_factory=list)
    shutdown: list[str] = Field(default_factory=list)


class ScenarioDefinition(BaseModel):
    """Scenario file describing which device fills each role."""

    model_config = ConfigDict(extra="ignore")

    scenario_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    room_id: str | None = None
    roles: dict[str, str]
    devices: list[str] = Field(default_factory=list)
    startup_sequence: list[CommandStep] = Field(default_factory=list)
    shutdown_sequence: list[CommandStep] = Field(default_factory=list)
    manual_instructions: ManualInstructions | None = None

    @field_validator("roles")
    @classmethod
    def _normalize_roles(cls, value: dict[str, str]) -> dict[str, str]:
        return {role.lower(): device_id for role, device_id in value.items() if device_id}


# (command name, action, description, params) per role; commands target the role's donor.
ROLE_COMMAND_TEMPLATES: dict[str, tuple[tuple[str, str, str, list[dict[str, Any]] | None], ...]] = {
    ROLE_VOLUME: (
        ("volume_up", "volume_up", "Volume Up", None),
        ("volume_down", "volume_down", "Volume Down", None),
        ("mute", "mute", "Mute", None),
    ),
    ROLE_PLAYBACK: (
        ("play", "play", "Play", None),
        ("pause", "pause", "Pause", None),
        ("stop", "stop", "Stop", None),
    ),
    ROLE_NAVIGATION: (
        ("up", "up", "Up", None),
        ("down", "down", "Down", None),
        ("left", "left", "Left", None),
        ("right", "right", "Right", None),
        ("ok", "ok", "OK", None),
    ),
    ROLE_TRACKS: (
        ("next_track", "next", "Next Track", None),
        ("prev_track", "previous", "Previous Track", None),
    ),
    ROLE_MENU: (
        ("menu", "menu", "Menu", None),
        ("back", "back", "Back", None),
        ("home", "home", "Home", None),
    ),
    ROLE_SCREEN: (
        ("aspect_ratio", "aspect_ratio", "Aspect Ratio", None),
        ("zoom", "zoom", "Zoom", None),
    ),
    ROLE_APPS: (("launch_app", "launch_app", "Launch App", [{"name": "app", "type": "string", "required": True}]),),
    ROLE_POINTER: (
        ("move_cursor", "move_cursor", "Move Cursor", None),
        ("click", "click", "Click", None),
    ),
    ROLE_INPUTS: (("set_input", "set_input", "Select Input", [{"name": "input", "type": "string", "required": True}]),),
}


def build_virtual_device_config(scenario: ScenarioDefinition) -> DeviceConfig:
    """Return the ``ScenarioDevice`` config for ``scenario``."""

    commands: dict[str, DeviceCommand] = {
        "power_on": DeviceCommand(
            action="start_scenario",
            location=SCENARIO_LOCATION,
            description=f"Start {scenario.name}",
            group=ROLE_POWER,
        ),
        "power_off": DeviceCommand(
            action="stop_scenario",
            location=SCENARIO_LOCATION,
            description=f"Stop {scenario.name}",
            group=ROLE_POWER,
        ),
    }
    for role, donor_id in scenario.roles.items():
        templates = ROLE_COMMAND_TEMPLATES.get(role)
        if templates is None:
            _LOGGER.debug("scenario_role_without_template scenario=%s role=%s", scenario.scenario_id, role)
            continue
        for name, action, description, params in templates:
            if name in commands:
                continue
            commands[name] = DeviceCommand(
                action=action,
                location=donor_id,
                description=description,
                group=role,
                params=[CommandParameter.model_validate(param) for param in params] if params else None,
            )

    return DeviceConfig(
        device_id=scenario.scenario_id,
        device_name=scenario.name,
        device_class=SCENARIO_DEVICE_CLASS,
        config_class=SCENARIO_CONFIG_CLASS,
        commands=commands,
    )


def parse_scenario(data: Mapping[str, Any], *, source: str = "<memory>") -> ScenarioDefinition:
    """Validate a scenario mapping, raising :class:`ScenarioConfigError` when invalid."""

    try:
        return ScenarioDefinition.model_validate(data)
    except ValidationError as exc:
        missing = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise ScenarioConfigError(f"Invalid scenario {source}: {', '.join(missing)}") from exc


def load_scenario_file(path: Path) -> ScenarioDefinition:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ScenarioConfigError(f"Unreadable scenario file {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ScenarioConfigError(f"Scenario file {path} must contain an object")
    return parse_scenario(data, source=str(path))


def discover_scenarios(directory: Path | str) -> list[ScenarioDefinition]:
    """Load every ``*.json`` scenario under ``directory``, skipping invalid files."""

    root = Path(directory)
    if not root.is_dir():
        _LOGGER.warning("scenario_dir_missing path=%s", root)
        return []

    scenarios: list[ScenarioDefinition] = []
    for path in sorted(root.glob("*.json")):
        try:
            scenarios.append(load_scenario_file(path))
        except ScenarioConfigError as exc:
            _LOGGER.warning("scenario_file_skipped path=%s error=%s", path, exc)
    _LOGGER.info("scenario_discovery_complete path=%s count=%s", root, len(scenarios))
    return scenarios


__all__ = [
    "CommandStep",
    "ManualInstructions",
    "ROLE_COMMAND_TEMPLATES",
    "ScenarioDefinition",
    "build_virtual_device_config",
    "discover_scenarios",
    "load_scenario_file",
    "parse_scenario",
]
