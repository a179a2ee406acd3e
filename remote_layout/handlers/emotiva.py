"""Handler for the eMotiva XMC-2 multi-zone AV processor."""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..const import ZONE_POWER, ZONE_VOLUME
from ..models import (
    ActionHandler,
    CommandParameter,
    DeviceConfig,
    DeviceGroups,
    PowerButton,
    ProcessedAction,
    RemoteZone,
    SpecialCase,
)
from .base import EXECUTE_ACTION_DEPENDENCY, DeviceClassHandler, zone_by_id

_ZONE_PATTERN = re.compile(r"zone[_\s]*(\d+)", re.IGNORECASE)
_ZONE_STRIP = re.compile(r"zone[_\s]*\d+[_\s]*", re.IGNORECASE)

ZONE_COMMAND_KEYWORDS = ("zone", "volume", "input")
DEFAULT_ZONE_COUNT = 2
PRIMARY_POWER_ACTION = "power_on"
ZONE2_TOGGLE_ACTION = "zone2_power_toggle"

_BUTTON_ORDER = {"left": 0, "middle": 1, "right": 2}


def command_zone(name: str) -> int | None:
    """Return the explicit zone number in ``name``, if any."""

    match = _ZONE_PATTERN.search(name)
    return int(match.group(1)) if match else None


class EMotivaXMC2Handler(DeviceClassHandler):
    """Partition zone-numbered commands and add a zone 2 power toggle."""

    device_class = "EMotivaXMC2"
    icon_overrides = {
        "volume": "VolumeUp",
        "mute": "VolumeOff",
        "input": "Input",
        "bass": "GraphicEq",
        "treble": "GraphicEq",
        "balance": "Tune",
        "eq": "Equalizer",
    }
    state_fields = (
        ("power", "'on' | 'off'", True, "Main zone power state"),
        ("zone2_power", "'on' | 'off'", True, "Zone 2 power state"),
        ("volume", "number", True, "Main zone volume"),
        ("zone2_volume", "number", True, "Zone 2 volume"),
        ("input_source", "string", True, "Selected input"),
        ("connected", "boolean", True, "Processor reachable"),
        ("mute", "boolean", True, "Main zone mute"),
        ("zone2_mute", "boolean", True, "Zone 2 mute"),
    )

    def process_actions(self, config: DeviceConfig, groups: DeviceGroups) -> list[ProcessedAction]:
        zone_count = self.zone_count(config)
        processed: list[ProcessedAction] = []
        seen: set[str] = set()
        for group in groups.groups:
            for action in group.actions:
                if action.name in seen:
                    continue
                seen.add(action.name)
                lowered = action.name.lower()
                if not any(keyword in lowered for keyword in ZONE_COMMAND_KEYWORDS):
                    processed.append(self.normalizer.normalize(action, group.group_id))
                    continue

                zone = command_zone(lowered) or 1
                if zone > zone_count:
                    processed.append(self.normalizer.normalize(action, group.group_id))
                    continue
                stripped = _ZONE_STRIP.sub("", action.name) or action.name
                processed.append(
                    self.normalizer.normalize(
                        action,
                        f"zone_{zone}",
                        display_name=self.normalizer.display_name(stripped),
                        zone_number=zone,
                    )
                )
        return processed

    def zone_count(self, config: DeviceConfig) -> int:
        numbers = [number for number in map(command_zone, config.commands) if number is not None]
        return max(numbers) if numbers else DEFAULT_ZONE_COUNT

    def adjust_zones(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: list[RemoteZone],
    ) -> list[RemoteZone]:
        power_zone = zone_by_id(zones, ZONE_POWER)
        toggle = self.zone2_toggle(actions)
        if toggle is not None:
            buttons = [
                button for button in power_zone.content.power_buttons or () if button.position != "middle"
            ]
            buttons.append(PowerButton(position="middle", action=toggle, button_type="zone2-power"))
            buttons.sort(key=lambda button: _BUTTON_ORDER[button.position])
            power_zone.content.power_buttons = buttons

        volume_content = zone_by_id(zones, ZONE_VOLUME).content
        control = volume_content.volume_slider or volume_content.volume_buttons
        if control is not None:
            bound = [action for action in volume_content.iter_actions() if action.ui_hints.zone_number]
            if bound:
                control.zone = bound[0].ui_hints.zone_number
        return zones

    def zone2_toggle(self, actions: Sequence[ProcessedAction]) -> ProcessedAction | None:
        """Derive the zone 2 toggle from the primary ``power_on`` action."""

        source = next((a for a in actions if a.action_name.lower() == PRIMARY_POWER_ACTION), None)
        if source is None:
            return None
        parameters = [param for param in source.parameters if param.name != "zone"]
        parameters.append(
            CommandParameter(
                name="zone",
                type="integer",
                required=True,
                default=2,
                min=2,
                max=2,
                description="Zone ID (2 for zone2)",
            )
        )
        toggle = source.model_copy(deep=True)
        toggle.action_name = ZONE2_TOGGLE_ACTION
        toggle.display_name = "Zone 2 Toggle"
        toggle.description = "Toggle Zone 2 power state"
        toggle.parameters = parameters
        toggle.ui_hints.has_parameters = True
        toggle.ui_hints.zone_number = 2
        toggle.ui_hints.button_style = "secondary"
        return toggle

    def action_handlers(self, config: DeviceConfig) -> list[ActionHandler]:
        handlers = super().action_handlers(config)
        primary = config.commands.get(PRIMARY_POWER_ACTION)
        if primary is not None:
            handlers.append(
                ActionHandler(
                    action_name=ZONE2_TOGGLE_ACTION,
                    action=primary.action or PRIMARY_POWER_ACTION,
                    device_id=config.device_id,
                    dependencies=[EXECUTE_ACTION_DEPENDENCY],
                )
            )
        return handlers

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        power_buttons = zone_by_id(zones, ZONE_POWER).content.power_buttons or []
        volume_actions = list(zone_by_id(zones, ZONE_VOLUME).content.iter_actions())
        zone_count = self.zone_count(config)
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="emotiva-xmc2-power",
                configuration={
                    "hasZone2Power": any(b.button_type == "zone2-power" for b in power_buttons),
                    "zone2VolumeOnly": bool(volume_actions)
                    and all(a.ui_hints.zone_number == 2 for a in volume_actions),
                    "multiZoneDevice": zone_count > 1,
                    "zoneCount": zone_count,
                },
            )
        ]
