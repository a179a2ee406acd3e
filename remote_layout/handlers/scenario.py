"""Handler producing the scenario-native part of a composite device."""

from __future__ import annotations

from collections.abc import Sequence

from ..const import (
    CLASS_ICON_CONFIDENCE,
    ROLE_INPUTS,
    ROLE_POWER,
    SCENARIO_DEVICE_CLASS,
    SCENARIO_LOCATION,
    ZONE_MEDIA_STACK,
)
from ..models import (
    ActionHandler,
    DeviceCommand,
    DeviceConfig,
    DeviceGroup,
    DeviceGroups,
    GroupAction,
    Icon,
    ProcessedAction,
    RemoteZone,
    SpecialCase,
    StateDefinition,
    StateField,
    ZoneContent,
)
from ..roles import command_role, extract_role_map, zone_enablement
from .base import EXECUTE_ACTION_DEPENDENCY, DeviceClassHandler, pascal_case, zone_by_id

SCENARIO_START_ACTION = "power_on"
SCENARIO_STOP_ACTION = "power_off"
SCENARIO_ACTIVATION_DEPENDENCY = "useScenarioActivation"
DEFAULT_SCENARIO_GROUP = "controls"

GROUP_ICONS = {
    "power": "PowerSettingsNew",
    "volume": "VolumeUp",
    "playback": "PlayArrow",
    "navigation": "Navigation",
    "tracks": "Album",
    "menu": "Menu",
    "screen": "AspectRatio",
    "apps": "Apps",
    "pointer": "Mouse",
    "controls": "Settings",
}

_POWER_ACTIONS = (
    (SCENARIO_STOP_ACTION, "Stop Scenario", "Stop", "destructive"),
    (SCENARIO_START_ACTION, "Start Scenario", "PlayArrow", "primary"),
)


def is_scenario_native(command: DeviceCommand) -> bool:
    return not command.location or command.location == SCENARIO_LOCATION


def _native_action(config: DeviceConfig, name: str) -> str:
    command = config.commands.get(name)
    if command is not None and command.action:
        return command.action
    return name


class ScenarioDeviceHandler(DeviceClassHandler):
    """Compile a scenario's own commands; donor content is spliced in later."""

    device_class = SCENARIO_DEVICE_CLASS

    def prepare_groups(self, config: DeviceConfig, groups: DeviceGroups) -> DeviceGroups:
        role_groups: dict[str, list[GroupAction]] = {
            ROLE_POWER: [GroupAction(name=name) for name, *_ in _POWER_ACTIONS]
        }
        for name, command in config.commands.items():
            role = command_role(name, command.group) if command.group else DEFAULT_SCENARIO_GROUP
            if role in (ROLE_POWER, ROLE_INPUTS):
                continue
            role_groups.setdefault(role, []).append(
                GroupAction(name=name, description=command.description, params=command.params)
            )
        return DeviceGroups(
            device_id=config.device_id,
            groups=[
                DeviceGroup(group_id=role, group_name=role, actions=actions)
                for role, actions in role_groups.items()
            ],
        )

    def process_actions(self, config: DeviceConfig, groups: DeviceGroups) -> list[ProcessedAction]:
        processed: list[ProcessedAction] = []
        power_labels = {name: (label, icon, style) for name, label, icon, style in _POWER_ACTIONS}
        for group in groups.groups:
            for action in group.actions:
                if group.group_id == ROLE_POWER:
                    label, icon_name, style = power_labels[action.name]
                    item = self.normalizer.normalize(action, ROLE_POWER, display_name=label)
                    item.description = item.description or f"{label} {config.device_name}"
                    item.icon = Icon(
                        library="material",
                        name=icon_name,
                        fallback=action.name,
                        confidence=CLASS_ICON_CONFIDENCE,
                    )
                    item.ui_hints.button_style = style
                    processed.append(item)
                    continue

                item = self.normalizer.normalize(action, group.group_id)
                if self.force_group_icon(item):
                    item.icon = Icon(
                        library="material",
                        name=GROUP_ICONS.get(group.group_id, GROUP_ICONS[DEFAULT_SCENARIO_GROUP]),
                        fallback=item.icon.fallback,
                        confidence=CLASS_ICON_CONFIDENCE,
                    )
                command = config.commands.get(action.name)
                if command is not None and not is_scenario_native(command):
                    item.source_device_id = command.location
                processed.append(item)
        return processed

    def force_group_icon(self, action: ProcessedAction) -> bool:
        return action.icon.library == "fallback"

    def adjust_zones(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: list[RemoteZone],
    ) -> list[RemoteZone]:
        enabled = zone_enablement(extract_role_map(config))
        for zone in zones:
            zone.enabled = enabled[zone.zone_id]
            if not zone.enabled:
                zone.content = ZoneContent()
        # Inputs are sequenced by the backend when the scenario starts.
        zone_by_id(zones, ZONE_MEDIA_STACK).content.inputs_dropdown = None
        return zones

    def state_interface(self, config: DeviceConfig) -> StateDefinition:
        return StateDefinition(
            interface_name=f"{pascal_case(config.device_id)}ScenarioState",
            fields=[
                StateField(name="scenario_active", type="boolean", description="Scenario is running"),
                StateField(
                    name="last_scenario_action",
                    type="string",
                    optional=True,
                    description="Last start or stop request",
                ),
                StateField(
                    name="active_roles",
                    type="Record<string, string>",
                    optional=True,
                    description="Role to donor device mapping",
                ),
            ],
        )

    def action_handlers(self, config: DeviceConfig) -> list[ActionHandler]:
        handlers = [
            ActionHandler(
                action_name=name,
                action=_native_action(config, name),
                device_id=config.device_id,
                dependencies=[SCENARIO_ACTIVATION_DEPENDENCY],
            )
            for name, *_ in reversed(_POWER_ACTIONS)
        ]
        for name, command in config.commands.items():
            role = command_role(name, command.group) if command.group else DEFAULT_SCENARIO_GROUP
            if role in (ROLE_POWER, ROLE_INPUTS):
                continue
            handlers.append(
                ActionHandler(
                    action_name=name,
                    action=command.action or name,
                    device_id=self.target_device_id(config, command),
                    dependencies=[EXECUTE_ACTION_DEPENDENCY],
                )
            )
        return handlers

    def target_device_id(self, config: DeviceConfig, command: DeviceCommand) -> str:
        if is_scenario_native(command):
            return config.device_id
        return command.location or config.device_id

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        role_map = extract_role_map(config)
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="scenario-virtual-device",
                configuration={
                    "scenarioBased": True,
                    "powerGroupMapsToScenario": True,
                    "selectiveEnablement": True,
                    "roles": dict(role_map),
                    "enabledZones": [zone.zone_id for zone in zones if zone.enabled],
                },
            )
        ]
