"""Handler for Broadlink-controlled kitchen hoods."""

from __future__ import annotations

from collections.abc import Sequence

from ..const import EXCLUDED_GROUP_NAMES, ZONE_VOLUME
from ..models import DeviceConfig, ProcessedAction, RemoteZone, SpecialCase, VolumeSlider
from .base import DeviceClassHandler, zone_by_id

FAN_SPEED_KEYWORDS = ("speed", "fan")


def fan_speed_action(actions: Sequence[ProcessedAction]) -> ProcessedAction | None:
    """Return the first action with a range parameter that controls fan speed."""

    for action in actions:
        if not action.has_range_parameter():
            continue
        names = [action.action_name.lower()] + [p.name.lower() for p in action.parameters if p.type == "range"]
        if any(keyword in name for name in names for keyword in FAN_SPEED_KEYWORDS):
            return action
    return None


class BroadlinkKitchenHoodHandler(DeviceClassHandler):
    """Route the fan speed range to a slider zone."""

    device_class = "BroadlinkKitchenHood"
    excluded_groups = EXCLUDED_GROUP_NAMES
    icon_library = "material"
    force_icon_overrides = True
    icon_overrides = {
        "fan": "Toys",
        "speed": "Speed",
        "light": "Lightbulb",
        "timer": "Timer",
        "filter": "FilterAlt",
        "turbo": "FlashOn",
        "mode": "Settings",
    }
    state_fields = (
        ("light", "'on' | 'off'", True, "Hood light state"),
        ("speed", "number", True, "Fan speed level"),
        ("connection_status", "string", True, "Bridge connection status"),
    )

    def adjust_zones(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: list[RemoteZone],
    ) -> list[RemoteZone]:
        volume = zone_by_id(zones, ZONE_VOLUME)
        if volume.content.volume_slider is not None:
            return zones
        speed_action = fan_speed_action(actions)
        if speed_action is None:
            return zones
        volume.content.volume_buttons = None
        volume.content.volume_slider = VolumeSlider(
            action=speed_action,
            orientation="vertical",
            show_value=True,
        )
        volume.layout.priority = 1
        return zones

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        slider = zone_by_id(zones, ZONE_VOLUME).content.volume_slider
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="kitchen-hood-controls",
                configuration={
                    "hasFanSpeedSlider": slider is not None and fan_speed_action([slider.action]) is not None,
                    "hasLightControls": any("light" in a.action_name.lower() for a in actions),
                    "hasParameterizedActions": any(a.ui_hints.has_parameters for a in actions),
                },
            )
        ]
