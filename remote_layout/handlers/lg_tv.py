"""Handler for LG webOS televisions with pointer (magic remote) support."""

from __future__ import annotations

from collections.abc import Sequence

from ..const import ZONE_APPS, ZONE_MEDIA_STACK, ZONE_POINTER
from ..models import (
    DeviceConfig,
    DeviceGroup,
    DeviceGroups,
    ProcessedAction,
    RemoteZone,
    SpecialCase,
)
from .base import DeviceClassHandler, zone_by_id

POINTER_ACTION_KEYWORDS = ("move_cursor", "cursor", "click", "drag", "scroll", "gesture")
POINTER_GROUP_NAME = "Pointer"
POINTER_GROUP_ID = "pointer"

POINTER_DISPLAY_NAMES = {
    "move_cursor": "Move Cursor",
    "click": "Click",
    "double_click": "Double Click",
    "right_click": "Right Click",
    "drag": "Drag",
    "scroll": "Scroll",
}


def is_pointer_action(action_name: str) -> bool:
    lowered = action_name.lower()
    return any(keyword in lowered for keyword in POINTER_ACTION_KEYWORDS)


class LgTvHandler(DeviceClassHandler):
    """Redirect gesture-bearing groups to the pointer zone."""

    device_class = "LgTv"
    irregular_names = {**POINTER_DISPLAY_NAMES, "ok": "OK", "tv": "TV", "3d_mode": "3D Mode"}
    icon_overrides = {
        "move_cursor": "CropFree",
        "cursor": "CropFree",
        "click": "TouchApp",
        "drag": "PanTool",
        "scroll": "UnfoldMore",
    }
    state_fields = (
        ("power", "'on' | 'off'", True, "Power state"),
        ("volume", "number", True, "Volume level"),
        ("mute", "boolean", True, "Mute state"),
        ("current_app", "string", True, "Foreground application"),
        ("input_source", "string", True, "Selected input"),
        ("connected", "boolean", True, "TV reachable"),
        ("ip_address", "string", True, "Network address"),
        ("mac_address", "string", True, "MAC address for wake-on-LAN"),
    )

    def prepare_groups(self, config: DeviceConfig, groups: DeviceGroups) -> DeviceGroups:
        redirected: list[DeviceGroup] = []
        for group in groups.groups:
            if any(is_pointer_action(action.name) for action in group.actions):
                redirected.append(group.model_copy(update={"group_name": POINTER_GROUP_NAME}))
            else:
                redirected.append(group)
        return DeviceGroups(device_id=groups.device_id, groups=redirected)

    def process_actions(self, config: DeviceConfig, groups: DeviceGroups) -> list[ProcessedAction]:
        processed: list[ProcessedAction] = []
        seen: set[str] = set()
        for group in groups.groups:
            pointer_group = group.group_name == POINTER_GROUP_NAME
            for action in group.actions:
                if action.name in seen:
                    continue
                seen.add(action.name)
                if pointer_group or is_pointer_action(action.name):
                    processed.append(
                        self.normalizer.normalize(action, POINTER_GROUP_ID, is_pointer_action=True)
                    )
                else:
                    processed.append(self.normalizer.normalize(action, group.group_id))
        return processed

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="lg-tv-inputs-apps",
                configuration={
                    "usesInputsAPI": zone_by_id(zones, ZONE_MEDIA_STACK).content.inputs_dropdown is not None,
                    "usesAppsAPI": zone_by_id(zones, ZONE_APPS).content.apps_dropdown is not None,
                    "hasPointerControl": zone_by_id(zones, ZONE_POINTER).content.pointer_pad is not None,
                },
            )
        ]
