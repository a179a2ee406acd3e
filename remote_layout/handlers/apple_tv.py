"""Handler for Apple TV streaming boxes."""

from __future__ import annotations

from collections.abc import Sequence

from ..const import ZONE_APPS, ZONE_MEDIA_STACK, ZONE_MENU
from ..models import DeviceConfig, ProcessedAction, RemoteZone, SpecialCase
from .base import DeviceClassHandler, zone_by_id


class AppleTVHandler(DeviceClassHandler):
    device_class = "AppleTVDevice"
    irregular_names = {
        "tv": "TV",
        "app_switcher": "App Switcher",
        "siri": "Siri",
        "airplay": "AirPlay",
        "home_button": "Home",
        "volume_up": "Volume Up",
        "volume_down": "Volume Down",
    }
    primary_keywords = ("play", "pause", "home", "siri")
    destructive_keywords = ("power_off", "stop")
    state_fields = (
        ("power", "'on' | 'off'", True, "Power state"),
        ("currentApp", "string", True, "Foreground application"),
        ("playbackState", "'playing' | 'paused' | 'idle'", True, "Playback state"),
        ("volume", "number", True, "Volume level"),
        ("lastAction", "string", True, "Last command sent"),
    )

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        names = {action.action_name.lower() for action in actions}
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="appletv-streaming",
                configuration={
                    "hasSiri": "siri" in names,
                    "hasAirPlay": "airplay" in names,
                    "usesAppsAPI": zone_by_id(zones, ZONE_APPS).content.apps_dropdown is not None,
                    "hasMediaControls": zone_by_id(zones, ZONE_MEDIA_STACK).content.playback_section
                    is not None,
                    "hasNavigation": zone_by_id(zones, ZONE_MENU).content.navigation_cluster is not None,
                },
            )
        ]
