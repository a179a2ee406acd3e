"""Handler for Auralic network streamers."""

from __future__ import annotations

from collections.abc import Sequence

from ..const import ZONE_MEDIA_STACK, ZONE_VOLUME
from ..models import DeviceConfig, Dropdown, ProcessedAction, RemoteZone, SpecialCase
from .base import DeviceClassHandler, zone_by_id

INPUT_KEYWORDS = ("input", "source")


class AuralicHandler(DeviceClassHandler):
    device_class = "AuralicDevice"
    irregular_names = {
        "dac": "DAC",
        "usb": "USB",
        "coax": "Coaxial",
        "optical": "Optical",
        "aes_ebu": "AES/EBU",
        "wifi": "Wi-Fi",
        "ethernet": "Ethernet",
        "upnp": "UPnP",
        "roon": "Roon Ready",
        "tidal": "TIDAL",
        "qobuz": "Qobuz",
        "spotify": "Spotify Connect",
    }
    primary_keywords = ("play", "pause", "favorite", "preset")
    destructive_keywords = ("power_off", "stop", "reset")
    icon_library = "material"
    force_icon_overrides = True
    icon_overrides = {
        "play": "PlayArrow",
        "pause": "Pause",
        "stop": "Stop",
        "next": "SkipNext",
        "previous": "SkipPrevious",
        "shuffle": "Shuffle",
        "repeat": "Repeat",
        "favorite": "Favorite",
        "preset": "Bookmark",
        "volume": "VolumeUp",
        "mute": "VolumeOff",
        "input": "Input",
        "dac": "Memory",
        "filter": "FilterList",
        "upsampling": "HighQuality",
        "wifi": "Wifi",
        "ethernet": "Cable",
        "usb": "Usb",
        "coax": "SettingsInputComponent",
        "optical": "SettingsInputSvideo",
        "streaming": "Stream",
        "tidal": "MusicNote",
        "spotify": "MusicNote",
        "qobuz": "MusicNote",
        "roon": "MusicNote",
    }
    state_fields = (
        ("power", "'on' | 'off'", True, "Power state"),
        ("volume", "number", True, "Volume level"),
        ("mute", "boolean", True, "Mute state"),
        ("source", "string", True, "Selected source"),
        ("connected", "boolean", True, "Streamer reachable"),
        ("ip_address", "string", True, "Network address"),
        ("track_title", "string", True, "Current track title"),
        ("track_artist", "string", True, "Current track artist"),
        ("track_album", "string", True, "Current track album"),
        ("transport_state", "string", True, "Playing, paused or stopped"),
        ("deep_sleep", "boolean", True, "Deep sleep mode"),
        ("message", "string", True, "Status message"),
        ("warning", "string", True, "Warning message"),
    )

    def adjust_zones(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: list[RemoteZone],
    ) -> list[RemoteZone]:
        media = zone_by_id(zones, ZONE_MEDIA_STACK)
        has_inputs = any(
            keyword in action.action_name.lower() for action in actions for keyword in INPUT_KEYWORDS
        )
        if media.content.inputs_dropdown is None and has_inputs:
            media.content.inputs_dropdown = Dropdown(
                type="inputs",
                population_method="api",
                api_action="get_available_inputs",
                set_action="set_input",
                options=[],
                loading=False,
                empty=True,
            )
        return zones

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        media = zone_by_id(zones, ZONE_MEDIA_STACK).content
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="auralic-streaming",
                configuration={
                    "usesInputsAPI": media.inputs_dropdown is not None,
                    "hasMediaControls": media.playback_section is not None,
                    "hasVolumeSlider": zone_by_id(zones, ZONE_VOLUME).content.volume_slider is not None,
                    "isNetworkStreamer": True,
                },
            )
        ]
