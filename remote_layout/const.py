"""Constants and keyword tables for the remote layout compiler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

ZoneId = Literal["power", "media-stack", "screen", "volume", "apps", "menu", "pointer"]

ZONE_POWER: Final = "power"
ZONE_MEDIA_STACK: Final = "media-stack"
ZONE_SCREEN: Final = "screen"
ZONE_VOLUME: Final = "volume"
ZONE_APPS: Final = "apps"
ZONE_MENU: Final = "menu"
ZONE_POINTER: Final = "pointer"

ZONE_IDS: Final[tuple[ZoneId, ...]] = (
    ZONE_POWER,
    ZONE_MEDIA_STACK,
    ZONE_SCREEN,
    ZONE_VOLUME,
    ZONE_APPS,
    ZONE_MENU,
    ZONE_POINTER,
)

ZONE_NAMES: Final[dict[str, str]] = {
    ZONE_POWER: "Power Control",
    ZONE_MEDIA_STACK: "Media Stack",
    ZONE_SCREEN: "Screen Controls",
    ZONE_VOLUME: "Volume Control",
    ZONE_APPS: "Applications",
    ZONE_MENU: "Navigation",
    ZONE_POINTER: "Pointer Control",
}

DEFAULT_GROUP_ID = "default"
DEFAULT_GROUP_STATUS = "active"

DEFAULT_RANGE_MIN = 0
DEFAULT_RANGE_MAX = 100

# Class-specific icons replace generic guesses scoring below this value.
ICON_OVERRIDE_THRESHOLD = 0.7
ICON_EXACT_CONFIDENCE = 0.9
ICON_PARTIAL_CONFIDENCE = 0.6
ICON_FALLBACK_CONFIDENCE = 0.3
CLASS_ICON_CONFIDENCE = 0.9

DEFAULT_MAX_CONCURRENCY = 3
DEFAULT_OUTPUT_DIR = "generated"
DEFAULT_REQUEST_TIMEOUT_S = 10.0

EXCLUDED_GROUP_NAMES: Final[frozenset[str]] = frozenset({"noops", "hidden", "internal", "debug"})

SCENARIO_DEVICE_CLASS = "ScenarioDevice"
SCENARIO_LOCATION = "scenario"

ROLE_POWER = "power"
ROLE_INPUTS = "inputs"
ROLE_VOLUME = "volume"
ROLE_PLAYBACK = "playback"
ROLE_TRACKS = "tracks"
ROLE_NAVIGATION = "navigation"
ROLE_MENU = "menu"
ROLE_SCREEN = "screen"
ROLE_APPS = "apps"
ROLE_POINTER = "pointer"

# Role to composite zone; ``inputs`` is sequenced by the backend and never rendered.
ROLE_ZONES: Final[dict[str, str]] = {
    ROLE_VOLUME: ZONE_VOLUME,
    ROLE_PLAYBACK: ZONE_MEDIA_STACK,
    ROLE_TRACKS: ZONE_MEDIA_STACK,
    ROLE_NAVIGATION: ZONE_MENU,
    ROLE_MENU: ZONE_MENU,
    ROLE_SCREEN: ZONE_SCREEN,
    ROLE_APPS: ZONE_APPS,
    ROLE_POINTER: ZONE_POINTER,
}


@dataclass(frozen=True)
class ZoneDetectionConfig:
    """Keyword tables used to match groups and actions to zones."""

    power_group_names: tuple[str, ...]
    power_action_names: tuple[str, ...]
    inputs_group_names: tuple[str, ...]
    playback_group_names: tuple[str, ...]
    playback_action_tokens: tuple[str, ...]
    tracks_group_names: tuple[str, ...]
    tracks_action_names: tuple[str, ...]
    screen_group_names: tuple[str, ...]
    screen_action_names: tuple[str, ...]
    volume_group_names: tuple[str, ...]
    volume_action_names: tuple[str, ...]
    apps_group_names: tuple[str, ...]
    apps_action_names: tuple[str, ...]
    menu_group_names: tuple[str, ...]
    navigation_action_names: tuple[str, ...]
    pointer_group_names: tuple[str, ...]
    pointer_action_names: tuple[str, ...]


DEFAULT_ZONE_DETECTION: Final = ZoneDetectionConfig(
    power_group_names=("power", "power_control", "main_power"),
    power_action_names=("power", "power_on", "power_off", "power_toggle", "zone2_power"),
    inputs_group_names=("inputs", "input_selection", "sources", "input_control"),
    playback_group_names=("playback", "media_control", "transport", "player"),
    # Matched against whole name tokens so "display_mode" never reads as "play".
    playback_action_tokens=(
        "play",
        "pause",
        "stop",
        "playpause",
        "rewind",
        "rew",
        "ff",
        "fastforward",
        "forward",
        "record",
        "rec",
    ),
    tracks_group_names=("tracks", "track_control", "track_nav"),
    tracks_action_names=("audio", "subtitles", "language", "track", "subtitle", "tray", "eject"),
    screen_group_names=("screen", "display", "video", "picture"),
    screen_action_names=("aspect", "zoom", "display_mode", "picture_mode", "screen", "ratio", "letterbox"),
    volume_group_names=("volume", "volume_control", "audio", "sound"),
    volume_action_names=("volume", "volume_up", "volume_down", "mute", "set_volume"),
    apps_group_names=("apps", "applications", "channels", "streaming"),
    apps_action_names=("launch_app", "select_app", "app", "channel"),
    menu_group_names=("menu", "navigation", "nav", "menu_nav", "ui_nav"),
    navigation_action_names=(
        "up",
        "down",
        "left",
        "right",
        "ok",
        "enter",
        "select",
        "back",
        "menu",
        "home",
        "settings",
        "exit",
        "menu_exit",
    ),
    pointer_group_names=("pointer", "cursor", "mouse", "trackpad"),
    pointer_action_names=(
        "move",
        "click",
        "drag",
        "scroll",
        "cursor",
        "pointer_gesture",
        "touch_at_position",
        "gesture",
        "touch",
    ),
)

# Exact-name bindings for the navigation cluster's auxiliary slots.
NAV_AUX_SLOTS: Final[dict[str, tuple[str, ...]]] = {
    "aux1": ("home", "menu_exit"),
    "aux2": ("menu",),
    "aux3": ("back",),
    "aux4": ("settings", "exit"),
}

PRIMARY_STYLE_KEYWORDS: Final[tuple[str, ...]] = ("play", "home")
DESTRUCTIVE_STYLE_KEYWORDS: Final[tuple[str, ...]] = ("stop", "eject", "power_off")
RECORD_KEYWORDS: Final[tuple[str, ...]] = ("record", "rec")

