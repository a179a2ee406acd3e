"""Keyword-driven icon selection for device actions."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Literal, NamedTuple

from .const import (
    CLASS_ICON_CONFIDENCE,
    ICON_EXACT_CONFIDENCE,
    ICON_FALLBACK_CONFIDENCE,
    ICON_OVERRIDE_THRESHOLD,
    ICON_PARTIAL_CONFIDENCE,
)
from .models import Icon

IconLibrary = Literal["heroicons", "material"]

_STRIP_PATTERN = re.compile(r"[\s_\-]+")

FALLBACK_ICON = "CommandLineIcon"
FALLBACK_MATERIAL_ICON = "Settings"
FALLBACK_NAME = "command"


class IconMapping(NamedTuple):
    heroicons: str
    material: str
    fallback: str


ICON_MAPPINGS: dict[str, IconMapping] = {
    # Power
    "power": IconMapping("PowerIcon", "PowerSettingsNew", "power"),
    # Navigation
    "up": IconMapping("ChevronUpIcon", "KeyboardArrowUp", "up"),
    "down": IconMapping("ChevronDownIcon", "KeyboardArrowDown", "down"),
    "left": IconMapping("ChevronLeftIcon", "KeyboardArrowLeft", "left"),
    "right": IconMapping("ChevronRightIcon", "KeyboardArrowRight", "right"),
    "ok": IconMapping("CheckCircleIcon", "RadioButtonChecked", "ok"),
    "enter": IconMapping("CheckCircleIcon", "KeyboardReturn", "enter"),
    "select": IconMapping("CheckCircleIcon", "CheckCircle", "select"),
    "menu": IconMapping("Bars3Icon", "Menu", "menu"),
    "back": IconMapping("ArrowLeftIcon", "ArrowBack", "back"),
    "home": IconMapping("HomeIcon", "Home", "home"),
    "exit": IconMapping("ArrowRightOnRectangleIcon", "ExitToApp", "exit"),
    "guide": IconMapping("BookOpenIcon", "MenuBook", "guide"),
    "info": IconMapping("InformationCircleIcon", "Info", "info"),
    "settings": IconMapping("Cog6ToothIcon", "Settings", "settings"),
    # Playback
    "play": IconMapping("PlayIcon", "PlayArrow", "play"),
    "pause": IconMapping("PauseIcon", "Pause", "pause"),
    "stop": IconMapping("StopIcon", "Stop", "stop"),
    "next": IconMapping("ForwardIcon", "SkipNext", "next"),
    "previous": IconMapping("BackwardIcon", "SkipPrevious", "previous"),
    "rewind": IconMapping("BackwardIcon", "FastRewind", "rewind"),
    "fastforward": IconMapping("ForwardIcon", "FastForward", "fast-forward"),
    "record": IconMapping("VideoCameraIcon", "FiberManualRecord", "record"),
    "eject": IconMapping("ArrowUpTrayIcon", "Eject", "eject"),
    "shuffle": IconMapping("ArrowsRightLeftIcon", "Shuffle", "shuffle"),
    "repeat": IconMapping("ArrowPathIcon", "Repeat", "repeat"),
    "subtitle": IconMapping("ChatBubbleBottomCenterTextIcon", "Subtitles", "subtitle"),
    "track": IconMapping("MusicalNoteIcon", "Album", "track"),
    # Volume
    "volume": IconMapping("SpeakerWaveIcon", "VolumeUp", "volume"),
    "volumeup": IconMapping("SpeakerWaveIcon", "VolumeUp", "volume-up"),
    "volumedown": IconMapping("SpeakerXMarkIcon", "VolumeDown", "volume-down"),
    "mute": IconMapping("SpeakerXMarkIcon", "VolumeOff", "mute"),
    # Inputs and sources
    "tv": IconMapping("TvIcon", "Tv", "tv"),
    "input": IconMapping("ArrowsRightLeftIcon", "Input", "input"),
    "hdmi": IconMapping("ArrowsRightLeftIcon", "SettingsInputHdmi", "hdmi"),
    "source": IconMapping("ArrowsRightLeftIcon", "Input", "source"),
    "channel": IconMapping("TvIcon", "LiveTv", "channel"),
    # Streaming and apps
    "siri": IconMapping("MicrophoneIcon", "Mic", "siri"),
    "voice": IconMapping("MicrophoneIcon", "KeyboardVoice", "voice"),
    "airplay": IconMapping("ComputerDesktopIcon", "Airplay", "airplay"),
    "app": IconMapping("Squares2X2Icon", "Apps", "app"),
    # Screen
    "aspect": IconMapping("RectangleGroupIcon", "AspectRatio", "aspect"),
    "zoom": IconMapping("MagnifyingGlassPlusIcon", "ZoomIn", "zoom"),
    "picture": IconMapping("PhotoIcon", "Image", "picture"),
    # Appliances
    "fan": IconMapping("CogIcon", "Toys", "fan"),
    "speed": IconMapping("BoltIcon", "Speed", "speed"),
    "light": IconMapping("LightBulbIcon", "Lightbulb", "light"),
    "timer": IconMapping("ClockIcon", "Timer", "timer"),
    "filter": IconMapping("FunnelIcon", "FilterAlt", "filter"),
    "turbo": IconMapping("BoltIcon", "FlashOn", "turbo"),
    "mode": IconMapping("AdjustmentsHorizontalIcon", "Tune", "mode"),
    # Audio controls
    "bass": IconMapping("AdjustmentsVerticalIcon", "GraphicEq", "bass"),
    "treble": IconMapping("AdjustmentsVerticalIcon", "GraphicEq", "treble"),
    "balance": IconMapping("ScaleIcon", "Tune", "balance"),
    "eq": IconMapping("AdjustmentsHorizontalIcon", "Equalizer", "eq"),
    "zone": IconMapping("MapIcon", "Layers", "zone"),
    # Pointer
    "cursor": IconMapping("CursorArrowRaysIcon", "CropFree", "cursor"),
    "click": IconMapping("CursorArrowRippleIcon", "TouchApp", "click"),
    "drag": IconMapping("HandRaisedIcon", "PanTool", "drag"),
    "scroll": IconMapping("ArrowsUpDownIcon", "UnfoldMore", "scroll"),
}


def clean_action_name(action_name: str) -> str:
    """Lowercase ``action_name`` and strip separators and whitespace."""

    return _STRIP_PATTERN.sub("", action_name.lower())


def _find_mapping(clean_name: str) -> tuple[IconMapping, float] | None:
    if not clean_name:
        return None

    exact = ICON_MAPPINGS.get(clean_name)
    if exact is not None:
        return exact, ICON_EXACT_CONFIDENCE

    # Prefer the longest key contained in the name, then the shortest key containing it.
    contained = [key for key in ICON_MAPPINGS if key in clean_name]
    if contained:
        best = max(contained, key=len)
        return ICON_MAPPINGS[best], ICON_PARTIAL_CONFIDENCE

    containing = [key for key in ICON_MAPPINGS if clean_name in key]
    if containing:
        best = min(containing, key=len)
        return ICON_MAPPINGS[best], ICON_PARTIAL_CONFIDENCE

    return None


def select_icon_for_action(action_name: str, library: IconLibrary = "heroicons") -> Icon:
    """Return the best generic icon for ``action_name``."""

    found = _find_mapping(clean_action_name(action_name))
    if found is None:
        return Icon(
            library="fallback",
            name=FALLBACK_ICON if library == "heroicons" else FALLBACK_MATERIAL_ICON,
            fallback=FALLBACK_NAME,
            confidence=ICON_FALLBACK_CONFIDENCE,
        )

    mapping, confidence = found
    if library == "material":
        return Icon(
            library="material",
            name=mapping.material,
            fallback=mapping.fallback,
            confidence=confidence,
        )
    return Icon(
        library="heroicons",
        name=mapping.heroicons,
        variant="outline",
        fallback=mapping.fallback,
        confidence=confidence,
    )


class IconResolver:
    """Generic icon lookup with optional class-specific keyword overrides.

    ``overrides`` maps a keyword to a Material icon name. The generic result
    is kept unless its confidence is below ``ICON_OVERRIDE_THRESHOLD`` and an
    override keyword occurs in the action name; exact override keys win over
    substring matches.
    """

    def __init__(
        self,
        overrides: Mapping[str, str] | None = None,
        *,
        library: IconLibrary = "heroicons",
        force_overrides: bool = False,
    ) -> None:
        self._overrides = dict(overrides or {})
        self._library = library
        self._force_overrides = force_overrides

    def resolve(self, action_name: str) -> Icon:
        icon = select_icon_for_action(action_name, self._library)
        if not self._overrides:
            return icon
        if icon.confidence >= ICON_OVERRIDE_THRESHOLD and not self._force_overrides:
            return icon

        override = self._match_override(action_name)
        if override is None:
            return icon
        return Icon(
            library="material",
            name=override,
            fallback=icon.fallback,
            confidence=CLASS_ICON_CONFIDENCE,
        )

    def _match_override(self, action_name: str) -> str | None:
        lowered = action_name.lower()
        if lowered in self._overrides:
            return self._overrides[lowered]
        tokens = set(_STRIP_PATTERN.split(lowered))
        for keyword, icon_name in self._overrides.items():
            # Short keywords such as "ff" or "eq" only match whole tokens.
            if keyword in tokens or (len(keyword) > 3 and keyword in lowered):
                return icon_name
        return None


__all__ = [
    "ICON_MAPPINGS",
    "IconMapping",
    "IconResolver",
    "clean_action_name",
    "select_icon_for_action",
]
