"""Handler for the Revox A77 reel-to-reel tape deck."""

from __future__ import annotations

from collections.abc import Sequence

from ..actions import tokenize_action_name
from ..const import EXCLUDED_GROUP_NAMES
from ..models import DeviceConfig, ProcessedAction, RemoteZone, SpecialCase
from .base import DeviceClassHandler

RECORD_TOKENS = frozenset({"rec", "record"})
SPEED_TOKENS = frozenset({"speed", "ips"})


class RevoxA77Handler(DeviceClassHandler):
    """Tape transport vocabulary; recording is always styled as destructive."""

    device_class = "RevoxA77ReelToReel"
    excluded_groups = EXCLUDED_GROUP_NAMES
    irregular_names = {
        "ff": "Fast Forward",
        "rew": "Rewind",
        "rec": "Record",
        "pb": "Playback",
        "stop": "Stop",
        "pause": "Pause",
        "eject": "Eject",
        "auto_stop": "Auto Stop",
        "tape_speed": "Tape Speed",
        "ips": "IPS",
        "7_5_ips": "7.5 IPS",
        "15_ips": "15 IPS",
        "bias": "Bias",
        "eq": "EQ",
        "line_in": "Line In",
        "mic_in": "Mic In",
    }
    primary_keywords = ("play", "playback", "pb")
    destructive_keywords = ("stop", "eject", "power_off")
    icon_library = "material"
    force_icon_overrides = True
    icon_overrides = {
        "record": "FiberManualRecord",
        "rec": "FiberManualRecord",
        "fast_forward": "FastForward",
        "rewind_forward": "FastForward",
        "rewind_backward": "FastRewind",
        "rewind": "FastRewind",
        "ff": "FastForward",
        "rew": "FastRewind",
        "eject": "Eject",
        "volume": "VolumeUp",
        "mute": "VolumeOff",
        "input": "Input",
        "mic": "Mic",
        "line": "Cable",
        "tape": "AudioFile",
        "speed": "Speed",
        "ips": "Timer",
        "bias": "Tune",
        "eq": "Equalizer",
        "level": "BarChart",
        "meter": "Analytics",
        "auto": "AutoMode",
        "manual": "Settings",
    }
    state_fields = (("connection_status", "string", True, "Bridge connection status"),)

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        tokens = [set(tokenize_action_name(action.action_name)) for action in actions]
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="revox-tape-deck",
                configuration={
                    "hasRecording": any(token_set & RECORD_TOKENS for token_set in tokens),
                    "hasTapeSpeedControl": any(token_set & SPEED_TOKENS for token_set in tokens),
                    "transportActions": sorted(
                        action.action_name
                        for action in actions
                        if action.ui_hints.button_style != "secondary"
                    ),
                },
            )
        ]
