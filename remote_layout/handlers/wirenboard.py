"""Handler for Wirenboard IR blaster devices."""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..actions import format_display_name
from ..const import ZONE_MEDIA_STACK
from ..models import (
    DeviceConfig,
    Dropdown,
    DropdownOption,
    ProcessedAction,
    RemoteZone,
    SpecialCase,
)
from .base import DeviceClassHandler, zone_by_id

INPUT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^input[_-]?(\w+)$", re.IGNORECASE),
    re.compile(r"^(\w+?)[_-]?source$", re.IGNORECASE),
    re.compile(
        r"^(hdmi\d*|av\d*|usb\d*|component\d*|composite\d*|optical\d*|coax\d*|aux\d*|vga\d*|dvi\d*)$",
        re.IGNORECASE,
    ),
)

# Captures that name an input command rather than an input.
_NOT_AN_INPUT = frozenset({"source", "select", "toggle", "next", "prev", "previous", "list", "menu", ""})


def synthesize_input_options(config: DeviceConfig) -> list[DropdownOption]:
    """Build input dropdown options from command names such as ``input_hdmi1``."""

    options: list[DropdownOption] = []
    seen: set[str] = set()
    for name, command in config.commands.items():
        for pattern in INPUT_PATTERNS:
            match = pattern.match(name)
            if match is None:
                continue
            option_id = match.group(1).strip("_-").lower()
            if option_id in _NOT_AN_INPUT or option_id in seen:
                break
            seen.add(option_id)
            options.append(
                DropdownOption(
                    id=option_id,
                    display_name=format_display_name(option_id),
                    description=command.description or None,
                    action_name=name,
                )
            )
            break
    return options


class WirenboardIRHandler(DeviceClassHandler):
    """IR devices carry no group semantics, so inputs come from command names."""

    device_class = "WirenboardIRDevice"
    state_fields = (
        ("power", "'on' | 'off'", True, "Last known power state"),
        ("lastAction", "string", True, "Last command sent"),
    )

    def adjust_zones(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: list[RemoteZone],
    ) -> list[RemoteZone]:
        media = zone_by_id(zones, ZONE_MEDIA_STACK)
        options = synthesize_input_options(config)
        if options:
            media.content.inputs_dropdown = Dropdown(
                type="inputs",
                population_method="commands",
                options=options,
                loading=False,
                empty=False,
            )
        else:
            media.content.inputs_dropdown = None
        return zones

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        dropdown = zone_by_id(zones, ZONE_MEDIA_STACK).content.inputs_dropdown
        return [
            SpecialCase(
                device_class=self.device_class,
                case_type="ir-command-inputs",
                configuration={
                    "usesCommandInputs": dropdown is not None,
                    "inputOptions": [option.id for option in dropdown.options] if dropdown else [],
                },
            )
        ]
