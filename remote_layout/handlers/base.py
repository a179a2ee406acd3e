"""Shared pipeline for device class handlers."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import ClassVar

from ..actions import ActionNormalizer
from ..const import DESTRUCTIVE_STYLE_KEYWORDS, PRIMARY_STYLE_KEYWORDS
from ..groups import derive_groups, without_groups
from ..icons import IconLibrary, IconResolver
from ..models import (
    ActionHandler,
    DeviceCommand,
    DeviceConfig,
    DeviceGroups,
    ProcessedAction,
    RemoteDeviceStructure,
    RemoteZone,
    SpecialCase,
    StateDefinition,
    StateField,
)
from ..zones import ZoneDetector, refresh_emptiness

_LOGGER = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z]+")

EXECUTE_ACTION_DEPENDENCY = "useExecuteDeviceAction"


def pascal_case(value: str) -> str:
    """Return ``value`` as a PascalCase identifier (``living_room_tv`` -> ``LivingRoomTv``)."""

    parts = [part for part in _NON_IDENTIFIER.split(value) if part]
    joined = "".join(part[:1].upper() + part[1:] for part in parts)
    if joined and joined[0].isdigit():
        joined = f"Device{joined}"
    return joined or "Device"


class DeviceClassHandler:
    """Compile a device configuration into a :class:`RemoteDeviceStructure`.

    Subclasses tune the class attributes for their vocabulary and override the
    hooks around generic zone detection:

    ``prepare_groups`` rewrites the grouping document before normalization,
    ``process_actions`` turns groups into processed actions,
    ``adjust_zones`` performs class-specific zone surgery after detection and
    ``special_cases`` describes those augmentations in the output.
    """

    device_class: ClassVar[str] = ""
    irregular_names: ClassVar[Mapping[str, str]] = {}
    icon_overrides: ClassVar[Mapping[str, str]] = {}
    icon_library: ClassVar[IconLibrary] = "heroicons"
    force_icon_overrides: ClassVar[bool] = False
    primary_keywords: ClassVar[tuple[str, ...]] = PRIMARY_STYLE_KEYWORDS
    destructive_keywords: ClassVar[tuple[str, ...]] = DESTRUCTIVE_STYLE_KEYWORDS
    excluded_groups: ClassVar[frozenset[str]] = frozenset()
    state_fields: ClassVar[tuple[tuple[str, str, bool, str], ...]] = (
        ("power", "'on' | 'off'", True, "Power state"),
    )

    def __init__(self, detector: ZoneDetector | None = None) -> None:
        self._detector = detector or ZoneDetector()
        self._normalizer = ActionNormalizer(
            irregular_names=self.irregular_names,
            icon_resolver=IconResolver(
                self.icon_overrides,
                library=self.icon_library,
                force_overrides=self.force_icon_overrides,
            ),
            primary_keywords=self.primary_keywords,
            destructive_keywords=self.destructive_keywords,
        )

    @property
    def normalizer(self) -> ActionNormalizer:
        return self._normalizer

    def analyze_structure(
        self, config: DeviceConfig, groups: DeviceGroups | None = None
    ) -> RemoteDeviceStructure:
        """Run the full pipeline for ``config`` and return its structure."""

        source_groups = groups if groups is not None else derive_groups(config)
        prepared = self.prepare_groups(config, source_groups)
        actions = self.process_actions(config, prepared)
        zones = self._detector.detect(actions, prepared)
        zones = self.adjust_zones(config, actions, zones)
        for zone in zones:
            refresh_emptiness(zone)

        structure = RemoteDeviceStructure(
            device_id=config.device_id,
            device_name=config.device_name,
            device_class=config.device_class,
            remote_zones=zones,
            state_interface=self.state_interface(config),
            action_handlers=self.action_handlers(config),
            special_cases=self.special_cases(config, actions, zones),
        )
        _LOGGER.info(
            "device_structure_compiled device=%s class=%s actions=%s populated=%s",
            config.device_id,
            config.device_class,
            len(actions),
            [zone.zone_id for zone in zones if not zone.is_empty],
        )
        return structure

    def prepare_groups(self, config: DeviceConfig, groups: DeviceGroups) -> DeviceGroups:
        if not self.excluded_groups:
            return groups
        return without_groups(groups, self.excluded_groups)

    def process_actions(self, config: DeviceConfig, groups: DeviceGroups) -> list[ProcessedAction]:
        return self._normalizer.normalize_groups(groups)

    def adjust_zones(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: list[RemoteZone],
    ) -> list[RemoteZone]:
        return zones

    def special_cases(
        self,
        config: DeviceConfig,
        actions: Sequence[ProcessedAction],
        zones: Sequence[RemoteZone],
    ) -> list[SpecialCase]:
        return []

    def state_interface(self, config: DeviceConfig) -> StateDefinition:
        return StateDefinition(
            interface_name=f"{pascal_case(self.device_class or config.device_class)}State",
            fields=[
                StateField(name=name, type=type_, optional=optional, description=description)
                for name, type_, optional, description in self.state_fields
            ],
        )

    def action_handlers(self, config: DeviceConfig) -> list[ActionHandler]:
        return [
            ActionHandler(
                action_name=name,
                action=command.action or name,
                device_id=self.target_device_id(config, command),
                dependencies=[EXECUTE_ACTION_DEPENDENCY],
            )
            for name, command in config.commands.items()
        ]

    def target_device_id(self, config: DeviceConfig, command: DeviceCommand) -> str:
        return config.device_id


def zone_by_id(zones: Sequence[RemoteZone], zone_id: str) -> RemoteZone:
    for zone in zones:
        if zone.zone_id == zone_id:
            return zone
    raise KeyError(zone_id)
