"""Resolution of composite scenario devices from their donor devices."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from .const import (
    DEFAULT_MAX_CONCURRENCY,
    ROLE_PLAYBACK,
    ROLE_TRACKS,
    ROLE_ZONES,
    SCENARIO_DEVICE_CLASS,
)
from .errors import DeviceConfigError, ScenarioConfigError
from .groups import coerce_model
from .handlers import DeviceClassHandler, ScenarioDeviceHandler, get_handler
from .models import (
    DeviceConfig,
    DeviceGroups,
    ProcessedAction,
    RemoteDeviceStructure,
    ZoneContent,
)
from .roles import extract_role_map, ui_roles
from .zones import ZoneDetector, refresh_emptiness

_LOGGER = logging.getLogger(__name__)

ConfigProvider = Callable[
    [str], DeviceConfig | Mapping[str, Any] | Awaitable[DeviceConfig | Mapping[str, Any]]
]
GroupsProvider = Callable[
    [str], DeviceGroups | Mapping[str, Any] | None | Awaitable[DeviceGroups | Mapping[str, Any] | None]
]
HandlerFactory = Callable[[str], DeviceClassHandler]


@dataclass(frozen=True)
class DonorLoad:
    """Outcome of loading and compiling one donor device."""

    donor_id: str
    structure: RemoteDeviceStructure | None = None
    error: str | None = None


@dataclass(frozen=True)
class RoleResolution:
    """Inherited zone content for one scenario role, or the reason it is missing."""

    role: str
    donor_id: str
    zone_id: str
    content: ZoneContent | None = None
    error: str | None = None
    repaired: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.content is not None


def role_content(role: str, content: ZoneContent) -> ZoneContent:
    """Return the part of ``content`` that ``role`` owns, as a deep copy."""

    copied = content.model_copy(deep=True)
    if role == ROLE_PLAYBACK:
        return ZoneContent(playback_section=copied.playback_section)
    if role == ROLE_TRACKS:
        return ZoneContent(tracks_section=copied.tracks_section)
    return copied


def tag_source_device(content: ZoneContent, donor_id: str) -> ZoneContent:
    """Route every action and dropdown in ``content`` to ``donor_id``."""

    for action in content.iter_actions():
        action.source_device_id = donor_id
    for dropdown in (content.inputs_dropdown, content.apps_dropdown):
        if dropdown is not None:
            dropdown.source_device_id = donor_id
    return content


def has_inherited_content(content: ZoneContent, role: str, donor_id: str) -> bool:
    """Return ``True`` when ``content`` holds ``role`` controls routed to ``donor_id``."""

    view = role_content(role, content)
    if not view.has_controls():
        return False
    return all(action.source_device_id == donor_id for action in view.iter_actions())


async def call_provider(provider: Callable[[str], Any], device_id: str) -> Any:
    result = provider(device_id)
    if inspect.isawaitable(result):
        result = await result
    return result


class ScenarioResolver:
    """Build a scenario structure by splicing in zone content from donor devices.

    Each role is resolved to a :class:`RoleResolution`; a donor that cannot be
    loaded or compiled leaves its zone empty but enabled and never aborts the
    composite.
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        *,
        groups_provider: GroupsProvider | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        handler_factory: HandlerFactory = get_handler,
        detector: ZoneDetector | None = None,
    ) -> None:
        self._config_provider = config_provider
        self._groups_provider = groups_provider
        self._max_concurrency = max(1, max_concurrency)
        self._handler_factory = handler_factory
        self._detector = detector or ZoneDetector()

    async def resolve(
        self, config: DeviceConfig, groups: DeviceGroups | None = None
    ) -> RemoteDeviceStructure:
        if config.device_class != SCENARIO_DEVICE_CLASS:
            raise ScenarioConfigError(
                f"{config.device_id} is a {config.device_class}, not a {SCENARIO_DEVICE_CLASS}"
            )

        structure = ScenarioDeviceHandler(self._detector).analyze_structure(config, groups)
        role_map = ui_roles(extract_role_map(config))
        donors = await self.load_donors(config.device_id, list(dict.fromkeys(role_map.values())))

        resolutions = [
            self._resolve_role(role, donor_id, donors[donor_id]) for role, donor_id in role_map.items()
        ]
        for resolution in resolutions:
            self._splice(structure, resolution)
        resolutions = [
            self._verify(config.device_id, structure, resolution, donors[resolution.donor_id])
            for resolution in resolutions
        ]
        self._record(structure, resolutions)
        for zone in structure.remote_zones:
            refresh_emptiness(zone)

        failed = sorted(r.role for r in resolutions if not r.ok)
        _LOGGER.info(
            "scenario_resolved scenario=%s roles=%s failed=%s",
            config.device_id,
            sorted(role_map),
            failed,
        )
        # Re-validate so the zone invariants hold after splicing.
        return RemoteDeviceStructure.model_validate(structure.model_dump())

    async def load_donors(self, scenario_id: str, donor_ids: list[str]) -> dict[str, DonorLoad]:
        """Load and compile donors concurrently, at most ``max_concurrency`` at a time."""

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _bounded(donor_id: str) -> DonorLoad:
            async with semaphore:
                return await self._load_donor(scenario_id, donor_id)

        loads = await asyncio.gather(*(_bounded(donor_id) for donor_id in donor_ids))
        return {load.donor_id: load for load in loads}

    async def _load_donor(self, scenario_id: str, donor_id: str) -> DonorLoad:
        try:
            donor_config = coerce_model(DeviceConfig, await call_provider(self._config_provider, donor_id))
            if donor_config.device_id != donor_id:
                raise DeviceConfigError(
                    f"Config for {donor_id} declares device_id {donor_config.device_id}"
                )
            if donor_config.device_class == SCENARIO_DEVICE_CLASS:
                raise ScenarioConfigError(f"Donor {donor_id} is itself a scenario")

            donor_groups: DeviceGroups | None = None
            if self._groups_provider is not None:
                raw_groups = await call_provider(self._groups_provider, donor_id)
                if raw_groups is not None:
                    donor_groups = coerce_model(DeviceGroups, raw_groups)

            handler = self._handler_factory(donor_config.device_class)
            structure = handler.analyze_structure(donor_config, donor_groups)
        except Exception as exc:
            _LOGGER.warning(
                "donor_load_failed scenario=%s donor=%s error=%s",
                scenario_id,
                donor_id,
                exc,
            )
            return DonorLoad(donor_id=donor_id, error=f"{type(exc).__name__}: {exc}")
        return DonorLoad(donor_id=donor_id, structure=structure)

    def _resolve_role(self, role: str, donor_id: str, load: DonorLoad) -> RoleResolution:
        zone_id = ROLE_ZONES[role]
        if load.structure is None:
            return RoleResolution(role=role, donor_id=donor_id, zone_id=zone_id, error=load.error)
        content = role_content(role, load.structure.zone(zone_id).content)
        return RoleResolution(
            role=role,
            donor_id=donor_id,
            zone_id=zone_id,
            content=tag_source_device(content, donor_id),
        )

    def _splice(self, structure: RemoteDeviceStructure, resolution: RoleResolution) -> None:
        zone = structure.zone(resolution.zone_id)
        content = resolution.content if resolution.ok else ZoneContent()
        if resolution.role == ROLE_PLAYBACK:
            zone.content.playback_section = content.playback_section
        elif resolution.role == ROLE_TRACKS:
            zone.content.tracks_section = content.tracks_section
        else:
            zone.content = content
        zone.enabled = True
        if not resolution.ok:
            _LOGGER.warning(
                "scenario_zone_left_empty zone=%s role=%s donor=%s error=%s",
                resolution.zone_id,
                resolution.role,
                resolution.donor_id,
                resolution.error,
            )

    def _verify(
        self,
        scenario_id: str,
        structure: RemoteDeviceStructure,
        resolution: RoleResolution,
        load: DonorLoad,
    ) -> RoleResolution:
        """Repair a zone that should hold donor content but does not."""

        if not resolution.ok or load.structure is None:
            return resolution
        zone = structure.zone(resolution.zone_id)
        if has_inherited_content(zone.content, resolution.role, resolution.donor_id):
            return resolution

        rederived = tag_source_device(self._rederive(resolution, load.structure), resolution.donor_id)
        if not rederived.has_controls():
            _LOGGER.info(
                "scenario_zone_without_donor_content scenario=%s role=%s donor=%s",
                scenario_id,
                resolution.role,
                resolution.donor_id,
            )
            return resolution

        repaired = replace(resolution, content=rederived, repaired=True)
        self._splice(structure, repaired)
        _LOGGER.info(
            "scenario_zone_repaired scenario=%s role=%s donor=%s",
            scenario_id,
            resolution.role,
            resolution.donor_id,
        )
        return repaired

    def _rederive(self, resolution: RoleResolution, donor: RemoteDeviceStructure) -> ZoneContent:
        """Detect the role's zone again from the donor's processed actions alone."""

        actions: list[ProcessedAction] = []
        seen: set[str] = set()
        for action in donor.iter_actions():
            if action.action_name in seen:
                continue
            seen.add(action.action_name)
            actions.append(action.model_copy(deep=True))
        zone = self._detector.detect_zone(
            resolution.zone_id, actions, DeviceGroups(device_id=donor.device_id, groups=[])
        )
        return role_content(resolution.role, zone.content)

    def _record(self, structure: RemoteDeviceStructure, resolutions: list[RoleResolution]) -> None:
        for case in structure.special_cases:
            if case.device_class != SCENARIO_DEVICE_CLASS:
                continue
            case.configuration["inheritedRoles"] = {r.role: r.donor_id for r in resolutions if r.ok}
            case.configuration["failedRoles"] = {r.role: r.error for r in resolutions if not r.ok}
            case.configuration["repairedRoles"] = sorted(r.role for r in resolutions if r.repaired)


__all__ = [
    "ConfigProvider",
    "DonorLoad",
    "GroupsProvider",
    "RoleResolution",
    "call_provider",
    "ScenarioResolver",
    "has_inherited_content",
    "role_content",
    "tag_source_device",
]
