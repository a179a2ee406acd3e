"""Scenario role extraction and zone enablement rules."""

from __future__ import annotations

import logging

from .const import (
    ROLE_INPUTS,
    ROLE_MENU,
    ROLE_NAVIGATION,
    ROLE_PLAYBACK,
    ROLE_POWER,
    ROLE_TRACKS,
    ROLE_ZONES,
    SCENARIO_LOCATION,
    ZONE_IDS,
    ZONE_MEDIA_STACK,
    ZONE_MENU,
    ZONE_POWER,
)
from .models import DeviceConfig

_LOGGER = logging.getLogger(__name__)


def command_role(name: str, group: str | None) -> str:
    """Return the role a scenario command belongs to."""

    return (group or name).lower()


def extract_role_map(config: DeviceConfig) -> dict[str, str]:
    """Return ``{role: donor_device_id}`` from the location-tagged commands.

    Power is always scenario-native and never delegated. The first donor seen
    for a role wins; later conflicting donors are logged and ignored.
    """

    role_map: dict[str, str] = {}
    for name, command in config.commands.items():
        donor = command.location
        if not donor or donor == SCENARIO_LOCATION or donor == config.device_id:
            continue
        role = command_role(name, command.group)
        if role == ROLE_POWER:
            continue
        existing = role_map.get(role)
        if existing is None:
            role_map[role] = donor
        elif existing != donor:
            _LOGGER.warning(
                "scenario_role_conflict scenario=%s role=%s kept=%s ignored=%s",
                config.device_id,
                role,
                existing,
                donor,
            )
    return role_map


def zone_enablement(role_map: dict[str, str]) -> dict[str, bool]:
    """Return the enabled flag for every zone given a scenario's roles."""

    roles = set(role_map) - {ROLE_INPUTS}
    enabled = {zone_id: False for zone_id in ZONE_IDS}
    enabled[ZONE_POWER] = True
    enabled[ZONE_MEDIA_STACK] = bool(roles & {ROLE_PLAYBACK, ROLE_TRACKS})
    enabled[ZONE_MENU] = bool(roles & {ROLE_NAVIGATION, ROLE_MENU})
    for zone_id in ZONE_IDS:
        if zone_id in (ZONE_POWER, ZONE_MEDIA_STACK, ZONE_MENU):
            continue
        enabled[zone_id] = zone_id in roles
    return enabled


def ui_roles(role_map: dict[str, str]) -> dict[str, str]:
    """Return the roles that map to a rendered zone."""

    return {role: donor for role, donor in role_map.items() if role in ROLE_ZONES}
