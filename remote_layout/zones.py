"""Heuristic assignment of processed actions to the seven remote zones."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from .actions import tokenize_action_name
from .const import (
    DEFAULT_ZONE_DETECTION,
    NAV_AUX_SLOTS,
    ZONE_APPS,
    ZONE_IDS,
    ZONE_MEDIA_STACK,
    ZONE_MENU,
    ZONE_NAMES,
    ZONE_POINTER,
    ZONE_POWER,
    ZONE_SCREEN,
    ZONE_VOLUME,
    ZoneDetectionConfig,
)
from .models import (
    ActionSection,
    DeviceGroup,
    DeviceGroups,
    Dropdown,
    NavigationCluster,
    PointerPad,
    PowerButton,
    ProcessedAction,
    RemoteZone,
    VolumeButtons,
    VolumeSlider,
    ZoneContent,
    ZoneLayout,
)

_LOGGER = logging.getLogger(__name__)

_OFF_PATTERN = re.compile(r"off$")
_ON_PATTERN = re.compile(r"(?:^|[_\-\s]|power)on$")

# Zones rendered as a placeholder when empty rather than hidden.
_ALWAYS_PRESENT = frozenset({ZONE_SCREEN, ZONE_VOLUME, ZONE_MENU})


def matching_groups(groups: DeviceGroups, keywords: Sequence[str]) -> list[DeviceGroup]:
    """Return groups whose lowercased name contains any of ``keywords``."""

    return [
        group
        for group in groups.groups
        if any(keyword in group.group_name.lower() for keyword in keywords)
    ]


def actions_from_groups(
    actions: Sequence[ProcessedAction], groups: Sequence[DeviceGroup]
) -> list[ProcessedAction]:
    """Return ``actions`` named by any of ``groups``, in action order."""

    names = {action.name for group in groups for action in group.actions}
    return [action for action in actions if action.action_name in names]


def actions_by_name(actions: Sequence[ProcessedAction], keywords: Sequence[str]) -> list[ProcessedAction]:
    """Return ``actions`` whose lowercased name contains any of ``keywords``."""

    return [
        action
        for action in actions
        if any(keyword in action.action_name.lower() for keyword in keywords)
    ]


def actions_by_token(actions: Sequence[ProcessedAction], tokens: Sequence[str]) -> list[ProcessedAction]:
    """Return ``actions`` having any of ``tokens`` as a whole name token."""

    wanted = set(tokens)
    return [action for action in actions if wanted.intersection(tokenize_action_name(action.action_name))]


def find_action(actions: Sequence[ProcessedAction], keyword: str) -> ProcessedAction | None:
    """Return the action named ``keyword``, else the first whose name contains it."""

    for action in actions:
        if action.action_name.lower() == keyword:
            return action
    for action in actions:
        if keyword in action.action_name.lower():
            return action
    return None


def find_exact(actions: Sequence[ProcessedAction], names: Sequence[str]) -> ProcessedAction | None:
    """Return the first action whose name equals one of ``names``, by ``names`` order."""

    for name in names:
        for action in actions:
            if action.action_name.lower() == name:
                return action
    return None


def refresh_emptiness(zone: RemoteZone) -> RemoteZone:
    """Recompute ``is_empty`` after a zone's content has been edited."""

    zone.is_empty = not zone.content.has_controls()
    return zone


def build_zone(
    zone_id: str,
    content: ZoneContent,
    layout: ZoneLayout,
    *,
    enabled: bool | None = None,
) -> RemoteZone:
    """Assemble a :class:`RemoteZone` with the fixed name and visibility for ``zone_id``."""

    return RemoteZone(
        zone_id=zone_id,
        zone_name=ZONE_NAMES[zone_id],
        zone_type=zone_id,
        show_hide=zone_id not in _ALWAYS_PRESENT,
        is_empty=not content.has_controls(),
        enabled=enabled,
        content=content,
        layout=layout,
    )


class ZoneDetector:
    """Assign processed actions to the power, media, screen, volume, apps, menu and pointer zones.

    Group-name matches are authoritative: loose action-name matching for a zone
    only runs when no group matched that zone. Each zone is computed from the
    immutable action and group lists alone.
    """

    def __init__(self, detection: ZoneDetectionConfig = DEFAULT_ZONE_DETECTION) -> None:
        self._detection = detection
        self._builders: dict[
            str, Callable[[Sequence[ProcessedAction], DeviceGroups], RemoteZone]
        ] = {
            ZONE_POWER: self._power_zone,
            ZONE_MEDIA_STACK: self._media_stack_zone,
            ZONE_SCREEN: self._screen_zone,
            ZONE_VOLUME: self._volume_zone,
            ZONE_APPS: self._apps_zone,
            ZONE_MENU: self._menu_zone,
            ZONE_POINTER: self._pointer_zone,
        }

    def detect(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> list[RemoteZone]:
        """Return exactly one zone per fixed zone id, in canonical order."""

        zones = [self.detect_zone(zone_id, actions, groups) for zone_id in ZONE_IDS]
        _LOGGER.debug(
            "zone_detection_complete device=%s populated=%s",
            groups.device_id,
            [zone.zone_id for zone in zones if not zone.is_empty],
        )
        return zones

    def detect_zone(
        self, zone_id: str, actions: Sequence[ProcessedAction], groups: DeviceGroups
    ) -> RemoteZone:
        return self._builders[zone_id](actions, groups)

    def _candidates(
        self,
        actions: Sequence[ProcessedAction],
        groups: DeviceGroups,
        group_keywords: Sequence[str],
        name_matcher: Callable[[Sequence[ProcessedAction]], list[ProcessedAction]],
    ) -> tuple[list[DeviceGroup], list[ProcessedAction]]:
        matched = matching_groups(groups, group_keywords)
        if matched:
            return matched, actions_from_groups(actions, matched)
        return matched, name_matcher(actions)

    def _power_zone(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> RemoteZone:
        detection = self._detection
        _, candidates = self._candidates(
            actions,
            groups,
            detection.power_group_names,
            lambda items: actions_by_name(items, detection.power_action_names),
        )

        off_action = next((a for a in candidates if _OFF_PATTERN.search(a.action_name.lower())), None)
        on_action = next((a for a in candidates if _ON_PATTERN.search(a.action_name.lower())), None)
        buttons: list[PowerButton] = []
        if off_action is not None:
            buttons.append(PowerButton(position="left", action=off_action, button_type="power-off"))
        if on_action is not None:
            buttons.append(PowerButton(position="right", action=on_action, button_type="power-on"))
        if off_action is None and on_action is None:
            toggle = next(
                (a for a in candidates if "toggle" in a.action_name.lower()),
                candidates[0] if candidates else None,
            )
            if toggle is not None:
                buttons.append(PowerButton(position="left", action=toggle, button_type="power-toggle"))

        return build_zone(
            ZONE_POWER,
            ZoneContent(power_buttons=buttons),
            ZoneLayout(priority=1, columns=3, spacing="normal", alignment="center", orientation="horizontal"),
        )

    def _media_stack_zone(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> RemoteZone:
        detection = self._detection
        content = ZoneContent()

        if matching_groups(groups, detection.inputs_group_names):
            content.inputs_dropdown = Dropdown(
                type="inputs",
                population_method="api",
                api_action="get_available_inputs",
                set_action="set_input",
                options=[],
                loading=False,
                empty=True,
            )

        _, playback = self._candidates(
            actions,
            groups,
            detection.playback_group_names,
            lambda items: actions_by_token(items, detection.playback_action_tokens),
        )
        if playback:
            content.playback_section = ActionSection(actions=playback, layout="horizontal")

        _, tracks = self._candidates(
            actions,
            groups,
            detection.tracks_group_names,
            lambda items: actions_by_name(items, detection.tracks_action_names),
        )
        tracks = [action for action in tracks if action not in playback]
        if tracks:
            content.tracks_section = ActionSection(actions=tracks, layout="horizontal")

        return build_zone(
            ZONE_MEDIA_STACK,
            content,
            ZoneLayout(priority=2, spacing="normal", alignment="center", orientation="vertical"),
        )

    def _screen_zone(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> RemoteZone:
        detection = self._detection
        _, candidates = self._candidates(
            actions,
            groups,
            detection.screen_group_names,
            lambda items: actions_by_name(items, detection.screen_action_names),
        )
        return build_zone(
            ZONE_SCREEN,
            ZoneContent(screen_actions=candidates or None),
            ZoneLayout(priority=3, spacing="compact", alignment="left", orientation="vertical"),
        )

    def _volume_zone(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> RemoteZone:
        detection = self._detection
        _, candidates = self._candidates(
            actions,
            groups,
            detection.volume_group_names,
            lambda items: actions_by_name(items, detection.volume_action_names),
        )

        content = ZoneContent()
        priority = 2
        slider_action = next((a for a in candidates if a.has_range_parameter()), None)
        mute_action = find_action(candidates, "mute")
        if mute_action is None and candidates:
            mute_action = find_action(actions, "mute")

        if slider_action is not None:
            content.volume_slider = VolumeSlider(
                action=slider_action,
                mute_action=mute_action,
                orientation="vertical",
                show_value=True,
            )
            priority = 1
        elif candidates:
            up_action = find_action(candidates, "up")
            down_action = find_action(candidates, "down")
            if up_action or down_action or mute_action:
                content.volume_buttons = VolumeButtons(
                    up_action=up_action,
                    down_action=down_action,
                    mute_action=mute_action,
                )

        return build_zone(
            ZONE_VOLUME,
            content,
            ZoneLayout(priority=priority, columns=1, spacing="normal", alignment="center", orientation="vertical"),
        )

    def _apps_zone(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> RemoteZone:
        detection = self._detection
        matched, candidates = self._candidates(
            actions,
            groups,
            detection.apps_group_names,
            lambda items: actions_by_name(items, detection.apps_action_names),
        )
        content = ZoneContent()
        if matched or candidates:
            content.apps_dropdown = Dropdown(
                type="apps",
                population_method="api",
                api_action="get_available_apps",
                set_action="launch_app",
                options=[],
                loading=False,
                empty=True,
            )
        return build_zone(
            ZONE_APPS,
            content,
            ZoneLayout(priority=5, spacing="normal", alignment="center", orientation="horizontal"),
        )

    def _menu_zone(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> RemoteZone:
        menu_groups = matching_groups(groups, self._detection.menu_group_names)
        menu_actions = actions_from_groups(actions, menu_groups)
        # Volume up/down must never stand in for a missing direction.
        fallback_pool = [a for a in actions if "volume" not in a.action_name.lower()]

        def _direction(*keywords: str) -> ProcessedAction | None:
            for keyword in keywords:
                found = find_action(menu_actions, keyword)
                if found is not None:
                    return found
            # Outside menu groups only whole tokens count, so "shutdown" is not "down".
            for keyword in keywords:
                found = find_exact(fallback_pool, (keyword,))
                if found is None:
                    found = next(iter(actions_by_token(fallback_pool, (keyword,))), None)
                if found is not None:
                    return found
            return None

        cluster = NavigationCluster(
            up=_direction("up"),
            down=_direction("down"),
            left=_direction("left"),
            right=_direction("right"),
            ok=_direction("ok", "enter", "select"),
            **{slot: find_exact(actions, names) for slot, names in NAV_AUX_SLOTS.items()},
        )
        has_binding = any(getattr(cluster, slot) is not None for slot in NavigationCluster.model_fields)
        content = ZoneContent(navigation_cluster=cluster if has_binding else None)
        return build_zone(
            ZONE_MENU,
            content,
            ZoneLayout(priority=4, columns=3, spacing="normal", alignment="center"),
        )

    def _pointer_zone(self, actions: Sequence[ProcessedAction], groups: DeviceGroups) -> RemoteZone:
        detection = self._detection
        _, candidates = self._candidates(
            actions,
            groups,
            detection.pointer_group_names,
            lambda items: actions_by_name(items, detection.pointer_action_names),
        )
        content = ZoneContent()
        if candidates:
            pad = PointerPad(
                move_action=_first_found(candidates, "gesture", "move", "cursor"),
                click_action=_first_found(candidates, "touch", "click"),
                drag_action=_first_found(candidates, "drag"),
                scroll_action=_first_found(candidates, "scroll"),
            )
            if any(getattr(pad, slot) is not None for slot in PointerPad.model_fields):
                content.pointer_pad = pad
        return build_zone(
            ZONE_POINTER,
            content,
            ZoneLayout(priority=6, spacing="normal", alignment="center"),
        )


def _first_found(actions: Sequence[ProcessedAction], *keywords: str) -> ProcessedAction | None:
    for keyword in keywords:
        found = find_action(actions, keyword)
        if found is not None:
            return found
    return None


__all__ = [
    "ZoneDetector",
    "actions_by_name",
    "actions_by_token",
    "actions_from_groups",
    "build_zone",
    "find_action",
    "find_exact",
    "matching_groups",
    "refresh_emptiness",
]
