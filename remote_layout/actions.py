"""Normalization of raw device commands into processed actions."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from .const import (
    DEFAULT_GROUP_ID,
    DESTRUCTIVE_STYLE_KEYWORDS,
    PRIMARY_STYLE_KEYWORDS,
    RECORD_KEYWORDS,
)
from .icons import IconResolver
from .models import DeviceGroups, GroupAction, ProcessedAction, UIHints

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_TOKEN_SPLIT = re.compile(r"[_\-\s]+")


def tokenize_action_name(action_name: str) -> list[str]:
    """Split ``action_name`` on underscores, dashes and camelCase boundaries."""

    spaced = _CAMEL_BOUNDARY.sub(" ", action_name)
    return [token.lower() for token in _TOKEN_SPLIT.split(spaced) if token]


def format_display_name(action_name: str, irregular: Mapping[str, str] | None = None) -> str:
    """Return a human readable label such as ``"Volume Up"`` for ``volume_up``."""

    if irregular:
        override = irregular.get(action_name.lower())
        if override is not None:
            return override
    return " ".join(token.capitalize() for token in tokenize_action_name(action_name))


def infer_button_style(
    action_name: str,
    *,
    primary: Iterable[str] = PRIMARY_STYLE_KEYWORDS,
    destructive: Iterable[str] = DESTRUCTIVE_STYLE_KEYWORDS,
) -> str:
    """Infer the button style for ``action_name`` from keyword membership."""

    lowered = action_name.lower()
    tokens = tokenize_action_name(action_name)
    if any(keyword in tokens for keyword in RECORD_KEYWORDS) or "record" in lowered:
        return "destructive"
    if any(keyword in lowered for keyword in destructive):
        return "destructive"
    if any(keyword in lowered for keyword in primary):
        return "primary"
    return "secondary"


class ActionNormalizer:
    """Convert group actions into :class:`ProcessedAction` instances.

    Handlers configure the irregular display names, icon overrides and style
    keywords for their device class; the defaults give the generic behaviour.
    """

    def __init__(
        self,
        *,
        irregular_names: Mapping[str, str] | None = None,
        icon_resolver: IconResolver | None = None,
        primary_keywords: Iterable[str] = PRIMARY_STYLE_KEYWORDS,
        destructive_keywords: Iterable[str] = DESTRUCTIVE_STYLE_KEYWORDS,
    ) -> None:
        self._irregular_names = dict(irregular_names or {})
        self._icon_resolver = icon_resolver or IconResolver()
        self._primary_keywords = tuple(primary_keywords)
        self._destructive_keywords = tuple(destructive_keywords)

    def display_name(self, action_name: str) -> str:
        return format_display_name(action_name, self._irregular_names)

    def normalize(
        self,
        action: GroupAction,
        group: str = DEFAULT_GROUP_ID,
        *,
        display_name: str | None = None,
        zone_number: int | None = None,
        is_pointer_action: bool = False,
    ) -> ProcessedAction:
        parameters = [param.model_copy() for param in action.params or ()]
        return ProcessedAction(
            action_name=action.name,
            display_name=display_name or self.display_name(action.name),
            description=action.description,
            parameters=parameters,
            group=group,
            icon=self._icon_resolver.resolve(action.name),
            ui_hints=UIHints(
                button_style=infer_button_style(
                    action.name,
                    primary=self._primary_keywords,
                    destructive=self._destructive_keywords,
                ),
                is_pointer_action=is_pointer_action,
                has_parameters=bool(parameters),
                zone_number=zone_number,
            ),
        )

    def normalize_groups(self, groups: DeviceGroups) -> list[ProcessedAction]:
        """Normalize every action of every group, first occurrence wins."""

        processed: list[ProcessedAction] = []
        seen: set[str] = set()
        for group in groups.groups:
            for action in group.actions:
                if action.name in seen:
                    continue
                seen.add(action.name)
                processed.append(self.normalize(action, group.group_id))
        return processed


__all__ = [
    "ActionNormalizer",
    "format_display_name",
    "infer_button_style",
    "tokenize_action_name",
]
