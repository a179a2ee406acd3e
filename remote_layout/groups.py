"""Helpers for building and coercing device grouping documents."""

from __future__ import annotations

from typing import Any, Mapping, Type, TypeVar

from .const import DEFAULT_GROUP_ID, DEFAULT_GROUP_STATUS
from .models import DeviceConfig, DeviceGroup, DeviceGroups, GroupAction

ModelT = TypeVar("ModelT", DeviceConfig, DeviceGroups)


def derive_groups(config: DeviceConfig) -> DeviceGroups:
    """Derive a grouping document from the ``group`` field of each command.

    A ``default`` group always comes first and collects ungrouped commands.
    Remaining groups keep the order in which they first appear.
    """

    grouped: dict[str, list[GroupAction]] = {DEFAULT_GROUP_ID: []}
    for name, command in config.commands.items():
        group_id = command.group or DEFAULT_GROUP_ID
        grouped.setdefault(group_id, []).append(
            GroupAction(
                name=command.action or name,
                description=command.description,
                params=command.params,
            )
        )

    return DeviceGroups(
        device_id=config.device_id,
        groups=[
            DeviceGroup(
                group_id=group_id,
                group_name=group_id.capitalize(),
                actions=actions,
                status=DEFAULT_GROUP_STATUS,
            )
            for group_id, actions in grouped.items()
        ],
    )


def without_groups(groups: DeviceGroups, excluded: frozenset[str]) -> DeviceGroups:
    """Return ``groups`` minus any group whose id or name is in ``excluded``."""

    kept = [
        group
        for group in groups.groups
        if group.group_id.lower() not in excluded and group.group_name.lower() not in excluded
    ]
    return DeviceGroups(device_id=groups.device_id, groups=kept)


def coerce_model(model: Type[ModelT], item: ModelT | Mapping[str, Any]) -> ModelT:
    """Return ``item`` as an instance of ``model``."""

    if isinstance(item, model):
        return item

    if isinstance(item, Mapping):
        return model.model_validate(item)

    raise TypeError(f"Unsupported {model.__name__} input type: {type(item)!r}")
