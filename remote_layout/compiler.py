"""Entry points that turn one device config into a remote structure."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

from .const import DEFAULT_MAX_CONCURRENCY, SCENARIO_DEVICE_CLASS
from .groups import coerce_model
from .handlers import get_handler
from .models import DeviceConfig, DeviceGroups, RemoteDeviceStructure
from .scenario import ConfigProvider, GroupsProvider, ScenarioResolver
from .validation import validate_device_config


async def compile_device(
    config: DeviceConfig | Mapping[str, Any],
    groups: DeviceGroups | Mapping[str, Any] | None = None,
    *,
    config_provider: ConfigProvider | None = None,
    groups_provider: GroupsProvider | None = None,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> RemoteDeviceStructure:
    """Compile ``config`` with the handler registered for its device class.

    Scenario devices also need ``config_provider`` to load their donors.
    """

    device_config = validate_device_config(config)
    device_groups = coerce_model(DeviceGroups, groups) if groups is not None else None

    if device_config.device_class == SCENARIO_DEVICE_CLASS:
        if config_provider is None:
            raise ValueError(f"Scenario {device_config.device_id} needs a config provider for its donors")
        resolver = ScenarioResolver(
            config_provider,
            groups_provider=groups_provider,
            max_concurrency=max_concurrency,
        )
        return await resolver.resolve(device_config, device_groups)

    return get_handler(device_config.device_class).analyze_structure(device_config, device_groups)


def compile_device_sync(
    config: DeviceConfig | Mapping[str, Any],
    groups: DeviceGroups | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> RemoteDeviceStructure:
    """Blocking wrapper around :func:`compile_device`."""

    return asyncio.run(compile_device(config, groups, **kwargs))
