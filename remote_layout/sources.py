"""Lookup of device configs across scenarios, local files and the device API."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .config_store import DeviceConfigClient, LocalDeviceConfigStore
from .errors import DeviceConfigError
from .models import DeviceConfig, DeviceGroups
from .scenario_config import ScenarioDefinition, build_virtual_device_config

_LOGGER = logging.getLogger(__name__)


class DeviceSources:
    """Resolve device ids to configs and groups.

    Scenarios shadow local configs, which shadow the API. Groups are only
    fetched from the API; other devices derive theirs from command groups.
    """

    def __init__(
        self,
        *,
        scenarios: Iterable[ScenarioDefinition] = (),
        store: LocalDeviceConfigStore | None = None,
        client: DeviceConfigClient | None = None,
    ) -> None:
        self._scenarios = {
            scenario.scenario_id: build_virtual_device_config(scenario) for scenario in scenarios
        }
        self._store = store
        self._client = client

    async def get_config(self, device_id: str) -> DeviceConfig:
        if device_id in self._scenarios:
            return self._scenarios[device_id]
        if self._store is not None and device_id in self._store.all_device_ids():
            return self._store.get_device_config(device_id)
        if self._client is not None:
            return await self._client.fetch_device_config(device_id)
        raise DeviceConfigError(f"No device config found for {device_id}")

    async def get_groups(self, device_id: str) -> DeviceGroups | None:
        if self._client is None or device_id in self._scenarios:
            return None
        if self._store is not None and device_id in self._store.all_device_ids():
            return None
        return await self._client.fetch_device_groups(device_id)

    async def all_device_ids(self) -> list[str]:
        device_ids: list[str] = []
        if self._store is not None:
            device_ids.extend(self._store.all_device_ids())
        if self._client is not None:
            device_ids.extend(await self._client.list_device_ids())
        device_ids.extend(self._scenarios)
        return list(dict.fromkeys(device_ids))

    async def device_ids_by_class(self, device_classes: Iterable[str]) -> list[str]:
        wanted = set(device_classes)
        device_ids: list[str] = []
        for device_id in await self.all_device_ids():
            try:
                config = await self.get_config(device_id)
            except DeviceConfigError as exc:
                _LOGGER.warning("device_class_lookup_failed device=%s error=%s", device_id, exc)
                continue
            if config.device_class in wanted:
                device_ids.append(device_id)
        return device_ids
