"""Device configuration lookup backed by local files or the device API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import httpx
from httpx import Timeout
from jsonschema import ValidationError, validate

from .const import DEFAULT_REQUEST_TIMEOUT_S
from .errors import DeviceConfigError
from .groups import derive_groups
from .models import DeviceConfig, DeviceGroups
from .validation import validate_device_config

LOGGER = logging.getLogger(__name__)

DEVICE_CONFIG_SCHEMA = DeviceConfig.model_json_schema(mode="validation")
DEVICE_GROUPS_SCHEMA = DeviceGroups.model_json_schema(mode="validation")


@dataclass(frozen=True)
class DeviceConfigEntry:
    device_id: str
    device_class: str
    path: Path


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DeviceConfigError(f"Cannot read device config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DeviceConfigError(f"Invalid device config JSON in {path}: {exc}") from exc


class LocalDeviceConfigStore:
    """Device configs read from a class mapping file and/or a config directory.

    The mapping file has the shape
    ``{device_class: {"stateFile": ..., "stateClass": ..., "deviceConfigs": [paths]}}``
    with paths relative to the mapping file.
    """

    def __init__(
        self,
        *,
        mapping_file: Path | str | None = None,
        config_dir: Path | str | None = None,
    ) -> None:
        if mapping_file is None and config_dir is None:
            raise ValueError("LocalDeviceConfigStore needs a mapping file or a config directory")
        self._mapping_file = Path(mapping_file) if mapping_file is not None else None
        self._config_dir = Path(config_dir) if config_dir is not None else None
        self._index: dict[str, DeviceConfigEntry] | None = None

    def get_device_config(self, device_id: str) -> DeviceConfig:
        entry = self._entries().get(device_id)
        if entry is None:
            raise DeviceConfigError(f"No device config found for {device_id}")
        config = validate_device_config(_read_json(entry.path))
        if config.device_id != device_id:
            raise DeviceConfigError(
                f"Device config {entry.path} declares device_id {config.device_id}, expected {device_id}"
            )
        return config

    def get_device_groups(self, device_id: str) -> DeviceGroups:
        return derive_groups(self.get_device_config(device_id))

    def all_device_ids(self) -> list[str]:
        return sorted(self._entries())

    def device_ids_by_class(self, device_class: str) -> list[str]:
        return sorted(
            entry.device_id for entry in self._entries().values() if entry.device_class == device_class
        )

    def device_classes(self) -> list[str]:
        return sorted({entry.device_class for entry in self._entries().values()})

    def _entries(self) -> dict[str, DeviceConfigEntry]:
        if self._index is None:
            index: dict[str, DeviceConfigEntry] = {}
            for path in self._config_paths():
                entry = self._index_file(path)
                if entry is None:
                    continue
                if entry.device_id in index and index[entry.device_id].path != entry.path:
                    LOGGER.warning(
                        "device_config_duplicate device=%s kept=%s ignored=%s",
                        entry.device_id,
                        index[entry.device_id].path,
                        entry.path,
                    )
                    continue
                index[entry.device_id] = entry
            LOGGER.debug("device_config_index_built devices=%s", len(index))
            self._index = index
        return self._index

    def _config_paths(self) -> list[Path]:
        paths: list[Path] = []
        if self._mapping_file is not None:
            mapping = _read_json(self._mapping_file)
            if not isinstance(mapping, Mapping):
                raise DeviceConfigError(f"Mapping file {self._mapping_file} must contain an object")
            base = self._mapping_file.parent
            for device_class, details in mapping.items():
                if not isinstance(details, Mapping):
                    LOGGER.warning("device_mapping_invalid class=%s", device_class)
                    continue
                for relative in details.get("deviceConfigs") or ():
                    paths.append((base / relative).resolve())
        if self._config_dir is not None:
            paths.extend(sorted(path.resolve() for path in self._config_dir.glob("*.json")))
        return paths

    def _index_file(self, path: Path) -> DeviceConfigEntry | None:
        try:
            data = _read_json(path)
        except DeviceConfigError as exc:
            LOGGER.warning("device_config_skipped path=%s error=%s", path, exc)
            return None
        if not isinstance(data, Mapping):
            LOGGER.warning("device_config_skipped path=%s error=not an object", path)
            return None
        device_id = data.get("device_id")
        device_class = data.get("device_class")
        if not isinstance(device_id, str) or not isinstance(device_class, str):
            LOGGER.warning("device_config_skipped path=%s error=missing device_id or device_class", path)
            return None
        return DeviceConfigEntry(device_id=device_id, device_class=device_class, path=path)


class DeviceConfigClient:
    """Async client for the device configuration API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | httpx.Timeout | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout or DEFAULT_REQUEST_TIMEOUT_S
        self._client = client
        self._owns_client = False

    async def __aenter__(self) -> "DeviceConfigClient":
        if self._client is None:
            timeout = self._timeout
            if not isinstance(timeout, Timeout):
                timeout = Timeout(timeout)
            self._client = httpx.AsyncClient(timeout=timeout)
            self._owns_client = True
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    async def fetch_device_config(self, device_id: str) -> DeviceConfig:
        data = await self._get_json(f"/config/device/{device_id}")
        self._validate(data, DEVICE_CONFIG_SCHEMA, f"device config {device_id}")
        config = validate_device_config(data)
        if config.device_id != device_id:
            raise DeviceConfigError(f"API returned config for {config.device_id}, expected {device_id}")
        return config

    async def fetch_device_groups(self, device_id: str) -> DeviceGroups:
        data = await self._get_json(f"/devices/{device_id}/groups")
        self._validate(data, DEVICE_GROUPS_SCHEMA, f"device groups {device_id}")
        return DeviceGroups.model_validate(data)

    async def list_device_ids(self) -> list[str]:
        data = await self._get_json("/devices")
        if not isinstance(data, list):
            raise DeviceConfigError("Device list response failed validation: expected a list")
        device_ids: list[str] = []
        for item in data:
            if isinstance(item, Mapping) and isinstance(item.get("device_id"), str):
                device_ids.append(item["device_id"])
            elif isinstance(item, str):
                device_ids.append(item)
        return device_ids

    async def test_connection(self) -> bool:
        """Return ``True`` when the API answers its system endpoint."""

        try:
            await self._get_json("/system")
        except DeviceConfigError as exc:
            LOGGER.warning("device_api_unreachable base_url=%s error=%s", self._base_url, exc)
            return False
        return True

    async def _get_json(self, path: str) -> Any:
        url = f"{self._base_url}{path}"
        client = self._client
        close_client = False
        if client is None:
            timeout = self._timeout
            if not isinstance(timeout, Timeout):
                timeout = Timeout(timeout)
            client = httpx.AsyncClient(timeout=timeout)
            close_client = True

        LOGGER.debug("device_api_request url=%s", url)
        try:
            response = await client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise DeviceConfigError(f"Device API request {path} failed with status {status}") from exc
        except httpx.HTTPError as exc:
            raise DeviceConfigError(f"Device API connection failed for {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DeviceConfigError(f"Device API returned invalid JSON for {path}: {exc}") from exc
        finally:
            if close_client:
                await client.aclose()

    @staticmethod
    def _validate(data: Any, schema: Mapping[str, Any], label: str) -> None:
        try:
            validate(data, schema)
        except (ValidationError, TypeError) as exc:
            LOGGER.warning("device_api_invalid_payload label=%s error=%s", label, exc)
            raise DeviceConfigError(f"{label} response failed validation: {exc}") from exc
