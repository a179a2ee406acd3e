"""Validation of raw device configuration documents."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from .errors import DeviceConfigError
from .models import DeviceConfig

REQUIRED_STRING_FIELDS = ("device_id", "device_name", "device_class")


def config_problems(data: Mapping[str, Any]) -> list[str]:
    """Return the names of required fields that are missing or mistyped."""

    problems = [
        field for field in REQUIRED_STRING_FIELDS if not isinstance(data.get(field), str) or not data.get(field)
    ]
    if not isinstance(data.get("commands"), Mapping):
        problems.append("commands")
    return problems


def validate_device_config(data: DeviceConfig | Mapping[str, Any] | Any) -> DeviceConfig:
    """Return ``data`` as a :class:`DeviceConfig` or raise :class:`DeviceConfigError`."""

    if isinstance(data, DeviceConfig):
        return data
    if not isinstance(data, Mapping):
        raise DeviceConfigError(f"Invalid device config: expected an object, got {type(data).__name__}")

    device_id = data.get("device_id") if isinstance(data.get("device_id"), str) else "<unknown>"
    problems = config_problems(data)
    if problems:
        raise DeviceConfigError(
            f"Invalid device config {device_id}: missing or invalid {', '.join(problems)}"
        )

    try:
        return DeviceConfig.model_validate(data)
    except ValidationError as exc:
        locations = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise DeviceConfigError(
            f"Invalid device config {device_id}: {', '.join(locations)}"
        ) from exc
