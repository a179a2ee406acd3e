"""Compile device command configurations into remote control layouts."""

from __future__ import annotations

from .batch import BatchCompiler, BatchManifest, ManifestEntry
from .compiler import compile_device, compile_device_sync
from .emitter import render_page, serialize_structure, structure_to_json, write_page
from .errors import (
    DeviceConfigError,
    ErrorType,
    RemoteLayoutError,
    ScenarioConfigError,
    TemplateError,
    UnsupportedDeviceClassError,
    classify_error,
)
from .groups import derive_groups
from .handlers import get_handler, supported_device_classes
from .models import DeviceConfig, DeviceGroups, RemoteDeviceStructure
from .scenario import ScenarioResolver
from .validation import validate_device_config

__all__ = [
    "BatchCompiler",
    "BatchManifest",
    "DeviceConfig",
    "DeviceConfigError",
    "DeviceGroups",
    "ErrorType",
    "ManifestEntry",
    "RemoteDeviceStructure",
    "RemoteLayoutError",
    "ScenarioConfigError",
    "ScenarioResolver",
    "TemplateError",
    "UnsupportedDeviceClassError",
    "classify_error",
    "compile_device",
    "compile_device_sync",
    "derive_groups",
    "get_handler",
    "render_page",
    "serialize_structure",
    "structure_to_json",
    "supported_device_classes",
    "validate_device_config",
    "write_page",
]
