"""Exception types and failure classification for device compilation."""

from __future__ import annotations

from enum import Enum

import httpx
from pydantic import ValidationError


class RemoteLayoutError(RuntimeError):
    """Base error for remote layout compilation."""


class UnsupportedDeviceClassError(RemoteLayoutError):
    """Raised when no handler is registered for a device class."""

    def __init__(self, device_class: str) -> None:
        super().__init__(f"Unsupported device class: {device_class}")
        self.device_class = device_class


class DeviceConfigError(RemoteLayoutError):
    """Raised when a device configuration cannot be loaded or validated."""


class ScenarioConfigError(RemoteLayoutError):
    """Raised when a scenario definition is invalid."""


class TemplateError(RemoteLayoutError):
    """Raised when a page module cannot be rendered."""


class ErrorType(str, Enum):
    API_CONNECTION = "api_connection"
    API_VALIDATION = "api_validation"
    DEVICE_CLASS_UNSUPPORTED = "device_class_unsupported"
    GENERATION_FAILURE = "generation_failure"
    FILE_WRITE_ERROR = "file_write_error"
    TEMPLATE_ERROR = "template_error"
    VALIDATION_ERROR = "validation_error"


_MESSAGE_RULES: tuple[tuple[tuple[str, ...], ErrorType], ...] = (
    (("unsupported device class", "unknown device class", "no handler"), ErrorType.DEVICE_CLASS_UNSUPPORTED),
    (("connection", "timeout", "timed out", "econnrefused", "unreachable"), ErrorType.API_CONNECTION),
    (("schema", "response failed validation"), ErrorType.API_VALIDATION),
    (("validation", "invalid", "missing required"), ErrorType.VALIDATION_ERROR),
    (("permission", "write", "enospc", "read-only"), ErrorType.FILE_WRITE_ERROR),
    (("template", "render"), ErrorType.TEMPLATE_ERROR),
)


def classify_error(exc: BaseException) -> ErrorType:
    """Map ``exc`` to an :class:`ErrorType`, by type first and message second."""

    if isinstance(exc, UnsupportedDeviceClassError):
        return ErrorType.DEVICE_CLASS_UNSUPPORTED
    if isinstance(exc, TemplateError):
        return ErrorType.TEMPLATE_ERROR
    if isinstance(exc, (httpx.ConnectError, httpx.TimeoutException)):
        return ErrorType.API_CONNECTION
    if isinstance(exc, ValidationError):
        return ErrorType.VALIDATION_ERROR
    if isinstance(exc, OSError) and not isinstance(exc, ConnectionError):
        return ErrorType.FILE_WRITE_ERROR

    message = str(exc).lower()
    for keywords, error_type in _MESSAGE_RULES:
        if any(keyword in message for keyword in keywords):
            return error_type
    return ErrorType.GENERATION_FAILURE


def is_skippable(error_type: ErrorType) -> bool:
    """Return ``True`` when a failure should be reported as a skip."""

    return error_type is ErrorType.DEVICE_CLASS_UNSUPPORTED
