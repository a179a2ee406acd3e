"""Device class handlers and their dispatch table."""

from __future__ import annotations

from typing import Final

from ..errors import UnsupportedDeviceClassError
from .apple_tv import AppleTVHandler
from .auralic import AuralicHandler
from .base import DeviceClassHandler
from .emotiva import EMotivaXMC2Handler
from .kitchen_hood import BroadlinkKitchenHoodHandler
from .lg_tv import LgTvHandler
from .revox import RevoxA77Handler
from .scenario import ScenarioDeviceHandler
from .wirenboard import WirenboardIRHandler

HANDLERS: Final[dict[str, type[DeviceClassHandler]]] = {
    handler.device_class: handler
    for handler in (
        EMotivaXMC2Handler,
        WirenboardIRHandler,
        LgTvHandler,
        AppleTVHandler,
        AuralicHandler,
        RevoxA77Handler,
        BroadlinkKitchenHoodHandler,
        ScenarioDeviceHandler,
    )
}


def get_handler(device_class: str) -> DeviceClassHandler:
    """Return a fresh handler for ``device_class``."""

    handler_cls = HANDLERS.get(device_class)
    if handler_cls is None:
        raise UnsupportedDeviceClassError(device_class)
    return handler_cls()


def supported_device_classes() -> list[str]:
    return sorted(HANDLERS)


__all__ = [
    "HANDLERS",
    "AppleTVHandler",
    "AuralicHandler",
    "BroadlinkKitchenHoodHandler",
    "DeviceClassHandler",
    "EMotivaXMC2Handler",
    "LgTvHandler",
    "RevoxA77Handler",
    "ScenarioDeviceHandler",
    "WirenboardIRHandler",
    "get_handler",
    "supported_device_classes",
]
