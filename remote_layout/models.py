"""Data models for device configurations and compiled remote structures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .const import (
    DEFAULT_GROUP_STATUS,
    DEFAULT_RANGE_MAX,
    DEFAULT_RANGE_MIN,
    ZONE_IDS,
    ZoneId,
)

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "CommandParameter",
    "DeviceCommand",
    "DeviceConfig",
    "GroupAction",
    "DeviceGroup",
    "DeviceGroups",
    "Icon",
    "UIHints",
    "ProcessedAction",
    "PowerButton",
    "DropdownOption",
    "Dropdown",
    "ActionSection",
    "VolumeSlider",
    "VolumeButtons",
    "NavigationCluster",
    "PointerPad",
    "ZoneContent",
    "ZoneLayout",
    "RemoteZone",
    "StateField",
    "StateDefinition",
    "ActionHandler",
    "SpecialCase",
    "RemoteDeviceStructure",
]

ParameterType = Literal["range", "string", "integer", "boolean"]
_PARAMETER_TYPES = ("range", "string", "integer", "boolean")


class CommandParameter(BaseModel):
    """Parameter accepted by a device command."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: ParameterType = "string"
    required: bool = False
    default: Any = None
    min: int | float | None = None
    max: int | float | None = None
    description: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() in _PARAMETER_TYPES:
            return value.lower()
        _LOGGER.warning("parameter_type_unknown type=%s fallback=string", value)
        return "string"

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def _repair_range_bounds(self) -> "CommandParameter":
        if self.type != "range":
            return self
        if self.min is None or self.max is None:
            _LOGGER.warning(
                "parameter_range_repaired name=%s min=%s max=%s",
                self.name,
                self.min,
                self.max,
            )
            if self.min is None:
                self.min = DEFAULT_RANGE_MIN
            if self.max is None:
                self.max = DEFAULT_RANGE_MAX
        return self


class DeviceCommand(BaseModel):
    """Raw command entry from a device configuration document."""

    model_config = ConfigDict(extra="ignore")

    action: str | None = None
    topic: str | None = None
    description: str = ""
    group: str | None = None
    params: list[CommandParameter] | None = None
    location: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> Any:
        return "" if value is None else value


class DeviceConfig(BaseModel):
    """Per-device configuration document."""

    model_config = ConfigDict(extra="ignore")

    device_id: str
    device_name: str
    device_class: str
    config_class: str | None = None
    commands: dict[str, DeviceCommand] = Field(default_factory=dict)


class GroupAction(BaseModel):
    """Action entry inside a device group."""

    model_config = ConfigDict(extra="ignore")

    name: str
    description: str = ""
    params: list[CommandParameter] | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> Any:
        return "" if value is None else value


class DeviceGroup(BaseModel):
    """Named group of device actions."""

    model_config = ConfigDict(extra="ignore")

    group_id: str
    group_name: str
    actions: list[GroupAction] = Field(default_factory=list)
    status: str = DEFAULT_GROUP_STATUS


class DeviceGroups(BaseModel):
    """Grouping document for a device."""

    model_config = ConfigDict(extra="ignore")

    device_id: str
    groups: list[DeviceGroup] = Field(default_factory=list)


class _StructureModel(BaseModel):
    """Base for compiled output models, serialized with camelCase keys."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, alias_generator=to_camel)


class Icon(_StructureModel):
    library: Literal["heroicons", "material", "lucide", "custom", "fallback"]
    name: str
    variant: str | None = None
    fallback: str
    confidence: float = Field(ge=0.0, le=1.0)


class UIHints(_StructureModel):
    button_size: Literal["small", "medium", "large"] = "medium"
    button_style: Literal["primary", "secondary", "destructive"] = "secondary"
    is_pointer_action: bool = False
    has_parameters: bool = False
    zone_number: int | None = None


class ProcessedAction(_StructureModel):
    """Normalized action bound into a remote zone."""

    action_name: str
    display_name: str
    description: str = ""
    parameters: list[CommandParameter] = Field(default_factory=list)
    group: str = "default"
    icon: Icon
    ui_hints: UIHints = Field(default_factory=UIHints)
    source_device_id: str | None = None

    def has_range_parameter(self) -> bool:
        return any(param.type == "range" for param in self.parameters)


class PowerButton(_StructureModel):
    position: Literal["left", "middle", "right"]
    action: ProcessedAction
    button_type: Literal["power-off", "power-on", "power-toggle", "zone2-power"]


class DropdownOption(_StructureModel):
    id: str
    display_name: str
    description: str | None = None
    action_name: str | None = None


class Dropdown(_StructureModel):
    type: Literal["inputs", "apps"]
    population_method: Literal["api", "commands"]
    api_action: str | None = None
    set_action: str | None = None
    options: list[DropdownOption] = Field(default_factory=list)
    loading: bool = False
    empty: bool = True
    source_device_id: str | None = None


class ActionSection(_StructureModel):
    actions: list[ProcessedAction] = Field(default_factory=list)
    layout: Literal["horizontal", "vertical", "cluster"] = "horizontal"


class VolumeSlider(_StructureModel):
    action: ProcessedAction
    mute_action: ProcessedAction | None = None
    orientation: Literal["vertical", "horizontal"] = "vertical"
    show_value: bool = True
    zone: int | None = None


class VolumeButtons(_StructureModel):
    up_action: ProcessedAction | None = None
    down_action: ProcessedAction | None = None
    mute_action: ProcessedAction | None = None
    zone: int | None = None


class NavigationCluster(_StructureModel):
    up: ProcessedAction | None = None
    down: ProcessedAction | None = None
    left: ProcessedAction | None = None
    right: ProcessedAction | None = None
    ok: ProcessedAction | None = None
    aux1: ProcessedAction | None = None
    aux2: ProcessedAction | None = None
    aux3: ProcessedAction | None = None
    aux4: ProcessedAction | None = None


class PointerPad(_StructureModel):
    move_action: ProcessedAction | None = None
    click_action: ProcessedAction | None = None
    drag_action: ProcessedAction | None = None
    scroll_action: ProcessedAction | None = None


class ZoneContent(_StructureModel):
    """Zone-specific content; only the fields relevant to a zone are set."""

    power_buttons: list[PowerButton] | None = None
    inputs_dropdown: Dropdown | None = None
    playback_section: ActionSection | None = None
    tracks_section: ActionSection | None = None
    screen_actions: list[ProcessedAction] | None = None
    volume_slider: VolumeSlider | None = None
    volume_buttons: VolumeButtons | None = None
    apps_dropdown: Dropdown | None = None
    navigation_cluster: NavigationCluster | None = None
    pointer_pad: PointerPad | None = None

    @model_validator(mode="after")
    def _volume_is_exclusive(self) -> "ZoneContent":
        if self.volume_slider is not None and self.volume_buttons is not None:
            raise ValueError("volume content cannot hold both a slider and buttons")
        return self

    def iter_actions(self) -> Iterator[ProcessedAction]:
        """Yield every action bound anywhere in this content."""

        for button in self.power_buttons or ():
            yield button.action
        for section in (self.playback_section, self.tracks_section):
            if section is not None:
                yield from section.actions
        yield from self.screen_actions or ()
        if self.volume_slider is not None:
            yield self.volume_slider.action
            if self.volume_slider.mute_action is not None:
                yield self.volume_slider.mute_action
        for holder in (self.volume_buttons, self.navigation_cluster, self.pointer_pad):
            if holder is None:
                continue
            for field_name in type(holder).model_fields:
                value = getattr(holder, field_name)
                if isinstance(value, ProcessedAction):
                    yield value

    def has_controls(self) -> bool:
        """Return ``True`` when any control (action or dropdown) is present."""

        if self.inputs_dropdown is not None or self.apps_dropdown is not None:
            return True
        return next(self.iter_actions(), None) is not None


class ZoneLayout(_StructureModel):
    priority: int = 1
    columns: int | None = None
    spacing: Literal["compact", "normal", "loose"] = "normal"
    alignment: Literal["left", "center", "right"] = "center"
    orientation: Literal["horizontal", "vertical"] | None = None


class RemoteZone(_StructureModel):
    """One of the seven fixed regions of a remote layout."""

    zone_id: ZoneId
    zone_name: str
    zone_type: str
    show_hide: bool
    is_empty: bool
    enabled: bool | None = None
    content: ZoneContent = Field(default_factory=ZoneContent)
    layout: ZoneLayout = Field(default_factory=ZoneLayout)


class StateField(_StructureModel):
    name: str
    type: str
    optional: bool = False
    description: str = ""


class StateDefinition(_StructureModel):
    interface_name: str
    fields: list[StateField] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)
    extends: list[str] = Field(default_factory=list)


class ActionHandler(_StructureModel):
    action_name: str
    action: str
    device_id: str
    dependencies: list[str] = Field(default_factory=list)


class SpecialCase(_StructureModel):
    device_class: str
    case_type: str
    configuration: dict[str, Any] = Field(default_factory=dict)


class RemoteDeviceStructure(_StructureModel):
    """Compiled remote layout for a single device."""

    device_id: str
    device_name: str
    device_class: str
    remote_zones: list[RemoteZone]
    state_interface: StateDefinition
    action_handlers: list[ActionHandler] = Field(default_factory=list)
    special_cases: list[SpecialCase] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_zones(self) -> "RemoteDeviceStructure":
        zone_ids = [zone.zone_id for zone in self.remote_zones]
        if sorted(zone_ids) != sorted(ZONE_IDS):
            raise ValueError(f"structure must hold exactly one zone per zone id, got {zone_ids}")
        for zone in self.remote_zones:
            content = zone.content
            if content.volume_slider is not None and content.volume_buttons is not None:
                raise ValueError(f"zone {zone.zone_id} holds both a volume slider and buttons")
        return self

    def zone(self, zone_id: str) -> RemoteZone:
        for zone in self.remote_zones:
            if zone.zone_id == zone_id:
                return zone
        raise KeyError(zone_id)

    def iter_actions(self) -> Iterator[ProcessedAction]:
        for zone in self.remote_zones:
            yield from zone.content.iter_actions()
