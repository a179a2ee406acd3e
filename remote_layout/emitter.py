"""Serialization of compiled structures and generation of device page modules."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from string import Template
from typing import Any

from .const import SCENARIO_DEVICE_CLASS
from .errors import TemplateError
from .handlers.base import pascal_case
from .models import RemoteDeviceStructure

_LOGGER = logging.getLogger(__name__)

PAGE_SUFFIX = ".gen.tsx"
STRUCTURE_SUFFIX = ".structure.json"


def serialize_structure(structure: RemoteDeviceStructure) -> dict[str, Any]:
    """Return the JSON-ready form of ``structure`` with camelCase keys.

    Unset optional fields are dropped, so a removed dropdown is absent rather
    than ``null``.
    """

    return structure.model_dump(mode="json", by_alias=True, exclude_none=True)


def structure_to_json(structure: RemoteDeviceStructure, *, indent: int | None = 2) -> str:
    return json.dumps(serialize_structure(structure), indent=indent, ensure_ascii=False)


def component_name(device_id: str) -> str:
    return f"{pascal_case(device_id)}Page"


_PAGE_TEMPLATE = Template(
    """// Generated from the $device_id_literal device structure. Do not edit by hand.
import React, { useEffect, useMemo } from 'react';
import { useExecuteDeviceAction$scenario_hook_imports } from '../../hooks/useApi';
import { useLogStore } from '../../stores/useLogStore';
import { useRoomStore } from '../../stores/useRoomStore';
import { RemoteControlLayout } from '../../components/RemoteControlLayout';
import type { RemoteDeviceStructure } from '../../types/RemoteControlLayout';

const DEVICE_ID = $device_id_literal;

const DEVICE_STRUCTURE: RemoteDeviceStructure = $structure_json;

function $component() {
  const { addLog } = useLogStore();
  const { selectDevice } = useRoomStore();
  const executeAction = useExecuteDeviceAction();$scenario_hooks

  useEffect(() => {
    selectDevice(DEVICE_ID);
  }, [selectDevice]);

  const deviceStructure = useMemo(() => DEVICE_STRUCTURE, []);

  const handleAction = (action: string, payload?: unknown, sourceDeviceId?: string) => {
    const params = payload && !Array.isArray(payload) ? payload : {};
    // Inherited actions run on the donor device named by sourceDeviceId.
    const deviceId = sourceDeviceId || DEVICE_ID;
$scenario_dispatch    executeAction.mutate({ deviceId, action: { action, params } });
    addLog({ level: 'info', message: `Action: $${action} -> $${deviceId}`, details: params });
  };

  return (
    <RemoteControlLayout
      deviceStructure={deviceStructure}
      onAction={handleAction}
      isActionPending={executeAction.isPending$scenario_pending}
      actionError={executeAction.error$scenario_error}
      className="w-full"
    />
  );
}

export default $component;
"""
)

_SCENARIO_HOOKS = """
  const startScenario = useStartScenario();
  const shutdownScenario = useShutdownScenario();"""

_SCENARIO_DISPATCH = """    if (action === 'power_on' && deviceId === DEVICE_ID) {
      startScenario.mutate(DEVICE_ID);
      addLog({ level: 'info', message: `Starting scenario: $${DEVICE_ID}`, details: params });
      return;
    }
    if (action === 'power_off' && deviceId === DEVICE_ID) {
      shutdownScenario.mutate({ scenarioId: DEVICE_ID, graceful: true });
      addLog({ level: 'info', message: `Stopping scenario: $${DEVICE_ID}`, details: params });
      return;
    }
"""


def render_page(structure: RemoteDeviceStructure) -> str:
    """Render the page module that embeds ``structure``."""

    is_scenario = structure.device_class == SCENARIO_DEVICE_CLASS
    try:
        return _PAGE_TEMPLATE.substitute(
            device_id_literal=json.dumps(structure.device_id),
            component=component_name(structure.device_id),
            structure_json=structure_to_json(structure),
            scenario_hook_imports=", useStartScenario, useShutdownScenario" if is_scenario else "",
            scenario_hooks=_SCENARIO_HOOKS if is_scenario else "",
            scenario_dispatch=Template(_SCENARIO_DISPATCH).substitute() if is_scenario else "",
            scenario_pending=" || startScenario.isPending || shutdownScenario.isPending" if is_scenario else "",
            scenario_error=" || startScenario.error || shutdownScenario.error" if is_scenario else "",
        )
    except (KeyError, ValueError) as exc:
        raise TemplateError(f"Template rendering failed for {structure.device_id}: {exc}") from exc


def _output_stem(device_id: str, target_dir: Path) -> str:
    """Return ``device_id`` as a file stem, refusing names that leave ``target_dir``."""

    if not device_id or "/" in device_id or "\\" in device_id or ".." in device_id:
        raise TemplateError(f"Device id {device_id!r} cannot be used as an output file name")
    resolved_dir = target_dir.resolve()
    if resolved_dir not in (resolved_dir / f"{device_id}{PAGE_SUFFIX}").resolve().parents:
        raise TemplateError(f"Device id {device_id!r} cannot be used as an output file name")
    return device_id


def write_page(
    structure: RemoteDeviceStructure,
    output_dir: Path | str,
    *,
    include_json: bool = False,
) -> Path:
    """Write ``{device_id}.gen.tsx`` (and optionally the structure JSON) to ``output_dir``."""

    target_dir = Path(output_dir)
    stem = _output_stem(structure.device_id, target_dir)
    page = render_page(structure)
    target_dir.mkdir(parents=True, exist_ok=True)
    page_path = target_dir / f"{stem}{PAGE_SUFFIX}"
    page_path.write_text(page, encoding="utf-8")
    if include_json:
        (target_dir / f"{stem}{STRUCTURE_SUFFIX}").write_text(
            structure_to_json(structure) + "\n", encoding="utf-8"
        )
    _LOGGER.info("device_page_written device=%s path=%s", structure.device_id, page_path)
    return page_path
