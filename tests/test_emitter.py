"""Tests for structure serialization and page generation."""

from __future__ import annotations

import json

import pytest

from remote_layout.compiler import compile_device, compile_device_sync
from remote_layout.emitter import component_name, render_page, structure_to_json, write_page
from remote_layout.errors import TemplateError


def test_component_name_is_pascal_case() -> None:
    assert component_name("living_room_tv") == "LivingRoomTvPage"
    assert component_name("2nd-floor.amp") == "Device2ndFloorAmpPage"


def test_render_page_embeds_structure(lg_tv_config) -> None:
    structure = compile_device_sync(lg_tv_config)

    page = render_page(structure)

    assert "function LivingRoomTvPage()" in page
    assert "export default LivingRoomTvPage;" in page
    assert 'const DEVICE_ID = "living_room_tv";' in page
    assert '"deviceId": "living_room_tv"' in page
    assert "useStartScenario" not in page
    assert "`Action: ${action} -> ${deviceId}`" in page


@pytest.mark.asyncio
async def test_scenario_page_wires_start_and_stop(scenario_config, donor_configs) -> None:
    async def provider(device_id: str):
        return donor_configs[device_id]

    structure = await compile_device(scenario_config, config_provider=provider)

    page = render_page(structure)

    assert "useStartScenario, useShutdownScenario" in page
    assert "startScenario.mutate(DEVICE_ID);" in page
    assert "`Stopping scenario: ${DEVICE_ID}`" in page
    assert "const deviceId = sourceDeviceId || DEVICE_ID;" in page


def test_write_page_creates_module_and_json(tmp_path, ir_config) -> None:
    structure = compile_device_sync(ir_config)

    path = write_page(structure, tmp_path / "out", include_json=True)

    assert path == tmp_path / "out" / "projector_ir.gen.tsx"
    assert path.read_text(encoding="utf-8") == render_page(structure)
    data = json.loads((tmp_path / "out" / "projector_ir.structure.json").read_text(encoding="utf-8"))
    assert data["deviceClass"] == "WirenboardIRDevice"
    assert [zone["zoneId"] for zone in data["remoteZones"]][0] == "power"


def test_structure_json_is_deterministic(ir_config) -> None:
    assert structure_to_json(compile_device_sync(ir_config)) == structure_to_json(compile_device_sync(ir_config))


def test_device_id_is_a_quoted_string_literal(ir_config) -> None:
    structure = compile_device_sync({**ir_config, "device_id": "bob's_tv"})

    page = render_page(structure)

    assert 'const DEVICE_ID = "bob\'s_tv";' in page
    assert "'bob's_tv'" not in page


@pytest.mark.parametrize("device_id", ["../escaped", "nested/tv", "..", "c:\\tv"])
def test_write_page_refuses_ids_outside_output_dir(tmp_path, ir_config, device_id) -> None:
    structure = compile_device_sync({**ir_config, "device_id": device_id})

    with pytest.raises(TemplateError):
        write_page(structure, tmp_path / "out", include_json=True)

    assert list(tmp_path.rglob("*.gen.tsx")) == []
    assert list(tmp_path.rglob("*.structure.json")) == []
