"""Tests for scenario definition files."""

from __future__ import annotations

import json
import logging

import pytest

from remote_layout.errors import ScenarioConfigError
from remote_layout.scenario_config import (
    build_virtual_device_config,
    discover_scenarios,
    load_scenario_file,
    parse_scenario,
)


def test_virtual_config_maps_roles_to_donor_commands(scenario_definition) -> None:
    config = build_virtual_device_config(parse_scenario(scenario_definition))

    assert config.device_id == "movie_night"
    assert config.device_class == "ScenarioDevice"
    assert config.config_class == "ScenarioDeviceConfig"
    assert config.commands["power_on"].action == "start_scenario"
    assert config.commands["power_on"].location == "scenario"
    assert config.commands["volume_up"].location == "ampA"
    assert config.commands["volume_up"].group == "volume"
    assert config.commands["play"].location == "tvB"
    assert config.commands["set_input"].params[0].name == "input"


def test_role_names_are_normalized(scenario_definition) -> None:
    scenario_definition["roles"] = {"Volume": "ampA", "Screen": ""}

    scenario = parse_scenario(scenario_definition)

    assert scenario.roles == {"volume": "ampA"}


def test_unknown_roles_produce_no_commands(scenario_definition) -> None:
    scenario_definition["roles"] = {"lighting": "dimmer"}

    config = build_virtual_device_config(parse_scenario(scenario_definition))

    assert sorted(config.commands) == ["power_off", "power_on"]


def test_invalid_scenario_raises(scenario_definition) -> None:
    scenario_definition.pop("roles")

    with pytest.raises(ScenarioConfigError, match="roles"):
        parse_scenario(scenario_definition)


def test_discover_skips_invalid_files(tmp_path, scenario_definition, caplog) -> None:
    (tmp_path / "movie_night.json").write_text(json.dumps(scenario_definition))
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "notes.txt").write_text("ignored")

    with caplog.at_level(logging.WARNING):
        scenarios = discover_scenarios(tmp_path)

    assert [s.scenario_id for s in scenarios] == ["movie_night"]
    assert "scenario_file_skipped" in caplog.text


def test_load_scenario_file_rejects_non_objects(tmp_path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[]")

    with pytest.raises(ScenarioConfigError):
        load_scenario_file(path)


def test_missing_scenario_directory_returns_nothing(tmp_path) -> None:
    assert discover_scenarios(tmp_path / "absent") == []
