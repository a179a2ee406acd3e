"""Tests for the generate-device-pages command line entry point."""

from __future__ import annotations

import json

import pytest

from scripts import generate_device_pages


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch) -> None:
    for name in (
        "REMOTE_LAYOUT_API_URL",
        "REMOTE_LAYOUT_CONFIG_MAPPING",
        "REMOTE_LAYOUT_CONFIG_DIR",
        "REMOTE_LAYOUT_SCENARIO_DIR",
        "REMOTE_LAYOUT_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


def test_list_classes_prints_registry(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        generate_device_pages.main(["--list-classes"])

    assert excinfo.value.code == 0
    assert "LgTv" in capsys.readouterr().out.splitlines()


def test_batch_compiles_config_dir_and_scenarios(
    tmp_path, capsys, amp_config, tv_config, scenario_definition
) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "amp.json").write_text(json.dumps(amp_config))
    (configs / "tv.json").write_text(json.dumps(tv_config))
    scenarios = tmp_path / "scenarios"
    scenarios.mkdir()
    (scenarios / "movie_night.json").write_text(json.dumps(scenario_definition))
    output = tmp_path / "pages"

    with pytest.raises(SystemExit) as excinfo:
        generate_device_pages.main(
            [
                "--batch",
                "--config-dir",
                str(configs),
                "--scenario-dir",
                str(scenarios),
                "--output-dir",
                str(output),
                "--json",
            ]
        )

    assert excinfo.value.code == 0
    assert sorted(path.name for path in output.glob("*.gen.tsx")) == [
        "ampA.gen.tsx",
        "movie_night.gen.tsx",
        "tvB.gen.tsx",
    ]
    assert (output / "movie_night.structure.json").exists()
    assert "3 succeeded" in capsys.readouterr().out


def test_failed_device_sets_exit_code(tmp_path, capsys) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()

    with pytest.raises(SystemExit) as excinfo:
        generate_device_pages.main(
            ["--device-id", "ghost", "--config-dir", str(configs), "--output-dir", str(tmp_path / "out")]
        )

    assert excinfo.value.code == 1
    assert "ghost" in capsys.readouterr().out


def test_device_classes_filter(tmp_path, amp_config, tv_config) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "amp.json").write_text(json.dumps(amp_config))
    (configs / "tv.json").write_text(json.dumps(tv_config))
    output = tmp_path / "pages"

    with pytest.raises(SystemExit):
        generate_device_pages.main(
            ["--device-classes", "LgTv", "--config-dir", str(configs), "--output-dir", str(output)]
        )

    assert [path.name for path in output.glob("*.gen.tsx")] == ["tvB.gen.tsx"]


def test_missing_source_is_an_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        generate_device_pages.main(["--batch"])

    assert "device source is required" in str(excinfo.value.code)
