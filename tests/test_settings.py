"""Tests for environment-driven settings."""

from __future__ import annotations

from remote_layout.settings import load_settings


def test_defaults_when_environment_is_empty(monkeypatch) -> None:
    for name in (
        "REMOTE_LAYOUT_API_URL",
        "REMOTE_LAYOUT_CONFIG_MAPPING",
        "REMOTE_LAYOUT_CONFIG_DIR",
        "REMOTE_LAYOUT_SCENARIO_DIR",
        "REMOTE_LAYOUT_OUTPUT_DIR",
        "REMOTE_LAYOUT_MAX_CONCURRENCY",
        "REMOTE_LAYOUT_REQUEST_TIMEOUT_S",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.api_base_url is None
    assert settings.output_dir == "generated"
    assert settings.max_concurrency == 3
    assert settings.request_timeout_s == 10.0


def test_environment_values_are_parsed(monkeypatch) -> None:
    monkeypatch.setenv("REMOTE_LAYOUT_API_URL", "http://devices.local:8000")
    monkeypatch.setenv("REMOTE_LAYOUT_SCENARIO_DIR", "/etc/scenarios")
    monkeypatch.setenv("REMOTE_LAYOUT_MAX_CONCURRENCY", "8")
    monkeypatch.setenv("REMOTE_LAYOUT_REQUEST_TIMEOUT_S", "2.5")

    settings = load_settings()

    assert settings.api_base_url == "http://devices.local:8000"
    assert settings.scenario_dir == "/etc/scenarios"
    assert settings.max_concurrency == 8
    assert settings.request_timeout_s == 2.5


def test_invalid_numbers_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("REMOTE_LAYOUT_MAX_CONCURRENCY", "-2")
    monkeypatch.setenv("REMOTE_LAYOUT_REQUEST_TIMEOUT_S", "soon")

    settings = load_settings()

    assert settings.max_concurrency == 3
    assert settings.request_timeout_s == 10.0


def test_overrides_ignore_unset_values(monkeypatch) -> None:
    monkeypatch.setenv("REMOTE_LAYOUT_OUTPUT_DIR", "pages")

    settings = load_settings().with_overrides(output_dir=None, max_concurrency=5)

    assert settings.output_dir == "pages"
    assert settings.max_concurrency == 5
