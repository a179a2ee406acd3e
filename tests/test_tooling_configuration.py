"""Tests for contributor tooling expectations."""

from __future__ import annotations

import tomllib
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
EXPECTED_TEST_PACKAGES = {"pytest", "pytest-asyncio", "pytest-cov", "coverage[toml]"}
RUNTIME_PACKAGES = {"httpx", "jsonschema", "pydantic"}


def _normalize_requirement(entry: str) -> str:
    return entry.strip().split("==")[0].split(">=")[0]


def _pyproject() -> dict:
    return tomllib.loads(REPO_ROOT.joinpath("pyproject.toml").read_text())


def test_runtime_dependencies_are_declared() -> None:
    """Every third-party runtime import should be a declared dependency."""

    declared = {_normalize_requirement(item) for item in _pyproject()["project"]["dependencies"]}
    missing = RUNTIME_PACKAGES - declared
    assert not missing, f"Missing runtime dependencies: {sorted(missing)}"


def test_test_extra_and_dev_group_cover_test_stack() -> None:
    """The test extra and the dev dependency group should list the test stack."""

    pyproject = _pyproject()
    extra = {_normalize_requirement(item) for item in pyproject["project"]["optional-dependencies"]["test"]}
    dev_group = {_normalize_requirement(item) for item in pyproject["dependency-groups"]["dev"]}
    assert not EXPECTED_TEST_PACKAGES - extra
    assert not EXPECTED_TEST_PACKAGES - dev_group


def test_requirements_file_exists_for_pip_workflow() -> None:
    """requirements-test.txt should mirror the dev dependency stack."""

    requirements_path = REPO_ROOT / "requirements-test.txt"
    assert requirements_path.exists(), "requirements-test.txt should be present for pip users"

    entries = {
        _normalize_requirement(line)
        for line in requirements_path.read_text().splitlines()
        if line.strip() and not line.startswith("#")
    }
    missing = (EXPECTED_TEST_PACKAGES | RUNTIME_PACKAGES) - entries
    assert not missing, f"requirements-test.txt missing: {sorted(missing)}"


def test_cli_entry_point_is_registered() -> None:
    scripts = _pyproject()["project"]["scripts"]

    assert scripts["generate-device-pages"] == "scripts.generate_device_pages:main"
