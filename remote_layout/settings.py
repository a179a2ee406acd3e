"""Runtime configuration derived from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from .const import DEFAULT_MAX_CONCURRENCY, DEFAULT_OUTPUT_DIR, DEFAULT_REQUEST_TIMEOUT_S

ENV_API_URL = "REMOTE_LAYOUT_API_URL"
ENV_CONFIG_MAPPING = "REMOTE_LAYOUT_CONFIG_MAPPING"
ENV_CONFIG_DIR = "REMOTE_LAYOUT_CONFIG_DIR"
ENV_SCENARIO_DIR = "REMOTE_LAYOUT_SCENARIO_DIR"
ENV_OUTPUT_DIR = "REMOTE_LAYOUT_OUTPUT_DIR"
ENV_MAX_CONCURRENCY = "REMOTE_LAYOUT_MAX_CONCURRENCY"
ENV_REQUEST_TIMEOUT_S = "REMOTE_LAYOUT_REQUEST_TIMEOUT_S"


@dataclass(frozen=True)
class Settings:
    """Compiler configuration derived from environment variables."""

    api_base_url: str | None
    config_mapping: str | None
    config_dir: str | None
    scenario_dir: str | None
    output_dir: str
    max_concurrency: int
    request_timeout_s: float

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def _parse_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def load_settings() -> Settings:
    """Load compiler configuration from environment variables."""

    return Settings(
        api_base_url=os.getenv(ENV_API_URL) or None,
        config_mapping=os.getenv(ENV_CONFIG_MAPPING) or None,
        config_dir=os.getenv(ENV_CONFIG_DIR) or None,
        scenario_dir=os.getenv(ENV_SCENARIO_DIR) or None,
        output_dir=os.getenv(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR,
        max_concurrency=_parse_int(os.getenv(ENV_MAX_CONCURRENCY), DEFAULT_MAX_CONCURRENCY),
        request_timeout_s=_parse_float(os.getenv(ENV_REQUEST_TIMEOUT_S), DEFAULT_REQUEST_TIMEOUT_S),
    )
