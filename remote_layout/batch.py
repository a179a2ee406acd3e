"""Parallel compilation of many devices into generated page modules."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

from .compiler import compile_device
from .const import DEFAULT_MAX_CONCURRENCY, DEFAULT_OUTPUT_DIR
from .emitter import write_page
from .errors import ErrorType, classify_error, is_skippable
from .models import RemoteDeviceStructure
from .scenario import ConfigProvider, GroupsProvider, call_provider
from .validation import validate_device_config

_LOGGER = logging.getLogger(__name__)

MetricsLogger = Callable[..., None]
EntryStatus = Literal["success", "failed", "skipped"]


class Emitter(Protocol):
    def __call__(
        self, structure: RemoteDeviceStructure, output_dir: Path | str, *, include_json: bool = False
    ) -> Path: ...


class ManifestEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    device_id: str
    device_class: str | None = None
    status: EntryStatus
    output_path: str | None = None
    error: str | None = None
    error_type: ErrorType | None = None
    duration_ms: float = 0.0


class BatchManifest(BaseModel):
    """Per-device outcome of a batch run plus aggregate counts."""

    model_config = ConfigDict(extra="forbid")

    entries: list[ManifestEntry] = Field(default_factory=list)
    total: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    success_rate: float = 0.0
    duration_ms: float = 0.0

    @classmethod
    def from_entries(cls, entries: list[ManifestEntry], duration_ms: float) -> "BatchManifest":
        successful = sum(1 for entry in entries if entry.status == "success")
        failed = sum(1 for entry in entries if entry.status == "failed")
        skipped = sum(1 for entry in entries if entry.status == "skipped")
        total = len(entries)
        return cls(
            entries=entries,
            total=total,
            successful=successful,
            failed=failed,
            skipped=skipped,
            success_rate=round(successful / total, 4) if total else 0.0,
            duration_ms=round(duration_ms, 3),
        )

    def failures(self) -> list[ManifestEntry]:
        return [entry for entry in self.entries if entry.status == "failed"]


def _log_metrics(event: str, **fields: Any) -> None:
    _LOGGER.info("%s %s", event, " ".join(f"{key}={value}" for key, value in fields.items()))


def _now() -> float:
    return time.perf_counter()


class BatchCompiler:
    """Compile devices concurrently and write one page module per device.

    Failures are recorded per device in the returned :class:`BatchManifest`.
    With ``continue_on_error=False`` the first failure stops devices that
    have not started yet; those are recorded as skipped.
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        *,
        groups_provider: GroupsProvider | None = None,
        emitter: Emitter = write_page,
        output_dir: Path | str = DEFAULT_OUTPUT_DIR,
        include_json: bool = False,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        continue_on_error: bool = True,
        metrics_logger: MetricsLogger = _log_metrics,
    ) -> None:
        self._config_provider = config_provider
        self._groups_provider = groups_provider
        self._emitter = emitter
        self._output_dir = Path(output_dir)
        self._include_json = include_json
        self._max_concurrency = max(1, max_concurrency)
        self._continue_on_error = continue_on_error
        self._metrics_logger = metrics_logger

    async def run(self, device_ids: Iterable[str]) -> BatchManifest:
        """Compile ``device_ids`` and return the manifest in input order."""

        ordered = list(dict.fromkeys(device_ids))
        semaphore = asyncio.Semaphore(self._max_concurrency)
        stop = asyncio.Event()
        started = _now()

        async def _bounded(device_id: str) -> ManifestEntry:
            async with semaphore:
                if stop.is_set():
                    return ManifestEntry(
                        device_id=device_id,
                        status="skipped",
                        error="Batch stopped after an earlier failure",
                    )
                entry = await self.compile_one(device_id)
                if entry.status == "failed" and not self._continue_on_error:
                    stop.set()
                return entry

        entries = list(await asyncio.gather(*(_bounded(device_id) for device_id in ordered)))
        manifest = BatchManifest.from_entries(entries, (_now() - started) * 1000)

        self._metrics_logger(
            "remote_compile",
            total=manifest.total,
            successful=manifest.successful,
            failed=manifest.failed,
            skipped=manifest.skipped,
            duration_ms=manifest.duration_ms,
        )
        return manifest

    async def compile_one(self, device_id: str) -> ManifestEntry:
        """Compile and emit a single device, capturing any failure."""

        started = _now()
        device_class: str | None = None
        try:
            config = validate_device_config(await call_provider(self._config_provider, device_id))
            device_class = config.device_class
            groups = None
            if self._groups_provider is not None:
                groups = await call_provider(self._groups_provider, device_id)
            structure = await compile_device(
                config,
                groups,
                config_provider=self._config_provider,
                groups_provider=self._groups_provider,
                max_concurrency=self._max_concurrency,
            )
            output_path = self._emitter(structure, self._output_dir, include_json=self._include_json)
        except Exception as exc:
            error_type = classify_error(exc)
            status: EntryStatus = "skipped" if is_skippable(error_type) else "failed"
            log = _LOGGER.warning if status == "skipped" else _LOGGER.error
            log(
                "device_compile_%s device=%s class=%s error_type=%s error=%s",
                status,
                device_id,
                device_class,
                error_type.value,
                exc,
            )
            return ManifestEntry(
                device_id=device_id,
                device_class=device_class,
                status=status,
                error=str(exc),
                error_type=error_type,
                duration_ms=round((_now() - started) * 1000, 3),
            )

        return ManifestEntry(
            device_id=device_id,
            device_class=device_class,
            status="success",
            output_path=str(output_path),
            duration_ms=round((_now() - started) * 1000, 3),
        )
