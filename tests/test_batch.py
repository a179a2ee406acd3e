"""Tests for batch compilation and the run manifest."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from remote_layout.batch import BatchCompiler
from remote_layout.errors import ErrorType


def _configs(lg_tv_config, ir_config) -> dict[str, dict[str, Any]]:
    toaster = {
        "device_id": "toaster",
        "device_name": "Toaster",
        "device_class": "ToasterOven",
        "commands": {"power_on": {"action": "power_on"}},
    }
    broken = {"device_id": "broken", "device_name": "Broken", "commands": {}}
    return {
        "living_room_tv": lg_tv_config,
        "projector_ir": ir_config,
        "toaster": toaster,
        "broken": broken,
    }


def test_batch_records_success_failure_and_skip(tmp_path, lg_tv_config, ir_config) -> None:
    """Each device gets a manifest entry and metrics summarize the run."""

    configs = _configs(lg_tv_config, ir_config)
    metrics_events: list[tuple[str, dict[str, Any]]] = []

    def metrics_logger(event: str, **fields: Any) -> None:
        metrics_events.append((event, fields))

    async def _run():
        compiler = BatchCompiler(
            lambda device_id: configs[device_id],
            output_dir=tmp_path,
            max_concurrency=2,
            metrics_logger=metrics_logger,
        )
        return await compiler.run(["living_room_tv", "toaster", "broken", "projector_ir"])

    manifest = asyncio.run(_run())

    entries = {entry.device_id: entry for entry in manifest.entries}
    assert [entry.device_id for entry in manifest.entries] == [
        "living_room_tv",
        "toaster",
        "broken",
        "projector_ir",
    ]
    assert entries["living_room_tv"].status == "success"
    assert Path(entries["living_room_tv"].output_path) == tmp_path / "living_room_tv.gen.tsx"
    assert (tmp_path / "projector_ir.gen.tsx").exists()
    assert entries["toaster"].status == "skipped"
    assert entries["toaster"].error_type is ErrorType.DEVICE_CLASS_UNSUPPORTED
    assert entries["toaster"].device_class == "ToasterOven"
    assert entries["broken"].status == "failed"
    assert entries["broken"].error_type is ErrorType.VALIDATION_ERROR
    assert (manifest.total, manifest.successful, manifest.failed, manifest.skipped) == (4, 2, 1, 1)
    assert manifest.success_rate == 0.5
    assert [entry.device_id for entry in manifest.failures()] == ["broken"]

    assert metrics_events[0][0] == "remote_compile"
    assert metrics_events[0][1]["successful"] == 2


def test_batch_stops_scheduling_after_failure(tmp_path, ir_config) -> None:
    """Without continue_on_error, later devices are skipped once one fails."""

    configs = {"broken": {"device_id": "broken"}, "projector_ir": ir_config}

    async def _run():
        compiler = BatchCompiler(
            configs.__getitem__,
            output_dir=tmp_path,
            max_concurrency=1,
            continue_on_error=False,
            metrics_logger=lambda event, **fields: None,
        )
        return await compiler.run(["broken", "projector_ir"])

    manifest = asyncio.run(_run())

    assert [entry.status for entry in manifest.entries] == ["failed", "skipped"]
    assert not (tmp_path / "projector_ir.gen.tsx").exists()


def test_emitter_failures_are_classified(tmp_path, ir_config) -> None:
    def failing_emitter(structure, output_dir, *, include_json=False):
        raise PermissionError(f"cannot write to {output_dir}")

    async def _run():
        compiler = BatchCompiler(
            lambda device_id: ir_config,
            emitter=failing_emitter,
            output_dir=tmp_path,
            metrics_logger=lambda event, **fields: None,
        )
        return await compiler.run(["projector_ir", "projector_ir"])

    manifest = asyncio.run(_run())

    assert manifest.total == 1
    assert manifest.entries[0].error_type is ErrorType.FILE_WRITE_ERROR


def test_empty_batch_has_zero_success_rate(tmp_path) -> None:
    async def _run():
        return await BatchCompiler(
            lambda device_id: {}, output_dir=tmp_path, metrics_logger=lambda event, **fields: None
        ).run([])

    manifest = asyncio.run(_run())

    assert (manifest.total, manifest.success_rate) == (0, 0.0)
