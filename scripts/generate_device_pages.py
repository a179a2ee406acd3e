"""Generate remote control page modules for configured devices."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from remote_layout.batch import BatchCompiler, BatchManifest
from remote_layout.config_store import DeviceConfigClient, LocalDeviceConfigStore
from remote_layout.handlers import supported_device_classes
from remote_layout.scenario_config import discover_scenarios
from remote_layout.settings import Settings, load_settings
from remote_layout.sources import DeviceSources

_LOGGER = logging.getLogger(__name__)


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate remote control pages for devices")
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("--device-id", help="Compile a single device")
    selection.add_argument("--device-ids", help="Comma separated device ids")
    selection.add_argument("--device-classes", help="Comma separated device classes")
    selection.add_argument("--batch", action="store_true", help="Compile every known device")
    parser.add_argument("--scenario-dir")
    parser.add_argument("--config-mapping")
    parser.add_argument("--config-dir")
    parser.add_argument("--api-base-url")
    parser.add_argument("--output-dir")
    parser.add_argument("--max-concurrency", type=int)
    parser.add_argument("--json", action="store_true", help="Also write the structure JSON")
    parser.add_argument("--test-connection", action="store_true")
    parser.add_argument("--list-classes", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    return load_settings().with_overrides(
        api_base_url=args.api_base_url,
        config_mapping=args.config_mapping,
        config_dir=args.config_dir,
        scenario_dir=args.scenario_dir,
        output_dir=args.output_dir,
        max_concurrency=args.max_concurrency if args.max_concurrency and args.max_concurrency > 0 else None,
    )


def _print_summary(manifest: BatchManifest) -> None:
    print(
        f"Compiled {manifest.total} devices: {manifest.successful} succeeded, "
        f"{manifest.failed} failed, {manifest.skipped} skipped "
        f"({manifest.success_rate:.0%} in {manifest.duration_ms:.0f} ms)"
    )
    for entry in manifest.entries:
        if entry.status == "success":
            print(f"  ok      {entry.device_id} -> {entry.output_path}")
        else:
            error_type = entry.error_type.value if entry.error_type else "-"
            print(f"  {entry.status:<7} {entry.device_id} [{error_type}] {entry.error}")


async def _select_devices(args: argparse.Namespace, sources: DeviceSources) -> list[str]:
    if args.device_id:
        return [args.device_id]
    if args.device_ids:
        return _split_list(args.device_ids)
    if args.device_classes:
        return await sources.device_ids_by_class(_split_list(args.device_classes))
    return await sources.all_device_ids()


async def _run(args: argparse.Namespace) -> int:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.list_classes:
        for device_class in supported_device_classes():
            print(device_class)
        return 0

    settings = _settings_from_args(args)
    if not (settings.api_base_url or settings.config_mapping or settings.config_dir or settings.scenario_dir):
        raise SystemExit(
            "A device source is required: --api-base-url, --config-mapping, --config-dir or --scenario-dir"
        )

    client: DeviceConfigClient | None = None
    if settings.api_base_url:
        client = DeviceConfigClient(settings.api_base_url, timeout=settings.request_timeout_s)

    if args.test_connection:
        if client is None:
            raise SystemExit("--test-connection needs an API base URL")
        async with client:
            reachable = await client.test_connection()
        print(f"Device API {settings.api_base_url}: {'reachable' if reachable else 'unreachable'}")
        return 0 if reachable else 1

    store = None
    if settings.config_mapping or settings.config_dir:
        store = LocalDeviceConfigStore(
            mapping_file=settings.config_mapping,
            config_dir=settings.config_dir,
        )
    scenarios = discover_scenarios(settings.scenario_dir) if settings.scenario_dir else []

    async def _compile(sources: DeviceSources) -> BatchManifest:
        device_ids = await _select_devices(args, sources)
        if not device_ids:
            _LOGGER.warning("no_devices_selected")
        compiler = BatchCompiler(
            sources.get_config,
            groups_provider=sources.get_groups,
            output_dir=settings.output_dir,
            include_json=args.json,
            max_concurrency=settings.max_concurrency,
        )
        return await compiler.run(device_ids)

    if client is not None:
        async with client:
            manifest = await _compile(DeviceSources(scenarios=scenarios, store=store, client=client))
    else:
        manifest = await _compile(DeviceSources(scenarios=scenarios, store=store))

    _print_summary(manifest)
    return 1 if manifest.failed else 0


def main(argv: Sequence[str] | None = None) -> None:
    sys.exit(asyncio.run(_run(_parse_args(argv))))


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
