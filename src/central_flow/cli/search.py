"""CLI handlers for ``central-flow search`` and ``central-flow providers``."""

from __future__ import annotations

import asyncio
import json
import sys
from argparse import Namespace

from central_flow.cli import load_config
from central_flow.effects import CommandExecutor, RecordingExecutor
from central_flow.errors import log_and_describe_failure
from central_flow.launcher import Launcher
from central_flow.models import ResultSummary


def format_results(results: list[ResultSummary]) -> str:
    if not results:
        return "No results."
    return "\n".join(f"{n:>3}. {r.title}" for n, r in enumerate(results, start=1))


async def _search(args: Namespace) -> int:
    executor: CommandExecutor | None = RecordingExecutor() if args.dry_run else None
    launcher = await Launcher.create(load_config(args), executor=executor)
    results = await launcher.search(args.query, args.provider)

    if args.json:
        print(json.dumps([r.model_dump() for r in results], indent=2))
    else:
        print(format_results(results))

    if args.run is None:
        return 0
    if not 1 <= args.run <= len(results):
        print(f"Error: no result number {args.run}", file=sys.stderr)
        return 1
    chosen = results[args.run - 1]
    try:
        await launcher.execute(chosen.id)
    except Exception as exc:  # noqa: BLE001
        print(
            log_and_describe_failure(
                operation="execute",
                exc=exc,
                user_message=f"Error: running {chosen.title!r} failed: {exc}",
            ),
            file=sys.stderr,
        )
        return 1
    if isinstance(executor, RecordingExecutor):
        for command in executor.spawned:
            print(f"would run: {command}")
    return 0


def run_search(args: Namespace) -> None:
    code = asyncio.run(_search(args))
    if code:
        sys.exit(code)


async def _providers(args: Namespace) -> None:
    launcher = await Launcher.create(load_config(args))
    registry = launcher.registry
    providers = registry.list_providers()
    if not providers:
        print("No providers loaded.")
    else:
        print(f"Providers loaded: {len(providers)}")
        priorities = registry.priority_map()
        for provider in providers:
            print(f"  {provider.id}: {provider.name} [priority: {priorities[provider.id]:g}]")
    for failure in registry.failures:
        print(f"  ! {failure.source} {failure.name}: {failure.error}")


def run_providers(args: Namespace) -> None:
    asyncio.run(_providers(args))
