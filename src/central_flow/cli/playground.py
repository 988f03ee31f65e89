"""Interactive launcher playground REPL."""

from __future__ import annotations

import asyncio
from argparse import Namespace

from central_flow.cli import load_config
from central_flow.errors import ResultNotFoundError
from central_flow.launcher import Launcher
from central_flow.models import ResultSummary


def _print_results(results: list[ResultSummary]) -> None:
    if not results:
        print("No results.")
    for n, result in enumerate(results, start=1):
        print(f"  {n:>3}. {result.title}")
    print()


def _print_help() -> None:
    print("Commands:")
    print("  <text>           Search all providers")
    print("  /run N           Execute result N of the last search")
    print("  /providers       List loaded providers")
    print("  /failures        Show provider load failures")
    print("  /help            Show this help")
    print("  /quit            Exit playground")
    print()


class _PlaygroundState:
    def __init__(self, launcher: Launcher) -> None:
        self.launcher = launcher
        self.last_results: list[ResultSummary] = []


async def _run_result(state: _PlaygroundState, arg: str) -> None:
    if not arg.isdigit() or not 1 <= int(arg) <= len(state.last_results):
        print(f"Usage: /run N with N between 1 and {len(state.last_results)}")
        print()
        return
    chosen = state.last_results[int(arg) - 1]
    try:
        await state.launcher.execute(chosen.id)
    except ResultNotFoundError:
        print("That result is stale; search again.")
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}")
    else:
        print(f"Ran: {chosen.title}")
    print()


async def _handle_input(state: _PlaygroundState, line: str) -> bool:
    """Handle one line of input. Returns False to quit."""
    stripped = line.strip()

    if stripped.startswith("/"):
        parts = stripped.split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        if cmd == "/quit" or cmd == "/exit":
            return False

        if cmd == "/help":
            _print_help()
            return True

        if cmd == "/run":
            await _run_result(state, arg.strip())
            return True

        if cmd == "/providers":
            providers = state.launcher.registry.list_providers()
            if not providers:
                print("No providers loaded.")
            for provider in providers:
                print(f"  {provider.id}: {provider.name}")
            print()
            return True

        if cmd == "/failures":
            failures = state.launcher.registry.failures
            if not failures:
                print("No load failures.")
            for failure in failures:
                print(f"  [{failure.source}] {failure.name}: {failure.error}")
            print()
            return True

        print(f"Unknown command: {cmd}. Type /help for available commands.")
        print()
        return True

    # Plain text is a query; the empty query is valid too.
    state.last_results = await state.launcher.search(stripped)
    _print_results(state.last_results)
    return True


def run_playground(args: Namespace) -> None:
    config = load_config(args)

    async def _loop() -> None:
        launcher = await Launcher.create(config)
        print()
        print("central-flow playground")
        print(f"Providers loaded: {len(launcher.registry)}")
        print("Type /help for commands, /quit to exit.")
        print()

        state = _PlaygroundState(launcher)
        while True:
            try:
                line = input("search> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not await _handle_input(state, line):
                break

    try:
        asyncio.run(_loop())
    except KeyboardInterrupt:
        pass
    print("Goodbye.")
