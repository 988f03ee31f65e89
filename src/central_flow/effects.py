"""Side effects as data: commands, executors and bound actions.

Providers never spawn processes themselves.  They describe what to run
as a :class:`Command` and hand it to the injected
:class:`CommandExecutor`, so tests can swap in a
:class:`RecordingExecutor` and assert on the requested effects.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """A process invocation: argv plus whether it outlives the launcher."""

    argv: tuple[str, ...]
    detach: bool = False

    def __post_init__(self) -> None:
        if not self.argv:
            raise ValueError("Command argv must not be empty")

    @classmethod
    def from_string(cls, cmdline: str, *, detach: bool = False) -> Command:
        """Split a shell-style command line (no shell is involved when run)."""
        return cls(argv=tuple(shlex.split(cmdline)), detach=detach)

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass
class CommandOutput:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class CommandExecutor(Protocol):
    """Evaluates commands on behalf of providers and their actions."""

    async def run(self, command: Command) -> CommandOutput:
        """Run to completion and capture output."""
        ...

    async def spawn(self, command: Command) -> None:
        """Start without waiting for the process to finish."""
        ...


class SubprocessExecutor:
    """Executor backed by ``asyncio`` subprocesses.  No shell is used."""

    async def run(self, command: Command) -> CommandOutput:
        proc = await asyncio.create_subprocess_exec(
            *command.argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        return CommandOutput(
            returncode=proc.returncode if proc.returncode is not None else 0,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )

    async def spawn(self, command: Command) -> None:
        logger.info("Spawning %s", command)
        await asyncio.create_subprocess_exec(
            *command.argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
            start_new_session=command.detach,
        )


class RecordingExecutor:
    """Executor that records commands instead of running them.

    ``outputs`` maps an argv tuple to the canned :class:`CommandOutput`
    returned by :meth:`run`; unknown commands return exit status 127.
    Used by the test-suite and by the CLI ``--dry-run`` flag.
    """

    def __init__(self, outputs: dict[tuple[str, ...], CommandOutput] | None = None) -> None:
        self.outputs: dict[tuple[str, ...], CommandOutput] = dict(outputs or {})
        self.ran: list[Command] = []
        self.spawned: list[Command] = []

    def set_output(self, argv: tuple[str, ...], stdout: str, returncode: int = 0) -> None:
        self.outputs[argv] = CommandOutput(returncode=returncode, stdout=stdout)

    async def run(self, command: Command) -> CommandOutput:
        self.ran.append(command)
        return self.outputs.get(
            command.argv, CommandOutput(returncode=127, stderr="not recorded")
        )

    async def spawn(self, command: Command) -> None:
        self.spawned.append(command)


@dataclass(frozen=True)
class BoundAction:
    """Zero-argument action that spawns ``command`` through ``executor``."""

    command: Command
    executor: CommandExecutor = field(repr=False, compare=False)

    def __call__(self) -> Awaitable[None]:
        return self.executor.spawn(self.command)
