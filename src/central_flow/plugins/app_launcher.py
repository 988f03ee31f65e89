"""Installed applications from freedesktop ``.desktop`` entries.

Entries are scanned once, lazily, on the first non-empty query.  Picking
a result focuses a running window of the application when one can be
found with ``wmctrl``/``ps``; otherwise a new instance is launched.
"""

from __future__ import annotations

import asyncio
import configparser
import functools
import logging
import re
import shlex
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from central_flow.effects import Command, CommandExecutor
from central_flow.icons.categories import infer_category
from central_flow.icons.resolver import IconResolver, IconSearchOptions
from central_flow.providers.base import Candidate, ProviderContext

logger = logging.getLogger(__name__)

_DESKTOP_GROUP = "Desktop Entry"
_FIELD_CODE_RE = re.compile(r"%[fFuUdDnNickvm]")


@dataclass(frozen=True)
class DesktopEntry:
    name: str
    exec: str
    icon: str
    desktop_file: Path
    wm_class: str = ""
    startup_wm_class: str = ""

    @property
    def executable(self) -> str:
        """Basename of the program in ``Exec`` (``/usr/bin/firefox`` -> ``firefox``)."""
        try:
            argv = shlex.split(self.exec)
        except ValueError:
            argv = self.exec.split()
        return PurePosixPath(argv[0]).name if argv else ""


def clean_exec_command(exec_line: str) -> str:
    """Drop ``%f``/``%U``-style field codes from an ``Exec`` value."""
    return _FIELD_CODE_RE.sub("", exec_line).strip()


def parse_desktop_file(path: Path) -> DesktopEntry | None:
    """Parse one ``.desktop`` file; ``None`` for hidden or unusable entries."""
    parser = configparser.ConfigParser(interpolation=None, strict=False, delimiters=("=",))
    parser.optionxform = str  # keys are case-sensitive
    try:
        with open(path, encoding="utf-8") as f:
            parser.read_file(f)
    except (OSError, UnicodeDecodeError, configparser.Error) as exc:
        logger.warning("Error parsing desktop file %s: %s", path, exc)
        return None

    if not parser.has_section(_DESKTOP_GROUP):
        return None
    group = parser[_DESKTOP_GROUP]

    name = group.get("Name", "").strip()
    exec_line = group.get("Exec", "").strip()
    if not name or not exec_line or group.get("NoDisplay", "").strip() == "true":
        return None

    command = clean_exec_command(exec_line)
    try:
        argv = shlex.split(command)
    except ValueError as exc:
        logger.warning("Unusable Exec line in %s: %s", path, exc)
        return None
    if not argv:
        logger.warning("Exec line in %s has no program", path)
        return None

    return DesktopEntry(
        name=name,
        exec=command,
        icon=group.get("Icon", "").strip(),
        desktop_file=path,
        wm_class=group.get("WMClass", "").strip(),
        startup_wm_class=group.get("StartupWMClass", "").strip(),
    )


def scan_applications(directories: Iterable[Path]) -> list[DesktopEntry]:
    applications: list[DesktopEntry] = []
    for directory in directories:
        if not directory.is_dir():
            continue
        for path in sorted(directory.glob("*.desktop")):
            entry = parse_desktop_file(path)
            if entry is not None:
                applications.append(entry)
    return applications


def score_match(app_name: str, query: str) -> float:
    """Relevance 0-100: exact 100, prefix 90, substring 70, else word overlap."""
    name = app_name.lower()
    needle = query.lower()

    if name == needle:
        return 100.0
    if name.startswith(needle):
        return 90.0
    if needle in name:
        return 70.0

    words = needle.split(" ")
    matched = sum(1 for word in words if word in name)
    return matched / len(words) * 50


class AppLauncherProvider:
    id = "app-launcher"
    name = "Applications"
    description = "Find and launch installed applications"
    priority = 1

    def __init__(
        self,
        application_directories: Iterable[Path],
        executor: CommandExecutor,
        icons: IconResolver,
        *,
        max_results: int = 10,
    ) -> None:
        self._directories = [Path(d) for d in application_directories]
        self._executor = executor
        self._icons = icons
        self._max_results = max_results
        self._applications: list[DesktopEntry] | None = None
        self._load_lock = asyncio.Lock()

    async def applications(self) -> list[DesktopEntry]:
        if self._applications is None:
            async with self._load_lock:
                if self._applications is None:
                    self._applications = await asyncio.to_thread(
                        scan_applications, self._directories
                    )
                    logger.info("Indexed %d applications", len(self._applications))
        return self._applications

    def reload(self) -> None:
        """Forget the index; the next search rescans the directories."""
        self._applications = None

    async def search(self, query: str) -> list[Candidate]:
        if not query.strip():
            return []

        needle = query.lower()
        candidates = [
            Candidate(
                provider_id=self.id,
                title=app.name,
                description="Launch application",
                icon=self._icons.resolve(
                    app.icon, IconSearchOptions(category=infer_category(app.name))
                ),
                score=score_match(app.name, query),
                action=functools.partial(self.launch, app),
            )
            for app in await self.applications()
            if needle in app.name.lower()
        ]
        candidates.sort(key=lambda c: c.score or 0, reverse=True)
        return candidates[: self._max_results]

    # ── actions ───────────────────────────────────────────────────

    async def launch(self, app: DesktopEntry, *, new_instance: bool = False) -> None:
        """Focus a running window of ``app``, or start a new instance."""
        window_id = None if new_instance else await self.find_window(app)
        if window_id is None:
            await self._executor.spawn(Command.from_string(app.exec, detach=True))
            return
        focused = await self._executor.run(Command(("wmctrl", "-ia", window_id)))
        if not focused.ok:
            logger.warning(
                "Could not focus window %s for %s; starting a new instance",
                window_id,
                app.name,
            )
            await self._executor.spawn(Command.from_string(app.exec, detach=True))

    async def find_window(self, app: DesktopEntry) -> str | None:
        """Window id of a running instance of ``app`` (``wmctrl -lp``), if any."""
        try:
            listing = await self._executor.run(Command(("wmctrl", "-lp")))
        except OSError as exc:
            logger.debug("wmctrl unavailable: %s", exc)
            return None
        if not listing.ok:
            return None

        for line in listing.stdout.splitlines():
            parts = line.split(None, 4)
            if len(parts) < 4:
                continue
            window_id, _desktop, pid = parts[0], parts[1], parts[2]
            title = parts[4] if len(parts) > 4 else ""
            if await self._is_application_window(app, pid, title):
                return window_id
        return None

    async def _is_application_window(self, app: DesktopEntry, pid: str, title: str) -> bool:
        try:
            ps = await self._executor.run(Command(("ps", "-p", pid, "-o", "comm=")))
        except OSError:
            return False
        process_name = ps.stdout.strip() if ps.ok else ""
        executable = app.executable
        if process_name and executable and (
            process_name == executable or executable in process_name
        ):
            return True

        lowered_title = title.lower()
        wm_class = app.wm_class or app.startup_wm_class
        if wm_class and wm_class.lower() in lowered_title:
            return True
        return app.name.lower() in lowered_title


def create_provider(context: ProviderContext) -> AppLauncherProvider:
    return AppLauncherProvider(
        context.config.application_directories,
        context.executor,
        context.icons,
        max_results=context.config.max_app_results,
    )
