"""Open windows as search results, via ``wmctrl``.

An empty query lists every window.  Choosing a result focuses the window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from central_flow.effects import BoundAction, Command, CommandExecutor
from central_flow.icons.resolver import IconResolver
from central_flow.providers.base import Candidate, ProviderContext

logger = logging.getLogger(__name__)

LIST_WINDOWS = Command(("wmctrl", "-lx"))


@dataclass(frozen=True)
class WindowInfo:
    window_id: str
    desktop: str
    wm_class: str
    title: str

    @property
    def class_name(self) -> str:
        """``Navigator.firefox`` -> ``firefox``."""
        return self.wm_class.rsplit(".", 1)[-1]


def parse_window_list(output: str) -> list[WindowInfo]:
    """Parse ``wmctrl -lx`` lines: id, desktop, class, host, title."""
    windows: list[WindowInfo] = []
    for line in output.splitlines():
        parts = line.split(None, 4)
        if len(parts) < 5:
            continue
        window_id, desktop, wm_class, _host, title = parts
        title = title.strip()
        if title:
            windows.append(WindowInfo(window_id, desktop, wm_class, title))
    return windows


def title_case(title: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in title.lower().split(" "))


class WindowListProvider:
    id = "window-list"
    name = "Open Windows"
    description = "Switch to an open window"
    priority = 0

    def __init__(self, executor: CommandExecutor, icons: IconResolver) -> None:
        self._executor = executor
        self._icons = icons

    async def list_windows(self) -> list[WindowInfo]:
        output = await self._executor.run(LIST_WINDOWS)
        if not output.ok:
            raise RuntimeError(
                f"{LIST_WINDOWS} exited with {output.returncode}: {output.stderr.strip()}"
            )
        return parse_window_list(output.stdout)

    async def search(self, query: str) -> list[Candidate]:
        needle = query.lower()
        candidates: list[Candidate] = []
        for window in await self.list_windows():
            title = title_case(window.title)
            # "@!" titles belong to desktop-shell helper windows.
            if not title or title.startswith("@!") or needle not in title.lower():
                continue
            candidates.append(
                Candidate(
                    provider_id=self.id,
                    title=title,
                    description=f"Workspace {window.desktop}",
                    icon=self._icons.resolve_window(window.class_name),
                    action=BoundAction(
                        Command(("wmctrl", "-ia", window.window_id)), self._executor
                    ),
                )
            )
        logger.debug("window-list: %d match(es) for %r", len(candidates), query)
        return candidates


def create_provider(context: ProviderContext) -> WindowListProvider:
    return WindowListProvider(context.executor, context.icons)
