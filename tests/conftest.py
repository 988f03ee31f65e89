"""Test fixtures for central-flow tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from central_flow.config import LauncherConfig
from central_flow.effects import RecordingExecutor
from central_flow.icons import IconResolver
from central_flow.providers.base import Candidate

# Smallest valid PNG: signature plus IHDR/IDAT/IEND for a 1x1 image.
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c6360000002000001e221bc330000000049454e44ae426082"
)
SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"/>'


class ActionSpy:
    """Zero-argument action that counts its invocations."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls = 0
        self.error = error

    def __call__(self) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


class FakeProvider:
    """Provider returning fixed titles, optionally filtered by substring."""

    def __init__(
        self,
        provider_id: str,
        titles: list[str] | None = None,
        *,
        priority: float | None = None,
        name: str | None = None,
        filter_by_query: bool = False,
    ) -> None:
        self.id = provider_id
        self.name = name or provider_id.title()
        if priority is not None:
            self.priority = priority
        self.titles = titles or []
        self.filter_by_query = filter_by_query
        self.queries: list[str] = []
        self.actions: dict[str, ActionSpy] = {}

    async def search(self, query: str) -> list[Candidate]:
        self.queries.append(query)
        candidates = []
        for title in self.titles:
            if self.filter_by_query and query.lower() not in title.lower():
                continue
            action = self.actions.setdefault(title, ActionSpy())
            candidates.append(make_candidate(title, provider_id=self.id, action=action))
        return candidates


class FailingProvider:
    """Provider whose search always raises."""

    def __init__(self, provider_id: str = "broken", *, priority: float = 0) -> None:
        self.id = provider_id
        self.name = "Broken"
        self.priority = priority

    async def search(self, query: str) -> list[Candidate]:
        raise RuntimeError(f"cannot search for {query!r}")


def make_candidate(
    title: str,
    provider_id: str = "fake",
    action=None,
    icon: str | None = None,
) -> Candidate:
    """Create a candidate with a no-op action unless one is given."""
    return Candidate(
        provider_id=provider_id,
        title=title,
        action=action or ActionSpy(),
        icon=icon,
    )


def make_icon_theme(
    base: Path,
    icon_name: str,
    *,
    theme: str = "hicolor",
    subdir: str = "48x48/apps",
    ext: str = ".png",
) -> Path:
    """Write one icon file under ``base/theme/subdir`` and return its path."""
    directory = base / theme / subdir
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{icon_name}{ext}"
    path.write_bytes(SVG_BYTES if ext == ".svg" else PNG_BYTES)
    return path


def make_test_config(tmp_path: Path, **overrides) -> LauncherConfig:
    """LauncherConfig pointing every directory into ``tmp_path``."""
    values = {
        "icon_base_directories": [tmp_path / "icons"],
        "application_directories": [tmp_path / "applications"],
        "external_provider_directory": tmp_path / "plugins",
        "builtin_providers": [],
    }
    values.update(overrides)
    return LauncherConfig(**values)


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def icon_dir(tmp_path) -> Path:
    directory = tmp_path / "icons"
    directory.mkdir()
    return directory


@pytest.fixture
def icons(icon_dir) -> IconResolver:
    return IconResolver([icon_dir])
