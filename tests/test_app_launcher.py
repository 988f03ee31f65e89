"""Tests for the app-launcher provider: desktop entries, scoring, focus-or-launch."""

from __future__ import annotations

import textwrap

import pytest
from conftest import make_icon_theme

from central_flow.effects import Command
from central_flow.plugins.app_launcher import (
    AppLauncherProvider,
    DesktopEntry,
    clean_exec_command,
    parse_desktop_file,
    scan_applications,
    score_match,
)


def _desktop_file(directory, filename: str, body: str):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


FIREFOX = """
    [Desktop Entry]
    Type=Application
    Name=Firefox
    Exec=/usr/bin/firefox %u
    Icon=firefox
    StartupWMClass=Navigator

    [Desktop Action new-window]
    Name=Open a New Window
    Exec=/usr/bin/firefox --new-window %u
"""


@pytest.fixture
def apps_dir(tmp_path):
    directory = tmp_path / "applications"
    _desktop_file(directory, "firefox.desktop", FIREFOX)
    _desktop_file(
        directory,
        "code.desktop",
        """
        [Desktop Entry]
        Name=Visual Studio Code
        Exec=code --unity-launch %F
        Icon=vscode
        """,
    )
    _desktop_file(
        directory,
        "fire-tools.desktop",
        """
        [Desktop Entry]
        Name=Fire Extinguisher Tools
        Exec=fire-tools
        """,
    )
    _desktop_file(
        directory,
        "hidden.desktop",
        """
        [Desktop Entry]
        Name=Hidden Firewall Helper
        Exec=fw-helper
        NoDisplay=true
        """,
    )
    return directory


@pytest.fixture
def firefox(apps_dir):
    return parse_desktop_file(apps_dir / "firefox.desktop")


@pytest.fixture
def provider(apps_dir, executor, icons):
    return AppLauncherProvider([apps_dir], executor, icons)


class TestDesktopEntries:
    def test_parse_fields(self, firefox, apps_dir):
        assert firefox == DesktopEntry(
            name="Firefox",
            exec="/usr/bin/firefox",
            icon="firefox",
            desktop_file=apps_dir / "firefox.desktop",
            startup_wm_class="Navigator",
        )
        assert firefox.executable == "firefox"

    def test_clean_exec_command(self):
        assert clean_exec_command("gimp-2.10 %U") == "gimp-2.10"
        assert clean_exec_command("app --file %f --name %c") == "app --file  --name"

    def test_no_display_entries_skipped(self, apps_dir):
        assert parse_desktop_file(apps_dir / "hidden.desktop") is None

    def test_missing_exec_skipped(self, tmp_path):
        path = _desktop_file(tmp_path, "x.desktop", "[Desktop Entry]\nName=Only Name\n")
        assert parse_desktop_file(path) is None

    @pytest.mark.parametrize(
        "exec_line",
        ["broken 'quote", "%U %f"],
        ids=["unbalanced-quotes", "field-codes-only"],
    )
    def test_unusable_exec_skipped(self, tmp_path, exec_line):
        path = _desktop_file(
            tmp_path, "x.desktop", f"[Desktop Entry]\nName=Broken\nExec={exec_line}\n"
        )
        assert parse_desktop_file(path) is None
        assert scan_applications([tmp_path]) == []

    def test_unparseable_file_skipped(self, tmp_path):
        path = _desktop_file(tmp_path, "bad.desktop", "no section header here\n")
        assert parse_desktop_file(path) is None

    def test_scan_sorted_and_filtered(self, apps_dir, tmp_path):
        apps = scan_applications([apps_dir, tmp_path / "missing"])
        assert [a.name for a in apps] == [
            "Visual Studio Code",
            "Fire Extinguisher Tools",
            "Firefox",
        ]


class TestScoring:
    @pytest.mark.parametrize(
        ("name", "query", "expected"),
        [
            ("Firefox", "firefox", 100),
            ("Firefox", "fire", 90),
            ("Mozilla Firefox", "fox", 70),
            ("Visual Studio Code", "studio visual", 50),
            ("Visual Studio Code", "studio emacs", 25),
            ("Firefox", "emacs", 0),
        ],
    )
    def test_score_match(self, name, query, expected):
        assert score_match(name, query) == expected


class TestSearch:
    @pytest.mark.asyncio
    async def test_empty_query_returns_nothing(self, provider):
        assert await provider.search("  ") == []

    @pytest.mark.asyncio
    async def test_matches_sorted_by_score(self, tmp_path, executor, icons):
        directory = tmp_path / "scored"
        for name in ("Campfire", "Fire", "Firefox"):
            _desktop_file(directory, f"{name}.desktop", f"[Desktop Entry]\nName={name}\nExec=x\n")
        provider = AppLauncherProvider([directory], executor, icons)
        candidates = await provider.search("fire")
        assert [(c.title, c.score) for c in candidates] == [
            ("Fire", 100),
            ("Firefox", 90),
            ("Campfire", 70),
        ]
        assert all(c.provider_id == "app-launcher" for c in candidates)

    @pytest.mark.asyncio
    async def test_substring_match(self, provider):
        [candidate] = await provider.search("studio")
        assert candidate.title == "Visual Studio Code"
        assert candidate.score == 70

    @pytest.mark.asyncio
    async def test_icon_from_theme(self, provider, icon_dir):
        make_icon_theme(icon_dir, "firefox")
        [candidate] = await provider.search("firefox")
        assert candidate.icon.startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_max_results(self, apps_dir, executor, icons):
        provider = AppLauncherProvider([apps_dir], executor, icons, max_results=1)
        assert len(await provider.search("fire")) == 1

    @pytest.mark.asyncio
    async def test_index_is_cached_until_reload(self, provider, apps_dir):
        assert len(await provider.applications()) == 3
        _desktop_file(apps_dir, "late.desktop", "[Desktop Entry]\nName=Late\nExec=late\n")
        assert len(await provider.applications()) == 3
        provider.reload()
        assert len(await provider.applications()) == 4


class TestLaunch:
    @pytest.mark.asyncio
    async def test_launches_when_no_window(self, provider, executor, firefox):
        await provider.launch(firefox)
        assert executor.spawned == [Command(("/usr/bin/firefox",), detach=True)]

    @pytest.mark.asyncio
    async def test_focuses_window_matched_by_process(self, provider, executor, firefox):
        executor.set_output(("wmctrl", "-lp"), "0x0a00001  0 4242 host Some Page\n")
        executor.set_output(("ps", "-p", "4242", "-o", "comm="), "firefox\n")
        executor.set_output(("wmctrl", "-ia", "0x0a00001"), "")
        await provider.launch(firefox)
        assert Command(("wmctrl", "-ia", "0x0a00001")) in executor.ran
        assert executor.spawned == []

    @pytest.mark.asyncio
    async def test_focuses_window_matched_by_title(self, provider, executor, firefox):
        executor.set_output(
            ("wmctrl", "-lp"),
            "0x01  0 10 host Terminal\n0x02  0 11 host Docs - Firefox\n",
        )
        executor.set_output(("wmctrl", "-ia", "0x02"), "")
        await provider.launch(firefox)
        assert Command(("wmctrl", "-ia", "0x02")) in executor.ran
        assert executor.spawned == []

    @pytest.mark.asyncio
    async def test_focus_failure_launches(self, provider, executor, firefox):
        executor.set_output(("wmctrl", "-lp"), "0x02  0 11 host Firefox\n")
        executor.set_output(("wmctrl", "-ia", "0x02"), "", returncode=1)
        await provider.launch(firefox)
        assert executor.spawned == [Command(("/usr/bin/firefox",), detach=True)]

    @pytest.mark.asyncio
    async def test_new_instance_skips_lookup(self, provider, executor, firefox):
        await provider.launch(firefox, new_instance=True)
        assert executor.ran == []
        assert len(executor.spawned) == 1

    @pytest.mark.asyncio
    async def test_candidate_action_launches(self, provider, executor):
        [candidate] = await provider.search("visual studio")
        await candidate.action()
        assert executor.spawned == [Command(("code", "--unity-launch"), detach=True)]
