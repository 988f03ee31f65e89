"""Tests for the window-list provider."""

from __future__ import annotations

import pytest

from central_flow.effects import BoundAction, Command
from central_flow.plugins.window_list import (
    LIST_WINDOWS,
    WindowListProvider,
    parse_window_list,
    title_case,
)

WMCTRL_OUTPUT = """\
0x03a00003  0 Navigator.firefox     host Mozilla Firefox
0x04400006  1 gnome-terminal-server.Gnome-terminal  host user@host: ~/src
0x05000001 -1 desktop_window.Nautilus  host @!0,0;BDHF
0x05200002  0 code.Code  host
malformed line
"""


@pytest.fixture
def provider(executor, icons):
    executor.set_output(LIST_WINDOWS.argv, WMCTRL_OUTPUT)
    return WindowListProvider(executor, icons)


class TestParsing:
    def test_parse_skips_untitled_and_malformed(self):
        windows = parse_window_list(WMCTRL_OUTPUT)
        assert [w.window_id for w in windows] == ["0x03a00003", "0x04400006", "0x05000001"]

    def test_title_keeps_inner_spacing(self):
        [window] = parse_window_list("0x1  0 a.b  host  Two  Spaces\n")
        assert window.title == "Two  Spaces"

    def test_class_name(self):
        [window] = parse_window_list(WMCTRL_OUTPUT.splitlines()[0])
        assert window.wm_class == "Navigator.firefox"
        assert window.class_name == "firefox"

    def test_title_case(self):
        assert title_case("mozilla FIREFOX") == "Mozilla Firefox"


class TestSearch:
    @pytest.mark.asyncio
    async def test_empty_query_lists_all_windows(self, provider):
        candidates = await provider.search("")
        assert [c.title for c in candidates] == ["Mozilla Firefox", "User@host: ~/src"]

    @pytest.mark.asyncio
    async def test_filters_case_insensitively(self, provider):
        candidates = await provider.search("FIRE")
        assert [c.title for c in candidates] == ["Mozilla Firefox"]

    @pytest.mark.asyncio
    async def test_candidate_fields(self, provider):
        [candidate] = await provider.search("firefox")
        assert candidate.provider_id == "window-list"
        assert candidate.description == "Workspace 0"
        assert candidate.icon.startswith("data:image/")
        assert candidate.action == BoundAction(
            Command(("wmctrl", "-ia", "0x03a00003")), provider._executor
        )

    @pytest.mark.asyncio
    async def test_action_focuses_window(self, provider, executor):
        [candidate] = await provider.search("firefox")
        await candidate.action()
        assert executor.spawned == [Command(("wmctrl", "-ia", "0x03a00003"))]

    @pytest.mark.asyncio
    async def test_wmctrl_failure_raises(self, executor, icons):
        provider = WindowListProvider(executor, icons)
        with pytest.raises(RuntimeError, match="exited with 127"):
            await provider.search("")
