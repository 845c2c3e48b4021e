"""Tests for terminal host backends and factory."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from tmuxpresenter import config
from tmuxpresenter.adapters.host import NullHost, WindowGeometry, create_host, detect_host_type
from tmuxpresenter.adapters.host.terminal_app import (
    TerminalAppHost,
    _parse_bounds,
    _quote_applescript,
)
from tmuxpresenter.errors import FatalControlError
from tmuxpresenter.models import TerminalConfig


class TestNullHost:
    def test_default_geometry(self):
        host = NullHost()
        assert host.name == "none"
        assert host.spawned is False

    @pytest.mark.asyncio
    async def test_spawn_uses_configured_size(self):
        host = NullHost()
        await host.spawn("demo", Path("/work"), TerminalConfig(spawn=True, width=800, height=500))

        assert host.spawned is True
        geometry = await host.get_geometry()
        assert (geometry.width, geometry.height) == (800, 500)
        assert host.calls[0] == ("spawn", "demo", "/work")

    @pytest.mark.asyncio
    async def test_spawn_maximized_keeps_geometry(self):
        host = NullHost(WindowGeometry(width=1000, height=700))
        await host.spawn(
            "demo", Path("/work"), TerminalConfig(spawn=True, width=10, height=10, maximize=True)
        )

        geometry = await host.get_geometry()
        assert (geometry.width, geometry.height) == (1000, 700)

    @pytest.mark.asyncio
    async def test_resize_keeps_origin(self):
        host = NullHost(WindowGeometry(width=1000, height=700, x=20, y=40))
        await host.resize(5000, 700)

        geometry = await host.get_geometry()
        assert geometry == WindowGeometry(width=5000, height=700, x=20, y=40)

    @pytest.mark.asyncio
    async def test_close(self):
        host = NullHost()
        await host.spawn("demo", Path("/work"), TerminalConfig(spawn=True))
        await host.close()

        assert host.spawned is False
        assert host.calls[-1] == ("close",)


class TestTerminalAppHelpers:
    def test_quote_applescript(self):
        assert _quote_applescript('say "hi" \\ bye') == '"say \\"hi\\" \\\\ bye"'

    def test_parse_bounds(self):
        assert _parse_bounds("10, 23, 1210, 623") == WindowGeometry(
            width=1200, height=600, x=10, y=23
        )

    def test_parse_bounds_garbage(self):
        with pytest.raises(FatalControlError):
            _parse_bounds("missing value")


class TestTerminalAppHost:
    @pytest.mark.asyncio
    async def test_resize_keeps_origin(self):
        host = TerminalAppHost()

        with patch.object(
            host, "_osascript", new_callable=AsyncMock, side_effect=["100, 50, 1300, 650", ""]
        ) as mock_script:
            await host.resize(5000, 600)

            script = mock_script.call_args_list[1][0][0]
            assert "set bounds of front window to {100, 50, 5100, 650}" in script

    @pytest.mark.asyncio
    async def test_spawn_and_close_track_window(self):
        host = TerminalAppHost()

        with patch.object(host, "_osascript", new_callable=AsyncMock, return_value="4242") as mock_script:
            await host.spawn(
                "demo", Path("/work dir"), TerminalConfig(spawn=True, width=900, height=500)
            )
            spawn_script = mock_script.call_args[0][0]
            assert "tmux attach-session -t demo" in spawn_script
            assert "'/work dir'" in spawn_script
            assert "{0, 0, 900, 500}" in spawn_script
            assert host.spawned is True

            await host.close()
            close_script = mock_script.call_args[0][0]
            assert "close window id 4242 saving no" in close_script
            assert host.spawned is False

    @pytest.mark.asyncio
    async def test_close_without_spawn_is_noop(self):
        host = TerminalAppHost()

        with patch.object(host, "_osascript", new_callable=AsyncMock) as mock_script:
            await host.close()
            mock_script.assert_not_called()


class TestFactory:
    def test_create_none(self):
        assert isinstance(create_host("none"), NullHost)

    def test_create_terminal_app(self):
        assert isinstance(create_host("terminal-app"), TerminalAppHost)

    def test_create_default_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "TERMINAL_HOST", "none")
        assert isinstance(create_host(), NullHost)

    def test_auto_detect(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        assert detect_host_type() == "none"
        assert isinstance(create_host("auto"), NullHost)

        monkeypatch.setattr(sys, "platform", "darwin")
        assert detect_host_type() == "terminal-app"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown terminal host") as exc_info:
            create_host("kitty")
        assert "terminal-app, iterm2, none, auto" in str(exc_info.value)
