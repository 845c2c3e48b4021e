"""Terminal host abstract interface

The terminal host is the OS-level terminal application window that shows
the tmux session. Backends:
- none: headless, remembers geometry only (tests, CI, remote shells)
- terminal-app: macOS Terminal.app scripted through osascript
- iterm2: iTerm2 through its Python API

Design principles:
1. Minimal interface: spawn, geometry, resize, close
2. Async first: every call is a coroutine
3. The orchestrator never depends on which backend is wired in
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from tmuxpresenter.models import TerminalConfig


@dataclass(frozen=True)
class WindowGeometry:
    """Host window size in pixels.

    Attributes:
        width, height: Window size
        x, y: Window origin
    """

    width: int
    height: int
    x: int = 0
    y: int = 0


class TerminalHost(ABC):
    """Terminal host interface

    Usage:
        host = create_host("terminal-app")
        await host.spawn("demo", work_dir, terminal_config)
        geometry = await host.get_geometry()
        await host.resize(5000, geometry.height)
        await host.resize(geometry.width, geometry.height)
        await host.close()
    """

    def __init__(self):
        self._spawned = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name ("none", "terminal-app", "iterm2")"""
        pass

    @property
    def spawned(self) -> bool:
        """Whether spawn() opened a window that close() must tear down"""
        return self._spawned

    @abstractmethod
    async def spawn(
        self, session_name: str, work_dir: "Path", terminal: "TerminalConfig"
    ) -> None:
        """Open a window attached to the tmux session

        Args:
            session_name: tmux session to attach
            work_dir: Directory the window starts in
            terminal: Size, font and maximize settings
        """
        pass

    @abstractmethod
    async def get_geometry(self) -> WindowGeometry:
        """Current size of the presentation window"""
        pass

    @abstractmethod
    async def resize(self, width: int, height: int) -> None:
        """Resize the presentation window, keeping its origin"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the spawned window (no-op when nothing was spawned)"""
        pass
