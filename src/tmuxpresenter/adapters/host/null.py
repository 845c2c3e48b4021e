"""Headless terminal host."""

from pathlib import Path

from tmuxpresenter import config
from tmuxpresenter.models import TerminalConfig
from tmuxpresenter.telemetry import get_logger

from .base import TerminalHost, WindowGeometry

logger = get_logger(__name__)


class NullHost(TerminalHost):
    """Host with no visible window.

    Keeps an in-memory geometry so the capture workaround still sees a
    consistent resize/restore cycle. Every call is recorded in `calls`.
    """

    name: str = "none"

    def __init__(self, geometry: WindowGeometry | None = None):
        super().__init__()
        self._geometry = geometry or WindowGeometry(
            width=config.DEFAULT_WINDOW_WIDTH, height=config.DEFAULT_WINDOW_HEIGHT
        )
        self.calls: list[tuple] = []

    async def spawn(self, session_name: str, work_dir: Path, terminal: TerminalConfig) -> None:
        self.calls.append(("spawn", session_name, str(work_dir)))
        if terminal.width and terminal.height and not terminal.maximize:
            self._geometry = WindowGeometry(width=terminal.width, height=terminal.height)
        self._spawned = True
        logger.info(f"[Host] headless: not opening a window for '{session_name}'")

    async def get_geometry(self) -> WindowGeometry:
        self.calls.append(("get_geometry",))
        return self._geometry

    async def resize(self, width: int, height: int) -> None:
        self.calls.append(("resize", width, height))
        self._geometry = WindowGeometry(
            width=width, height=height, x=self._geometry.x, y=self._geometry.y
        )

    async def close(self) -> None:
        self.calls.append(("close",))
        self._spawned = False
