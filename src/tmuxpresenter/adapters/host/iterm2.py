"""iTerm2 host driven through the iTerm2 Python API."""

import shlex
from pathlib import Path

import iterm2

from tmuxpresenter import config
from tmuxpresenter.errors import FatalControlError
from tmuxpresenter.models import TerminalConfig
from tmuxpresenter.telemetry import get_logger

from .base import TerminalHost, WindowGeometry

logger = get_logger(__name__)


class ITerm2Host(TerminalHost):
    """iTerm2 window control.

    The API connection is opened on first use inside the running event loop.
    Before a spawn, geometry calls target the current terminal window.
    """

    name: str = "iterm2"

    def __init__(self, connection: iterm2.Connection | None = None):
        super().__init__()
        self.connection = connection
        self._window: iterm2.Window | None = None

    async def _get_connection(self) -> iterm2.Connection:
        if self.connection is None:
            try:
                self.connection = await iterm2.Connection.async_create()
            except Exception as e:
                raise FatalControlError("iterm2 connect", str(e)) from e
        return self.connection

    async def _get_window(self) -> iterm2.Window:
        if self._window is not None:
            return self._window
        connection = await self._get_connection()
        app = await iterm2.async_get_app(connection)
        window = app.current_terminal_window if app else None
        if window is None:
            raise FatalControlError("iterm2 current window", "no iTerm2 window is open")
        return window

    async def spawn(self, session_name: str, work_dir: Path, terminal: TerminalConfig) -> None:
        connection = await self._get_connection()

        profile = iterm2.LocalWriteOnlyProfile()
        profile.set_custom_directory(str(work_dir))
        profile.set_initial_directory_mode(
            iterm2.InitialWorkingDirectory.INITIAL_WORKING_DIRECTORY_CUSTOM
        )
        font_size = terminal.font_size or config.DEFAULT_FONT_SIZE
        profile.set_normal_font(f"Menlo-Regular {font_size}")
        if terminal.title:
            profile.set_name(terminal.title)

        command = f"/usr/bin/env tmux attach-session -t {shlex.quote(session_name)}"
        try:
            window = await iterm2.Window.async_create(
                connection, command=command, profile_customizations=profile
            )
        except Exception as e:
            raise FatalControlError("iterm2 create window", str(e)) from e
        if window is None:
            raise FatalControlError("iterm2 create window", "iTerm2 returned no window")
        self._window = window
        self._spawned = True

        if terminal.maximize:
            await window.async_set_fullscreen(True)
        else:
            width = terminal.width or config.DEFAULT_WINDOW_WIDTH
            height = terminal.height or config.DEFAULT_WINDOW_HEIGHT
            await window.async_set_frame(
                iterm2.Frame(iterm2.Point(0, 0), iterm2.Size(width, height))
            )
        await window.async_activate()
        logger.info(f"[Host] iTerm2 window {window.window_id} attached to '{session_name}'")

    async def get_geometry(self) -> WindowGeometry:
        window = await self._get_window()
        frame = await window.async_get_frame()
        return WindowGeometry(
            width=int(frame.size.width),
            height=int(frame.size.height),
            x=int(frame.origin.x),
            y=int(frame.origin.y),
        )

    async def resize(self, width: int, height: int) -> None:
        window = await self._get_window()
        frame = await window.async_get_frame()
        await window.async_set_frame(
            iterm2.Frame(iterm2.Point(frame.origin.x, frame.origin.y), iterm2.Size(width, height))
        )

    async def close(self) -> None:
        if not self._spawned or self._window is None:
            return
        await self._window.async_close(force=True)
        self._window = None
        self._spawned = False
        logger.info("[Host] iTerm2 window closed")
