"""macOS Terminal.app host driven through osascript."""

import asyncio
import shlex
from pathlib import Path

from tmuxpresenter import config
from tmuxpresenter.errors import FatalControlError
from tmuxpresenter.models import TerminalConfig
from tmuxpresenter.telemetry import get_logger

from .base import TerminalHost, WindowGeometry

logger = get_logger(__name__)


def _quote_applescript(text: str) -> str:
    """Render text as an AppleScript string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _parse_bounds(output: str) -> WindowGeometry:
    """Parse "left, top, right, bottom" as returned by `get bounds`."""
    try:
        left, top, right, bottom = (int(part.strip()) for part in output.split(","))
    except ValueError as e:
        raise FatalControlError("osascript get bounds", f"unexpected output: {output!r}") from e
    return WindowGeometry(width=right - left, height=bottom - top, x=left, y=top)


class TerminalAppHost(TerminalHost):
    """Terminal.app window control.

    The spawned window is remembered by id; before a spawn (or when the
    presenter runs inside Terminal.app itself) the front window is used.
    """

    name: str = "terminal-app"

    def __init__(self):
        super().__init__()
        self._window_id: str | None = None

    def _window_ref(self) -> str:
        if self._window_id:
            return f"window id {self._window_id}"
        return "front window"

    async def _osascript(self, script: str) -> str:
        """Run an AppleScript snippet and return its stdout."""
        try:
            proc = await asyncio.create_subprocess_exec(
                "osascript",
                "-e",
                script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            raise FatalControlError("osascript", str(e)) from e

        if proc.returncode != 0:
            detail = stderr.decode(errors="replace")
            logger.warning(f"[Host] osascript failed: {detail.strip()}")
            raise FatalControlError("osascript", detail)
        return stdout.decode(errors="replace").strip()

    async def spawn(self, session_name: str, work_dir: Path, terminal: TerminalConfig) -> None:
        attach = (
            f"cd {shlex.quote(str(work_dir))} && "
            f"tmux attach-session -t {shlex.quote(session_name)}"
        )
        font_size = terminal.font_size or config.DEFAULT_FONT_SIZE

        if terminal.maximize:
            # Fill the visible desktop (not full-screen mode), below the menu bar
            bounds = f"{{0, {config.MENU_BAR_HEIGHT}, screenWidth, screenHeight}}"
            screen = """
              tell application "Finder"
                set screenBounds to bounds of window of desktop
                set screenWidth to item 3 of screenBounds
                set screenHeight to item 4 of screenBounds
              end tell
            """
        else:
            width = terminal.width or config.DEFAULT_WINDOW_WIDTH
            height = terminal.height or config.DEFAULT_WINDOW_HEIGHT
            bounds = f"{{0, 0, {width}, {height}}}"
            screen = ""

        title_line = ""
        if terminal.title:
            title_line = f"set custom title of selected tab of window 1 to {_quote_applescript(terminal.title)}"

        script = f"""
            {screen}
            tell application "Terminal"
              do script {_quote_applescript(attach)}
              set font size of window 1 to {font_size}
              set bounds of window 1 to {bounds}
              {title_line}
              activate
              return id of window 1
            end tell
        """
        self._window_id = await self._osascript(script) or None
        self._spawned = True
        logger.info(f"[Host] Terminal.app window {self._window_id} attached to '{session_name}'")

    async def get_geometry(self) -> WindowGeometry:
        output = await self._osascript(
            f'tell application "Terminal" to get bounds of {self._window_ref()}'
        )
        return _parse_bounds(output)

    async def resize(self, width: int, height: int) -> None:
        current = await self.get_geometry()
        right = current.x + width
        bottom = current.y + height
        await self._osascript(
            f'tell application "Terminal" to set bounds of {self._window_ref()} '
            f"to {{{current.x}, {current.y}, {right}, {bottom}}}"
        )

    async def close(self) -> None:
        if not self._spawned:
            return
        await self._osascript(
            f'tell application "Terminal" to close {self._window_ref()} saving no'
        )
        self._spawned = False
        self._window_id = None
        logger.info("[Host] Terminal.app window closed")
