"""PaneRegistry - pane lifecycle and layout management

Responsibilities:
- Build the session layout from the presentation (one tmux pane per
  declared pane, tiled left to right, kept even by a resize hook)
- Map logical pane ids to tmux panes
- Pane-scoped operations used by the action interpreter

Not responsible for:
- Host window geometry (TerminalHost)
- Action semantics (ActionInterpreter)
"""

import asyncio
import shlex
from pathlib import Path

from tmuxpresenter import config
from tmuxpresenter.adapters.tmux import TmuxClient
from tmuxpresenter.errors import FatalControlError, PaneNotFoundError
from tmuxpresenter.keys import map_signal
from tmuxpresenter.models import Layout
from tmuxpresenter.telemetry import get_logger

from .pane import Pane

logger = get_logger(__name__)

# Hooks that re-tile the window when the client or a pane is resized
_RESIZE_HOOKS = ("window-resized", config.RESIZE_HOOK)


def _write_tty(tty: str, payload: str) -> None:
    with open(tty, "w", encoding="utf-8") as fh:
        fh.write(payload)
        fh.flush()


class PaneRegistry:
    """Logical pane id -> tmux pane, plus pane-scoped operations.

    Every operation on an unknown id raises PaneNotFoundError; tmux failures
    surface as FatalControlError from TmuxClient.
    """

    def __init__(self, tmux: TmuxClient, session_name: str):
        self._tmux = tmux
        self._session = session_name
        self._panes: dict[str, Pane] = {}
        self._window_target: str | None = None

    @property
    def session_name(self) -> str:
        return self._session

    @property
    def window_target(self) -> str:
        """session:window of the presentation window"""
        return self._window_target or f"{self._session}:"

    # === Layout ===

    async def build_layout(self, layout: Layout, work_dir: Path) -> list[Pane]:
        """Create the session and one pane per declared pane.

        An existing session with the same name is killed first, so a re-run
        never attaches to a stale session.

        Args:
            layout: Declared layout
            work_dir: Working directory for the session and every pane

        Returns:
            Registered panes in declaration order
        """
        if await self._tmux.has_session(self._session):
            logger.info(f"[Panes] Killing existing session '{self._session}'")
            await self._tmux.kill_session(self._session)
        self._panes.clear()

        first = await self._tmux.new_session(self._session, str(work_dir))
        await asyncio.sleep(config.SESSION_READY_DELAY)

        tmux_ids = [first]
        for _ in layout.panes[1:]:
            new_id = await self._tmux.split_window(tmux_ids[-1], horizontal=True)
            tmux_ids.append(new_id)
            # Re-tile after each split so narrow windows keep room for the next one
            await self._tmux.select_layout(tmux_ids[0], config.LAYOUT_NAME)

        coordinates = await self._coordinates()
        window_index = coordinates.get(first, (0, 0))[0]
        self._window_target = f"{self._session}:{window_index}"

        await self._tmux.select_layout(self._window_target, config.LAYOUT_NAME)
        retile = f"select-layout -t '{self._window_target}' {config.LAYOUT_NAME}"
        for hook in _RESIZE_HOOKS:
            await self._tmux.set_hook(self._session, hook, retile)

        for index, (pane_config, tmux_id) in enumerate(zip(layout.panes, tmux_ids)):
            w, p = coordinates.get(tmux_id, (window_index, index))
            pane = Pane(
                id=pane_config.id,
                tmux_id=tmux_id,
                coordinate=f"{self._session}:{w}.{p}",
                index=index,
                title=pane_config.title,
            )
            self._panes[pane.id] = pane

            await self._tmux.rename_pane(pane.target, pane_config.title)
            await self.execute(pane.id, f"cd {shlex.quote(str(work_dir))}")
            if pane_config.initial_command:
                await self.execute(pane.id, pane_config.initial_command)

        default_pane = layout.default_focus_pane()
        if default_pane:
            await self.focus(default_pane.id)

        logger.info(
            "[Panes] Layout ready: "
            + ", ".join(f"{pane.id}={pane.coordinate}" for pane in self._panes.values())
        )
        return list(self._panes.values())

    async def _coordinates(self) -> dict[str, tuple[int, int]]:
        """tmux pane id -> (window_index, pane_index)"""
        panes = await self._tmux.list_panes(self._session)
        return {p["pane_id"]: (p["window_index"], p["pane_index"]) for p in panes}

    async def layout_snapshot(self) -> str:
        """Current window layout string, for restore_layout()"""
        return await self._tmux.window_layout(self.window_target)

    async def restore_layout(self, snapshot: str) -> None:
        await self._tmux.select_layout(self.window_target, snapshot)

    async def destroy(self) -> None:
        """Kill the session and forget every pane."""
        if await self._tmux.kill_session(self._session):
            logger.info(f"[Panes] Session '{self._session}' destroyed")
        self._panes.clear()
        self._window_target = None

    # === Lookup ===

    def get(self, pane_id: str) -> Pane:
        pane = self._panes.get(pane_id)
        if pane is None:
            raise PaneNotFoundError(pane_id)
        return pane

    def has_pane(self, pane_id: str) -> bool:
        return pane_id in self._panes

    def pane_ids(self) -> list[str]:
        return list(self._panes.keys())

    # === Pane operations ===

    async def execute(self, pane_id: str, text: str, commit: bool = True) -> None:
        """Type text into a pane.

        Args:
            pane_id: Logical pane id
            text: Text to type; may be empty to only press Enter
            commit: Press Enter afterwards. False leaves a staged command.
        """
        pane = self.get(pane_id)
        if text:
            await self._tmux.paste_text(pane.target, text)
        if commit:
            await self._tmux.send_keys(pane.target, "Enter")

    async def signal(self, pane_id: str, signal: str) -> None:
        pane = self.get(pane_id)
        await self._tmux.send_keys(pane.target, map_signal(signal))

    async def send_keypress(self, pane_id: str, key: str) -> None:
        pane = self.get(pane_id)
        await self._tmux.send_keys(pane.target, key)

    async def focus(self, pane_id: str) -> None:
        pane = self.get(pane_id)
        await self._tmux.select_pane(pane.target)

    async def capture(self, pane_id: str) -> str:
        """Full scrollback of a pane with control sequences stripped"""
        pane = self.get(pane_id)
        return await self._tmux.capture_pane(pane.target)

    async def refresh(self, pane_id: str) -> None:
        """Ask the pane's program to redraw (C-l)"""
        pane = self.get(pane_id)
        await self._tmux.send_keys(pane.target, config.CAPTURE_REFRESH_KEY)

    async def display(self, pane_id: str, text: str) -> None:
        """Print text into a pane as output, bypassing the shell.

        The text is written to the pane's tty over a cleared prompt line,
        so it never shows up as a typed or executed command.
        """
        pane = self.get(pane_id)
        tty = await self._tmux.pane_tty(pane.target)
        if not tty:
            raise FatalControlError(f"display-message -t {pane.target} #{{pane_tty}}", "empty tty")
        payload = config.DISPLAY_LINE_RESET + "\r\n".join(text.splitlines()) + "\r\n"
        await asyncio.to_thread(_write_tty, tty, payload)

    async def pane_width(self, pane_id: str) -> int:
        return await self._tmux.pane_width(self.get(pane_id).target)

    async def window_width(self, pane_id: str) -> int:
        return await self._tmux.window_width(self.get(pane_id).target)

    async def resize_width(self, pane_id: str, width: int) -> None:
        await self._tmux.resize_pane_width(self.get(pane_id).target, width)

    async def zoom(self, pane_id: str) -> None:
        """Toggle the pane filling the whole window"""
        await self._tmux.zoom_pane(self.get(pane_id).target)
