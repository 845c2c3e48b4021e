"""Pane capture - extract text from a pane into a run variable

Window-widening workaround for TUI programs:
TUIs truncate long lines to the pane width, so a URL printed by a TUI may
never appear in full in the scrollback. Unless skip_resize is set, the
host window is forced very wide for the duration of the capture, the pane
is asked to redraw (C-l), and the original geometry is put back
afterwards. The presenter will see the window flash wide for about a
second, then is asked to confirm the window is back in place.
"""

import asyncio
import re
from typing import TYPE_CHECKING

from tmuxpresenter import config
from tmuxpresenter.errors import CaptureTimeoutError
from tmuxpresenter.telemetry import get_logger, metrics

if TYPE_CHECKING:
    from tmuxpresenter.adapters.host import TerminalHost, WindowGeometry
    from tmuxpresenter.pane import PaneRegistry
    from tmuxpresenter.ui import PresenterUI

    from .context import RunContext

logger = get_logger(__name__)


class PaneCapture:
    """Runs capture actions against the pane registry and terminal host."""

    def __init__(
        self,
        panes: "PaneRegistry",
        host: "TerminalHost",
        ui: "PresenterUI",
        context: "RunContext",
    ):
        self._panes = panes
        self._host = host
        self._ui = ui
        self._context = context

    async def capture(
        self,
        pane_id: str,
        pattern: re.Pattern,
        variable: str,
        timeout_ms: int,
        skip_resize: bool = False,
    ) -> str:
        """Poll a pane until pattern matches, then store the match.

        Args:
            pane_id: Logical pane id
            pattern: Compiled pattern; the whole first match is stored
            variable: Destination variable name
            timeout_ms: Wall-clock limit, counted from the start of the action
            skip_resize: Leave the host window alone

        Returns:
            The captured value

        Raises:
            CaptureTimeoutError: no match before the deadline
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000
        original: "WindowGeometry | None" = None

        try:
            if not skip_resize:
                original = await self._host.get_geometry()
                logger.info(
                    f"[Capture] Widening window {original.width}x{original.height} "
                    f"-> {config.CAPTURE_WIDE_WINDOW_WIDTH}x{original.height}"
                )
                await self._host.resize(config.CAPTURE_WIDE_WINDOW_WIDTH, original.height)
                await asyncio.sleep(config.CAPTURE_RESIZE_SETTLE)
                await self._panes.refresh(pane_id)
                await asyncio.sleep(config.CAPTURE_REFRESH_SETTLE)

            value = await self._poll(pane_id, pattern, deadline, timeout_ms)
            self._context.set(variable, value)
        finally:
            if original is not None:
                await self._restore(original)

        self._ui.show_success(f'Captured "{value}" into {variable}')
        if original is not None:
            await self._ui.wait_for_user(config.WINDOW_RESTORED_PROMPT)
        return value

    async def _poll(
        self, pane_id: str, pattern: re.Pattern, deadline: float, timeout_ms: int
    ) -> str:
        """Fixed-interval poll; at least one read even if the time is already up."""
        loop = asyncio.get_running_loop()
        polls = 0
        while True:
            content = await self._panes.capture(pane_id)
            polls += 1
            if config.METRICS_ENABLED:
                metrics.inc("capture.polls")

            match = pattern.search(content)
            if match:
                logger.info(f"[Capture] {pane_id}: matched after {polls} polls")
                if config.METRICS_ENABLED:
                    metrics.inc("capture.matched")
                return match.group(0)

            remaining = deadline - loop.time()
            if remaining <= 0:
                if config.METRICS_ENABLED:
                    metrics.inc("capture.timeout")
                raise CaptureTimeoutError(pattern.pattern, pane_id, timeout_ms)
            await asyncio.sleep(min(config.CAPTURE_POLL_INTERVAL, remaining))

    async def _restore(self, original: "WindowGeometry") -> None:
        logger.info(f"[Capture] Restoring window to {original.width}x{original.height}")
        await self._host.resize(original.width, original.height)
        await asyncio.sleep(config.CAPTURE_RESTORE_SETTLE)
