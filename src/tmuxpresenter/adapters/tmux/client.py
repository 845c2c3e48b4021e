"""Tmux client for subprocess-based tmux control."""

import asyncio
import re
import shutil

from tmuxpresenter import config
from tmuxpresenter.errors import FatalControlError
from tmuxpresenter.telemetry import get_logger, metrics, truncate_command

logger = get_logger(__name__)

# Use tab as delimiter to avoid conflicts with colons in data (paths, titles)
_FIELD_SEP = "\t"

# CSI / OSC / two-byte escape sequences left over in captured text
_ANSI_PATTERN = re.compile(
    r"\x1b\[[0-9;?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[@-Z\\-_]"
)


def strip_ansi(text: str) -> str:
    """Remove terminal control sequences from captured pane text."""
    return _ANSI_PATTERN.sub("", text)


class TmuxClient:
    """Client for driving tmux via subprocess commands.

    Control commands raise FatalControlError on a non-zero exit; probing
    commands (has-session) are run with check=False and return None instead.
    """

    def __init__(self, socket_path: str | None = None, binary: str = "tmux"):
        """Initialize TmuxClient.

        Args:
            socket_path: Optional tmux socket path. If None, uses default socket.
            binary: tmux executable name or path.
        """
        self._socket_path = socket_path
        self._binary = binary

    def is_installed(self) -> bool:
        """Check that the tmux binary is on PATH."""
        return shutil.which(self._binary) is not None

    async def run(self, *args: str, check: bool = True) -> str | None:
        """Execute a tmux command.

        Args:
            *args: Command arguments (e.g., "list-panes", "-t", "demo")
            check: Raise FatalControlError when tmux exits non-zero

        Returns:
            Command stdout on success, None on failure when check is False.
        """
        cmd = [self._binary]
        if self._socket_path:
            cmd.extend(["-S", self._socket_path])
        cmd.extend(args)
        cmd_str = " ".join(cmd)

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            if config.METRICS_ENABLED:
                metrics.inc("tmux.errors")
            logger.error(f"[Tmux] subprocess error: {e}")
            raise FatalControlError(cmd_str, str(e)) from e

        if proc.returncode != 0:
            detail = stderr.decode(errors="replace")
            if not check:
                logger.debug(f"[Tmux] {truncate_command(cmd_str)} exited {proc.returncode}")
                return None
            if config.METRICS_ENABLED:
                metrics.inc("tmux.errors")
            logger.warning(f"[Tmux] command failed: {truncate_command(cmd_str)}: {detail.strip()}")
            raise FatalControlError(cmd_str, detail)

        logger.debug(f"[Tmux] {truncate_command(cmd_str)}")
        return stdout.decode(errors="replace")

    # === Session ===

    async def has_session(self, session: str) -> bool:
        result = await self.run("has-session", "-t", f"={session}", check=False)
        return result is not None

    async def kill_session(self, session: str) -> bool:
        """Kill a session; returns False when it did not exist."""
        result = await self.run("kill-session", "-t", f"={session}", check=False)
        return result is not None

    async def new_session(self, session: str, work_dir: str) -> str:
        """Create a detached session.

        Returns:
            The pane id of the session's first pane (e.g. "%3").
        """
        output = await self.run(
            "new-session", "-d", "-s", session, "-c", work_dir, "-P", "-F", "#{pane_id}"
        )
        return (output or "").strip()

    async def split_window(self, target: str, horizontal: bool = True) -> str:
        """Split a pane; -h places the new pane to the right.

        Returns:
            The pane id of the new pane.
        """
        flag = "-h" if horizontal else "-v"
        output = await self.run("split-window", flag, "-t", target, "-P", "-F", "#{pane_id}")
        return (output or "").strip()

    async def list_panes(self, target: str) -> list[dict]:
        """List the panes of every window in a session.

        Returns:
            List of pane dicts with keys:
            - pane_id: str (e.g., "%0")
            - window_index: int
            - pane_index: int
            - width: int
            - title: str
        """
        fmt = _FIELD_SEP.join([
            "#{pane_id}", "#{window_index}", "#{pane_index}", "#{pane_width}", "#{pane_title}"
        ])
        output = await self.run("list-panes", "-s", "-t", target, "-F", fmt)

        if not output:
            return []

        panes = []
        for line in output.strip().split("\n"):
            if not line:
                continue
            parts = line.split(_FIELD_SEP)
            if len(parts) >= 4:
                try:
                    panes.append(
                        {
                            "pane_id": parts[0],
                            "window_index": int(parts[1]),
                            "pane_index": int(parts[2]),
                            "width": int(parts[3]),
                            "title": parts[4] if len(parts) >= 5 else "",
                        }
                    )
                except ValueError as e:
                    logger.warning(f"[Tmux] Failed to parse pane line: {line!r}: {e}")

        return panes

    # === Layout ===

    async def select_layout(self, target: str, layout: str) -> None:
        """Apply a named layout or a layout string from window_layout()."""
        await self.run("select-layout", "-t", target, layout)

    async def set_hook(self, session: str, hook: str, command: str) -> None:
        await self.run("set-hook", "-t", session, hook, command)

    async def window_layout(self, target: str) -> str:
        return (await self.display(target, "#{window_layout}")).strip()

    async def resize_pane_width(self, target: str, width: int) -> None:
        await self.run("resize-pane", "-t", target, "-x", str(width))

    async def zoom_pane(self, target: str) -> None:
        """Toggle zoom so the pane fills its window."""
        await self.run("resize-pane", "-t", target, "-Z")

    # === Pane ===

    async def rename_pane(self, target: str, title: str) -> None:
        await self.run("select-pane", "-t", target, "-T", title)

    async def select_pane(self, target: str) -> None:
        await self.run("select-pane", "-t", target)

    async def paste_text(self, target: str, text: str) -> None:
        """Type text into a pane literally, without pressing Enter.

        Uses a named paste buffer so quotes, $ and newlines arrive unchanged.
        """
        buffer = config.PASTE_BUFFER_NAME
        await self.run("set-buffer", "-b", buffer, "--", text)
        await self.run("paste-buffer", "-d", "-b", buffer, "-t", target)

    async def send_keys(self, target: str, *keys: str) -> None:
        """Send key names (Enter, C-c, Up, ...) to a pane."""
        await self.run("send-keys", "-t", target, *keys)

    async def capture_pane(self, target: str, lines: int | None = None) -> str:
        """Capture a pane's scrollback as plain text.

        Args:
            target: Pane target
            lines: History depth, default config.CAPTURE_SCROLLBACK_LINES

        Returns:
            Pane text with control sequences stripped.
        """
        depth = lines or config.CAPTURE_SCROLLBACK_LINES
        # -p: print to stdout; -S: start line (negative = into history);
        # -J: join wrapped lines so long tokens stay contiguous
        output = await self.run("capture-pane", "-p", "-J", "-S", f"-{depth}", "-t", target)
        return strip_ansi(output or "")

    async def display(self, target: str, fmt: str) -> str:
        """Expand a tmux format string for a target."""
        return await self.run("display-message", "-p", "-t", target, fmt) or ""

    async def pane_width(self, target: str) -> int:
        return int((await self.display(target, "#{pane_width}")).strip())

    async def window_width(self, target: str) -> int:
        return int((await self.display(target, "#{window_width}")).strip())

    async def pane_tty(self, target: str) -> str:
        return (await self.display(target, "#{pane_tty}")).strip()
