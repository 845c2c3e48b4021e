"""PresenterUI - the controlling terminal's interface

Renders titles, speaker notes, progress and messages with Rich, and owns
the single blocking primitive of a run: wait_for_user().
"""

import asyncio
import sys
from collections.abc import Awaitable, Callable

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from . import config
from .telemetry import get_logger

logger = get_logger(__name__)

LineReader = Callable[[], Awaitable[str]]

_PROGRESS_WIDTH = 30


async def read_stdin_line() -> str:
    """Read one line from stdin without blocking the event loop.

    The line is delivered through an event-loop reader, so cancelling the
    awaiting task (termination signal) releases the gate immediately.
    """
    loop = asyncio.get_running_loop()
    try:
        fd = sys.stdin.fileno()
    except (AttributeError, ValueError, OSError):
        fd = None

    if fd is None:
        return await asyncio.to_thread(sys.stdin.readline)

    future: asyncio.Future[str] = loop.create_future()

    def _on_readable() -> None:
        if not future.done():
            future.set_result(sys.stdin.readline())

    try:
        loop.add_reader(fd, _on_readable)
    except (NotImplementedError, ValueError, OSError):
        # Proactor loops and non-selectable stdin
        return await asyncio.to_thread(sys.stdin.readline)

    try:
        return await future
    finally:
        loop.remove_reader(fd)


class PresenterUI:
    """Controller-side output and confirmation gates."""

    def __init__(
        self,
        total_steps: int,
        console: Console | None = None,
        reader: LineReader | None = None,
    ):
        self.total_steps = total_steps
        self.current_step = 0
        self.console = console or Console(highlight=False)
        self._reader = reader or read_stdin_line

    # === Gate ===

    async def wait_for_user(self, prompt: str | None = None) -> None:
        """Block until the operator presses ENTER.

        Args:
            prompt: Text shown above the gate; default "Press ENTER to continue..."
        """
        message = prompt or config.DEFAULT_GATE_PROMPT
        self.console.print(Text(message, style="bold yellow"))
        logger.debug(f"[UI] gate: {message!r}")
        await self._reader()

    # === Rendering ===

    def show_welcome(self, name: str, description: str | None = None) -> None:
        body = Text(name, style="bold cyan")
        if description:
            body.append(f"\n\n{description}", style="default")
        self.console.clear()
        self.console.print(
            Panel(body, title="TMUX PRESENTER", title_align="left", border_style="green")
        )

    def show_step_title(self, step_number: int, title: str) -> None:
        self.console.print()
        self.console.print(
            Text(f"Step {step_number}/{self.total_steps}: {title}", style="bold cyan")
        )

    def show_speaker_notes(self, notes: str) -> None:
        self.console.print()
        self.console.print(
            Panel(notes.rstrip(), title="SPEAKER NOTES", title_align="left", border_style="green")
        )

    def show_progress(self, current: int, total: int) -> None:
        self.current_step = current
        self.total_steps = total
        self.console.print(Text(self.progress_line(current, total), style="cyan"))

    @staticmethod
    def progress_line(current: int, total: int) -> str:
        """Format as: Progress: [████░░] 50% (1/2)"""
        ratio = current / total if total else 1.0
        filled = round(ratio * _PROGRESS_WIDTH)
        bar = "█" * filled + "░" * (_PROGRESS_WIDTH - filled)
        return f"Progress: [{bar}] {round(ratio * 100)}% ({current}/{total})"

    def show_message(self, message: str) -> None:
        self.console.print(Rule(style="green"))
        self.console.print(Text(message, style="blue"))
        self.console.print(Rule(style="green"))

    def show_error(self, error: str) -> None:
        self.console.print(Text(f"\nERROR: {error}\n", style="bold yellow"))

    def show_success(self, message: str) -> None:
        self.console.print(Text(f"✓ {message}", style="green"))

    def show_completion(self, session_name: str, session_kept: bool) -> None:
        self.console.print(Text("\nPresentation complete!", style="bold green"))
        if session_kept:
            self.console.print(Text("The tmux session is still running.", style="yellow"))
            self.console.print(
                Text(f"To close it: tmux kill-session -t {session_name}\n", style="yellow")
            )
