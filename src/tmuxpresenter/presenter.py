"""TmuxPresenter - top-level run state machine

UNLOADED -> LOADED -> RUNNING -> COMPLETED | ABORTED

- load(): parse the document, resolve environment and working directory,
  build the components. Every pre-flight error is raised here or at the
  top of start(), before tmux is touched.
- start(): welcome gate, layout, optional host window, steps in order,
  completion.
- A failing action is reported and the run continues after the presenter
  confirms. Only FatalControlError (tmux / host unusable) aborts.
- SIGINT/SIGTERM cancel the run; the window and session are torn down on
  the same path as any other abort.
"""

import asyncio
import signal
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from . import config
from .errors import FatalControlError, MultiplexerNotFoundError, PresenterStateError
from .loader import load_presentation, resolve_environment, resolve_working_directory
from .runtime import RunComponents, build_components
from .telemetry import get_logger, metrics

if TYPE_CHECKING:
    from rich.console import Console

    from .adapters.host import TerminalHost
    from .adapters.tmux import TmuxClient
    from .models import Action, Presentation, Step
    from .ui import LineReader

logger = get_logger(__name__)

_TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class RunState(Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class TmuxPresenter:
    """Runs a presentation document against a tmux session."""

    def __init__(
        self,
        host: "TerminalHost | None" = None,
        tmux: "TmuxClient | None" = None,
        environ: Mapping[str, str] | None = None,
        reader: "LineReader | None" = None,
        console: "Console | None" = None,
    ):
        # Injected collaborators, forwarded to build_components()
        self._host = host
        self._tmux = tmux
        self._environ = environ
        self._reader = reader
        self._console = console

        self.state = RunState.UNLOADED
        self.presentation: "Presentation | None" = None
        self.components: RunComponents | None = None
        self.work_dir: Path | None = None
        self.current_step_index = 0
        self.terminated_by: signal.Signals | None = None
        self._tearing_down = False

    # === Load ===

    def load(self, config_path: str | Path) -> "Presentation":
        """Load a presentation and build its components.

        Raises:
            ConfigError: document missing or invalid
            MissingEnvVar: a required variable resolves nowhere
            PresenterStateError: a run is in progress
        """
        if self.state is RunState.RUNNING:
            raise PresenterStateError("Cannot load while a presentation is running")

        path = Path(config_path)
        presentation = load_presentation(path)
        base_dir = path.resolve().parent
        variables = resolve_environment(presentation, base_dir, self._environ)
        work_dir = resolve_working_directory(presentation, base_dir)

        self.components = build_components(
            presentation,
            variables,
            host=self._host,
            tmux=self._tmux,
            environ=self._environ,
            reader=self._reader,
            console=self._console,
        )
        self.presentation = presentation
        self.work_dir = work_dir
        self.current_step_index = 0
        self.terminated_by = None
        self.state = RunState.LOADED
        logger.info(f"[Presenter] Loaded '{presentation.metadata.name}' (work dir {work_dir})")
        return presentation

    # === Run ===

    async def start(self) -> None:
        """Run the loaded presentation to completion.

        Raises:
            PresenterStateError: not in LOADED state
            MultiplexerNotFoundError: tmux is not installed
            FatalControlError: tmux or the host failed; the run is aborted
            asyncio.CancelledError: terminated by SIGINT/SIGTERM
        """
        if self.state is not RunState.LOADED:
            raise PresenterStateError(
                f"Presentation not loaded (state={self.state.value}). Call load() first."
            )
        c = self.components
        presentation = self.presentation

        if not c.tmux.is_installed():
            raise MultiplexerNotFoundError()

        c.ui.show_welcome(presentation.metadata.name, presentation.metadata.description)
        await c.ui.wait_for_user("Press ENTER to begin the presentation...")

        self.state = RunState.RUNNING
        self._tearing_down = False
        self._install_signal_handlers()
        try:
            await self._run(presentation, c)
        except FatalControlError as e:
            self.state = RunState.ABORTED
            logger.error(f"[Presenter] Aborting run: {e}")
            c.ui.show_error(f"Aborting presentation: {e}")
            await self._teardown()
            raise
        except BaseException:
            # Cancellation (termination signal) or an unexpected fault
            self.state = RunState.ABORTED
            logger.warning("[Presenter] Run interrupted, cleaning up")
            await self._teardown()
            raise
        finally:
            self._remove_signal_handlers()

    async def _run(self, presentation: "Presentation", c: RunComponents) -> None:
        layout = presentation.layout
        await c.panes.build_layout(layout, self.work_dir)
        await asyncio.sleep(config.LAYOUT_SETTLE_DELAY)

        if layout.spawns_terminal:
            c.ui.show_message("Opening presentation terminal window...")
            await c.host.spawn(layout.session_name, self.work_dir, layout.terminal)
            await asyncio.sleep(config.SPAWN_SETTLE_DELAY)

        total = presentation.total_steps
        for index, step in enumerate(presentation.steps):
            self.current_step_index = index
            await self._execute_step(step, index + 1, total)

        await self._complete(c)

    async def _execute_step(self, step: "Step", number: int, total: int) -> None:
        ui = self.components.ui
        ui.show_step_title(number, step.title)
        if step.speaker_notes:
            ui.show_speaker_notes(step.speaker_notes)
        ui.show_progress(number, total)
        logger.info(f"[Presenter] Step {number}/{total}: {step.id}")

        for action in step.actions:
            await self._execute_action(action)

    async def _execute_action(self, action: "Action") -> None:
        """Run one action; anything but FatalControlError is recoverable."""
        c = self.components
        try:
            await c.interpreter.execute(action)
        except FatalControlError:
            raise
        except Exception as e:
            if config.METRICS_ENABLED:
                metrics.inc("action.failed", {"kind": action.type})
            logger.warning(f"[Presenter] {action.describe()} failed: {type(e).__name__}: {e}")
            c.ui.show_error(f"Error executing action: {e}")
            await c.ui.wait_for_user(config.ERROR_GATE_PROMPT)
        else:
            if config.METRICS_ENABLED:
                metrics.inc("action.ok", {"kind": action.type})

    async def _complete(self, c: RunComponents) -> None:
        session_name = self.presentation.layout.session_name
        if c.host.spawned:
            c.ui.show_completion(session_name, session_kept=False)
            await c.ui.wait_for_user("Press ENTER to close the presentation window...")
            await self._teardown()
        else:
            # Without a window of our own the presenter may still be
            # attached elsewhere, so the session is left running
            c.ui.show_completion(session_name, session_kept=True)
        self.state = RunState.COMPLETED
        logger.info("[Presenter] Presentation complete")
        if config.METRICS_ENABLED:
            logger.debug(f"[Presenter] Counters: {metrics.snapshot()}")

    # === Cleanup ===

    async def cleanup(self) -> None:
        """Close the spawned window and kill the session."""
        if self.components is not None:
            await self._teardown()

    async def _teardown(self) -> None:
        self._tearing_down = True
        try:
            await self.components.teardown()
        finally:
            self._tearing_down = False

    def _install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        task = asyncio.current_task()
        for sig in _TERMINATION_SIGNALS:
            try:
                loop.add_signal_handler(sig, self._on_terminate, sig, task)
            except (NotImplementedError, RuntimeError, ValueError):
                # Windows or not running in the main thread
                logger.debug(f"[Presenter] Cannot install handler for {sig.name}")

    def _remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in _TERMINATION_SIGNALS:
            try:
                loop.remove_signal_handler(sig)
            except (NotImplementedError, RuntimeError, ValueError):
                pass

    def _on_terminate(self, sig: signal.Signals, task: "asyncio.Task | None") -> None:
        if self._tearing_down:
            logger.warning(f"[Presenter] {sig.name} during cleanup, finishing cleanup first")
            return
        logger.warning(f"[Presenter] Received {sig.name}, stopping presentation")
        self.terminated_by = sig
        if task is not None and not task.done():
            task.cancel()
