"""Bootstrap - build the component graph of one run

Responsibilities:
- Create TmuxClient, TerminalHost, PaneRegistry, PresenterUI
- Seed the RunContext with the resolved environment
- Wire the ActionInterpreter to all of the above
- Return RunComponents to the orchestrator

Not responsible for:
- Starting/stopping anything (the orchestrator owns the lifecycle)
- Loading the presentation document
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.host import TerminalHost, create_host
from ..adapters.tmux import TmuxClient
from ..interpreter import ActionInterpreter, RunContext
from ..pane import PaneRegistry
from ..telemetry import get_logger
from ..ui import LineReader, PresenterUI

if TYPE_CHECKING:
    from rich.console import Console

    from ..models import Presentation

logger = get_logger(__name__)


@dataclass
class RunComponents:
    """Components bound to one presentation's session"""

    tmux: TmuxClient
    host: TerminalHost
    panes: PaneRegistry
    ui: PresenterUI
    context: RunContext
    interpreter: ActionInterpreter

    async def teardown(self) -> None:
        """Close the spawned window and destroy the session.

        Both steps are attempted even if the first one fails.
        """
        if self.host.spawned:
            try:
                await self.host.close()
            except Exception as e:
                logger.error(f"[Bootstrap] Failed to close terminal window: {e}")
        try:
            await self.panes.destroy()
        except Exception as e:
            logger.error(f"[Bootstrap] Failed to destroy session: {e}")


def build_components(
    presentation: "Presentation",
    variables: Mapping[str, str],
    *,
    host: TerminalHost | None = None,
    tmux: TmuxClient | None = None,
    environ: Mapping[str, str] | None = None,
    reader: LineReader | None = None,
    console: "Console | None" = None,
) -> RunComponents:
    """Construct the components for a loaded presentation.

    Args:
        presentation: Loaded presentation
        variables: Resolved environment, seeds the variable store
        host: Terminal host, default from create_host()
        tmux: tmux client, default TmuxClient()
        environ: Host environment for substitution fallback, default os.environ
        reader: Gate line reader (tests)
        console: Rich console (tests)

    Returns:
        RunComponents bound to layout.session_name
    """
    tmux = tmux or TmuxClient()
    host = host or create_host()
    context = RunContext(variables=dict(variables))
    if environ is not None:
        context.environ = environ

    panes = PaneRegistry(tmux, presentation.layout.session_name)
    ui = PresenterUI(presentation.total_steps, console=console, reader=reader)
    interpreter = ActionInterpreter(panes, ui, host, context)

    logger.info(
        f"[Bootstrap] Components created for session "
        f"'{presentation.layout.session_name}' (host={host.name})"
    )
    return RunComponents(
        tmux=tmux,
        host=host,
        panes=panes,
        ui=ui,
        context=context,
        interpreter=interpreter,
    )
