"""ActionInterpreter - runs one action at a time

Dispatch table over the eight action kinds:

| kind     | gate                    | effect                              |
|----------|-------------------------|-------------------------------------|
| command  | if wait (stage, commit) | type text, Enter                    |
| signal   | if wait                 | control key (C-c, ...)              |
| pause    | -                       | sleep duration ms                   |
| prompt   | always                  | show message                        |
| focus    | -                       | select pane                         |
| capture  | after window restore    | regex match -> variable             |
| keypress | -                       | one key, optional pause             |
| display  | -                       | print text into pane (not executed) |

Every action is validated before it is dispatched.
"""

import asyncio
import re
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from tmuxpresenter import config
from tmuxpresenter.errors import InvalidFieldError, MissingFieldError, UnsupportedActionError
from tmuxpresenter.keys import map_key
from tmuxpresenter.models import Action, ActionKind
from tmuxpresenter.telemetry import get_logger, truncate_command

from .capture import PaneCapture
from .context import RunContext

if TYPE_CHECKING:
    from tmuxpresenter.adapters.host import TerminalHost
    from tmuxpresenter.pane import PaneRegistry
    from tmuxpresenter.ui import PresenterUI

logger = get_logger(__name__)

Handler = Callable[[Action], Awaitable[None]]


def gate_prompt(custom: str | None) -> str:
    """Custom prompt followed by the default instruction line."""
    if custom:
        return f"{custom}\n{config.WAIT_GATE_PROMPT}"
    return config.WAIT_GATE_PROMPT


# Millisecond fields each kind reads; other kinds ignore them
_TIMED_FIELDS: dict[ActionKind, tuple[str, ...]] = {
    ActionKind.PAUSE: ("duration",),
    ActionKind.CAPTURE: ("timeout",),
}


def validate(action: Action) -> ActionKind:
    """Check kind and required fields.

    Raises:
        UnsupportedActionError: unknown `type`
        MissingFieldError: a field required by the kind is absent or empty
        InvalidFieldError: a numeric field is not positive
    """
    kind = action.kind
    if kind is None:
        raise UnsupportedActionError(action.type)

    for name in kind.required_fields:
        value = getattr(action, name)
        if value is None or value == "":
            raise MissingFieldError(kind.value, name)

    for name in _TIMED_FIELDS.get(kind, ()):
        value = getattr(action, name)
        if value is not None and value <= 0:
            raise InvalidFieldError(kind.value, name, "must be a positive number of milliseconds")
    if kind is ActionKind.KEYPRESS and action.pause is not None and action.pause < 0:
        raise InvalidFieldError(kind.value, "pause", "must not be negative")

    return kind


class ActionInterpreter:
    """Executes validated actions against the panes of one run."""

    def __init__(
        self,
        panes: "PaneRegistry",
        ui: "PresenterUI",
        host: "TerminalHost",
        context: RunContext,
    ):
        self._panes = panes
        self._ui = ui
        self._context = context
        self._capture = PaneCapture(panes, host, ui, context)
        self._handlers: dict[ActionKind, Handler] = {
            ActionKind.COMMAND: self._run_command,
            ActionKind.SIGNAL: self._run_signal,
            ActionKind.PAUSE: self._run_pause,
            ActionKind.PROMPT: self._run_prompt,
            ActionKind.FOCUS: self._run_focus,
            ActionKind.CAPTURE: self._run_capture,
            ActionKind.KEYPRESS: self._run_keypress,
            ActionKind.DISPLAY: self._run_display,
        }

    @property
    def context(self) -> RunContext:
        return self._context

    async def execute(self, action: Action) -> None:
        """Validate and run one action."""
        kind = validate(action)
        logger.debug(f"[Interpreter] {action.describe()}")
        await self._handlers[kind](action)

    async def _run_command(self, action: Action) -> None:
        command = self._context.substitute(action.command)

        if action.wait:
            # Stage: typed but not executed until the presenter confirms
            await self._panes.execute(action.pane, command, commit=False)
            await asyncio.sleep(config.STAGE_SETTLE_DELAY)
            await self._ui.wait_for_user(gate_prompt(action.prompt))
            await self._panes.execute(action.pane, "", commit=True)
        else:
            await self._panes.execute(action.pane, command, commit=True)
        logger.info(f"[Interpreter] {action.pane}$ {truncate_command(command)}")

    async def _run_signal(self, action: Action) -> None:
        if action.wait:
            await self._ui.wait_for_user(gate_prompt(action.prompt))
        await self._panes.signal(action.pane, action.signal)

    async def _run_pause(self, action: Action) -> None:
        await asyncio.sleep(action.duration / 1000)

    async def _run_prompt(self, action: Action) -> None:
        self._ui.show_message(action.message)
        await self._ui.wait_for_user()

    async def _run_focus(self, action: Action) -> None:
        await self._panes.focus(action.pane)

    async def _run_capture(self, action: Action) -> None:
        try:
            pattern = re.compile(action.pattern)
        except re.error as e:
            raise InvalidFieldError("capture", "pattern", str(e)) from e
        await self._capture.capture(
            action.pane,
            pattern,
            action.variable,
            action.timeout or config.CAPTURE_DEFAULT_TIMEOUT_MS,
            skip_resize=action.skip_resize,
        )

    async def _run_keypress(self, action: Action) -> None:
        await self._panes.send_keypress(action.pane, map_key(action.key))
        if action.pause:
            await asyncio.sleep(action.pause / 1000)

    async def _run_display(self, action: Action) -> None:
        text = self._context.substitute(action.text)
        await self._panes.display(action.pane, text)
        if action.pause:
            await asyncio.sleep(action.pause / 1000)
