"""Presentation model

Passive, immutable description of a presentation: metadata, environment
requirements, pane layout and the ordered steps/actions. Field names are
snake_case in Python and camelCase in the YAML document.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ActionKind(str, Enum):
    """The eight action kinds understood by the interpreter."""

    COMMAND = "command"
    SIGNAL = "signal"
    PAUSE = "pause"
    PROMPT = "prompt"
    FOCUS = "focus"
    CAPTURE = "capture"
    KEYPRESS = "keypress"
    DISPLAY = "display"

    @property
    def required_fields(self) -> tuple[str, ...]:
        """Fields that must be present before the action is dispatched."""
        return _REQUIRED_FIELDS[self]


_REQUIRED_FIELDS: dict[ActionKind, tuple[str, ...]] = {
    ActionKind.COMMAND: ("pane", "command"),
    ActionKind.SIGNAL: ("pane", "signal"),
    ActionKind.PAUSE: ("duration",),
    ActionKind.PROMPT: ("message",),
    ActionKind.FOCUS: ("pane",),
    ActionKind.CAPTURE: ("pane", "pattern", "variable"),
    ActionKind.KEYPRESS: ("pane", "key"),
    ActionKind.DISPLAY: ("pane", "text"),
}


class Action(_Model):
    """One action of a step.

    `type` is kept as the raw document string so that an unknown kind is
    reported when the action runs, not when the document loads. Durations,
    timeouts and pauses are milliseconds.
    """

    type: str
    pane: str | None = None
    command: str | None = None
    signal: str | None = None
    duration: int | None = None
    message: str | None = None
    prompt: str | None = None
    wait: bool = False
    pattern: str | None = None
    variable: str | None = None
    timeout: int | None = None
    skip_resize: bool = False
    key: str | None = None
    pause: int | None = None
    text: str | None = None

    @property
    def kind(self) -> ActionKind | None:
        """Parsed kind, or None when `type` is not one of the known kinds."""
        try:
            return ActionKind(self.type)
        except ValueError:
            return None

    def describe(self) -> str:
        """Short label for logs and error messages."""
        if self.pane:
            return f"{self.type}@{self.pane}"
        return self.type


class Step(_Model):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    duration: str | int | None = None
    speaker_notes: str | None = None
    actions: list[Action] = Field(min_length=1)


class PaneConfig(_Model):
    id: str = Field(min_length=1)
    title: str
    position: int = 0
    width: str | None = None  # Informational; panes are always tiled evenly
    default_focus: bool = False
    initial_command: str | None = None


class TerminalConfig(_Model):
    """How the visible host terminal window is spawned."""

    spawn: bool = False
    title: str | None = None
    width: int | None = None
    height: int | None = None
    font_size: int | None = None
    maximize: bool = False


class Layout(_Model):
    session_name: str = Field(min_length=1)
    terminal: TerminalConfig | None = None
    panes: list[PaneConfig] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_panes(self) -> "Layout":
        seen: set[str] = set()
        for pane in self.panes:
            if pane.id in seen:
                raise ValueError(f"duplicate pane id '{pane.id}'")
            seen.add(pane.id)
        focused = [pane.id for pane in self.panes if pane.default_focus]
        if len(focused) > 1:
            raise ValueError(f"more than one pane has defaultFocus: {', '.join(focused)}")
        return self

    @property
    def spawns_terminal(self) -> bool:
        return self.terminal is not None and self.terminal.spawn

    def default_focus_pane(self) -> PaneConfig | None:
        for pane in self.panes:
            if pane.default_focus:
                return pane
        return None


class EnvironmentVariable(_Model):
    name: str = Field(min_length=1)
    required: bool = False
    source: str | None = None  # .env file, relative to the document
    description: str | None = None


class Environment(_Model):
    variables: list[EnvironmentVariable] = Field(default_factory=list)
    working_directory: str | None = None


class Metadata(_Model):
    name: str = Field(min_length=1)
    duration: str | int | None = None
    description: str | None = None


class Presentation(_Model):
    metadata: Metadata
    environment: Environment = Field(default_factory=Environment)
    layout: Layout
    steps: list[Step] = Field(min_length=1)

    @property
    def total_steps(self) -> int:
        return len(self.steps)
