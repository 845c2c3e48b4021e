"""Exception hierarchy

- PreflightError: raised before any tmux/host side effect (nothing to clean up)
- ActionError: a single action failed; the run reports it and continues
- FatalControlError: tmux or the terminal host is unusable; the run aborts
"""


class PresenterError(Exception):
    """Base class for all tmux-presenter errors."""


# === Pre-flight ===


class PreflightError(PresenterError):
    """Failure detected before the session is touched."""


class ConfigError(PreflightError):
    """The presentation document is missing or invalid."""

    def __init__(self, message: str, location: str | None = None):
        self.location = location
        if location:
            message = f"{location}: {message}"
        super().__init__(message)


class MissingEnvVar(PreflightError):
    """A required environment variable could not be resolved."""

    def __init__(self, name: str, description: str | None = None):
        self.name = name
        self.description = description
        message = f"Required environment variable '{name}' is not set."
        if description:
            message = f"{message} {description}"
        super().__init__(message)


class MultiplexerNotFoundError(PreflightError):
    """The tmux binary is not on PATH."""

    def __init__(self, binary: str = "tmux"):
        self.binary = binary
        super().__init__(f"{binary} is not installed. Please install it first.")


# === Per-action (recoverable) ===


class ActionError(PresenterError):
    """A single action failed; the run continues after confirmation."""


class PaneNotFoundError(ActionError):
    def __init__(self, pane_id: str):
        self.pane_id = pane_id
        super().__init__(f"Pane '{pane_id}' not found")


class MissingFieldError(ActionError):
    def __init__(self, kind: str, field: str):
        self.kind = kind
        self.field = field
        super().__init__(f"{kind} action requires '{field}'")


class InvalidFieldError(ActionError):
    def __init__(self, kind: str, field: str, reason: str):
        self.kind = kind
        self.field = field
        super().__init__(f"{kind} action has invalid '{field}': {reason}")


class UnsupportedActionError(ActionError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown action type: {kind}")


class UndefinedVariable(ActionError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Environment variable {name} is not defined")


class CaptureTimeoutError(ActionError):
    def __init__(self, pattern: str, pane_id: str, timeout_ms: int):
        self.pattern = pattern
        self.pane_id = pane_id
        self.timeout_ms = timeout_ms
        super().__init__(
            f'Pattern "{pattern}" not found in pane {pane_id} within {timeout_ms}ms'
        )


# === Run-fatal ===


class FatalControlError(PresenterError):
    """A tmux or terminal-host control command failed."""

    def __init__(self, command: str, detail: str = ""):
        self.command = command
        self.detail = detail.strip()
        message = f"Control command failed: {command}"
        if self.detail:
            message = f"{message}\n{self.detail}"
        super().__init__(message)


class PresenterStateError(PresenterError):
    """An orchestrator method was called in the wrong run state."""
