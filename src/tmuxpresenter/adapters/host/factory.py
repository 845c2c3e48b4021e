"""Terminal host factory."""

import sys
from typing import TYPE_CHECKING

from tmuxpresenter import config
from tmuxpresenter.telemetry import get_logger

if TYPE_CHECKING:
    from .base import TerminalHost

logger = get_logger(__name__)

HOST_TYPES = ("terminal-app", "iterm2", "none")


def detect_host_type() -> str:
    """Detect the host backend from the platform.

    Returns:
        "terminal-app" on macOS, otherwise "none"
    """
    if sys.platform == "darwin":
        return "terminal-app"
    return "none"


def create_host(host_type: str | None = None) -> "TerminalHost":
    """Create a terminal host.

    Args:
        host_type: "terminal-app", "iterm2", "none" or "auto".
                   Default from config.

    Returns:
        TerminalHost instance

    Raises:
        ValueError: If host type is unknown
    """
    if host_type is None:
        host_type = config.TERMINAL_HOST

    if host_type == "auto":
        host_type = detect_host_type()
        logger.info(f"[Host] Auto-detected terminal host: {host_type}")

    if host_type == "none":
        from .null import NullHost

        return NullHost()

    if host_type == "terminal-app":
        from .terminal_app import TerminalAppHost

        return TerminalAppHost()

    if host_type == "iterm2":
        from .iterm2 import ITerm2Host

        return ITerm2Host()

    raise ValueError(
        f"Unknown terminal host: {host_type} (expected one of: {', '.join(HOST_TYPES)}, auto)"
    )
