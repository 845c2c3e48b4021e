"""Adapters 模块

External control surfaces used by the presenter:
- TmuxClient: tmux subprocess commands
- TerminalHost: the visible terminal application window
- create_host: host factory
"""

from .host import TerminalHost, WindowGeometry, create_host, detect_host_type
from .tmux import TmuxClient

__all__ = [
    "TmuxClient",
    "TerminalHost",
    "WindowGeometry",
    "create_host",
    "detect_host_type",
]
