"""Pane 模块

- Pane: declared pane bound to its tmux pane
- PaneRegistry: layout construction and pane-scoped operations
"""

from .pane import Pane
from .registry import PaneRegistry

__all__ = ["Pane", "PaneRegistry"]
