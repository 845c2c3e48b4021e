"""Scripted multi-pane tmux presentations"""

__version__ = "0.1.0"
