"""Tmux control surface for tmux-presenter."""

from .client import TmuxClient, strip_ansi

__all__ = ["TmuxClient", "strip_ansi"]
