"""Pane - a declared pane bound to its tmux pane"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Pane:
    """A managed tmux pane

    Attributes:
        id: Logical id from the presentation document
        tmux_id: tmux pane id ("%3"), used as the command target
        coordinate: session:window.index at layout time
        index: Position in the declared pane list
        title: Pane title shown in the border
    """

    id: str
    tmux_id: str
    coordinate: str
    index: int
    title: str

    @property
    def target(self) -> str:
        return self.tmux_id
