"""Action interpreter

- ActionInterpreter: validation and dispatch of the eight action kinds
- PaneCapture: pattern capture with the window-widening workaround
- RunContext: the run's variable store and ${NAME} substitution
"""

from .capture import PaneCapture
from .context import RunContext
from .interpreter import ActionInterpreter, gate_prompt, validate

__all__ = ["ActionInterpreter", "PaneCapture", "RunContext", "gate_prompt", "validate"]
