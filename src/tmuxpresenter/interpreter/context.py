"""RunContext - the run's variable store

One context is created per run and passed by reference to the
interpreter. Captures write to `variables`; substitution reads
`variables` first and the host environment second. The process
environment itself is never modified.
"""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from tmuxpresenter.errors import UndefinedVariable

_VARIABLE_PATTERN = re.compile(r"\$\{([^}]+)\}")


@dataclass
class RunContext:
    """Variables shared across the steps of one run.

    Attributes:
        variables: Resolved environment plus captured values
        environ: Host environment used as a fallback
    """

    variables: dict[str, str] = field(default_factory=dict)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)

    def lookup(self, name: str) -> str | None:
        if name in self.variables:
            return self.variables[name]
        return self.environ.get(name)

    def set(self, name: str, value: str) -> None:
        self.variables[name] = value

    def substitute(self, text: str) -> str:
        """Replace every ${NAME} token.

        Raises:
            UndefinedVariable: a token resolves neither in the store nor in
                the host environment
        """

        def _replace(match: re.Match) -> str:
            name = match.group(1)
            value = self.lookup(name)
            if value is None:
                raise UndefinedVariable(name)
            return value

        return _VARIABLE_PATTERN.sub(_replace, text)
