"""Runtime module - component construction for one run"""

from .bootstrap import (
    RunComponents,
    build_components,
)

__all__ = [
    "build_components",
    "RunComponents",
]
