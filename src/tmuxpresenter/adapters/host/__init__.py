"""Terminal host backends."""

from .base import TerminalHost, WindowGeometry
from .factory import HOST_TYPES, create_host, detect_host_type
from .null import NullHost

__all__ = [
    "TerminalHost",
    "WindowGeometry",
    "NullHost",
    "HOST_TYPES",
    "create_host",
    "detect_host_type",
]
