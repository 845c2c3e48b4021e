"""Presentation loading

- load_presentation: YAML document -> validated Presentation
- resolve_environment: declared variables -> resolved values
- resolve_working_directory: workingDirectory -> absolute path
"""

from .environment import load_env_file, resolve_environment, resolve_working_directory
from .parser import load_presentation, parse_presentation

__all__ = [
    "load_presentation",
    "parse_presentation",
    "load_env_file",
    "resolve_environment",
    "resolve_working_directory",
]
