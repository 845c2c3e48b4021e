"""Environment resolution for a loaded presentation."""

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from ..errors import MissingEnvVar
from ..models import Presentation
from ..telemetry import get_logger

logger = get_logger(__name__)


def load_env_file(path: str | Path) -> dict[str, str]:
    """Read KEY=value pairs from a .env file.

    A missing file yields an empty mapping. Keys without a value are skipped.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug(f"[Loader] env source not found: {path}")
        return {}
    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def resolve_environment(
    presentation: Presentation,
    base_dir: str | Path,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Resolve the declared environment.

    Every declared `source` file is loaded (relative to base_dir) and all of
    its keys are kept. Each `required` variable must then be non-empty in the
    loaded values or in the host environment.

    Args:
        presentation: Loaded presentation
        base_dir: Directory of the presentation document
        environ: Host environment, defaults to os.environ

    Returns:
        Resolved variables, seeding the run's variable store

    Raises:
        MissingEnvVar: a required variable resolves nowhere
    """
    if environ is None:
        environ = os.environ
    base_dir = Path(base_dir)
    declared = presentation.environment.variables

    env: dict[str, str] = {}
    for var in declared:
        if var.source:
            env.update(load_env_file(base_dir / var.source))

    for var in declared:
        if not var.required:
            continue
        value = env.get(var.name) or environ.get(var.name)
        if not value:
            raise MissingEnvVar(var.name, var.description)
        env[var.name] = value

    logger.info(f"[Loader] Resolved {len(env)} environment variables")
    return env


def resolve_working_directory(presentation: Presentation, base_dir: str | Path) -> Path:
    """workingDirectory (default "./") resolved against the document directory."""
    work_dir = presentation.environment.working_directory or "./"
    return (Path(base_dir) / work_dir).resolve()
