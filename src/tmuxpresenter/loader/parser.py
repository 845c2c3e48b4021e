"""YAML presentation parser."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from ..models import Presentation
from ..telemetry import get_logger

logger = get_logger(__name__)


def _format_location(loc: tuple[Any, ...]) -> str:
    """("steps", 0, "actions") -> "steps[0].actions" """
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(f".{item}" if parts else str(item))
    return "".join(parts) or "document"


def _config_error(exc: ValidationError) -> ConfigError:
    errors = exc.errors()
    first = errors[0]
    message = first["msg"]
    if len(errors) > 1:
        others = "; ".join(
            f"{_format_location(err['loc'])}: {err['msg']}" for err in errors[1:]
        )
        message = f"{message} (also: {others})"
    return ConfigError(message, location=_format_location(first["loc"]))


def parse_presentation(data: Any) -> Presentation:
    """Validate an already-decoded document.

    Raises:
        ConfigError: naming the first offending location
    """
    if not isinstance(data, dict):
        raise ConfigError("presentation document must be a mapping")
    try:
        return Presentation.model_validate(data)
    except ValidationError as e:
        raise _config_error(e) from e


def load_presentation(path: str | Path) -> Presentation:
    """Read and validate a presentation YAML file.

    Args:
        path: Document path

    Returns:
        The validated Presentation

    Raises:
        ConfigError: file missing, YAML syntax error or schema violation
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", location=str(path)) from e

    presentation = parse_presentation(data)
    logger.info(
        f"[Loader] Loaded '{presentation.metadata.name}': "
        f"{len(presentation.layout.panes)} panes, {presentation.total_steps} steps"
    )
    return presentation
