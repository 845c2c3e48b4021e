"""Telemetry - unified logging and metrics entry point

Log format: [module] msg, with a [Component] prefix inside the message.
Metrics: action.ok/failed, capture.polls/matched/timeout, tmux.errors
"""

import logging

_LOG_FORMAT = "[%(name)s] %(message)s"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a module logger (normally called with __name__)."""
    return logging.getLogger(name)


def setup_logging(level: str | None = None) -> None:
    """Install the package log format once.

    Args:
        level: Level name; defaults to config.LOG_LEVEL
    """
    global _configured
    if _configured:
        return

    from . import config

    logging.basicConfig(level=(level or config.LOG_LEVEL).upper(), format=_LOG_FORMAT)
    _configured = True


def truncate_command(command: str, max_len: int | None = None) -> str:
    """Shorten a command line for logging."""
    from . import config

    limit = max_len or config.LOG_MAX_CMD_LEN
    if len(command) <= limit:
        return command
    return command[:limit] + "..."


class Metrics:
    """In-memory counters keyed by name and optional labels.

    Recorded: action.ok/failed{kind}, capture.polls/matched/timeout, tmux.errors
    """

    def __init__(self):
        self._counters: dict[str, int] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """Increment a counter.

        Args:
            name: Metric name (e.g. "action.ok")
            labels: Optional labels (e.g. {"kind": "capture"})
            value: Increment, default 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        return self._counters.get(self._make_key(name, labels), 0)

    def snapshot(self) -> dict[str, int]:
        """Copy of every counter, for the end-of-run log line"""
        return dict(self._counters)

    def reset(self) -> None:
        self._counters.clear()

    @staticmethod
    def _make_key(name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


# Global metrics instance
metrics = Metrics()
