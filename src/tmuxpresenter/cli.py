"""Command line entry point

    tmux-presenter present <config-file>

Exit codes: 0 done, 1 usage or pre-flight error, 2 tmux/host failure,
128+N terminated by signal N.
"""

import argparse
import asyncio
import signal
import sys

from . import __version__
from .errors import FatalControlError, PreflightError
from .presenter import TmuxPresenter
from .telemetry import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_USAGE = 1
EXIT_FATAL = 2


class _ArgumentParser(argparse.ArgumentParser):
    """argparse with exit status 1 on usage errors."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _interrupted_exit(presenter: TmuxPresenter) -> int:
    sig = presenter.terminated_by or signal.SIGINT
    return 128 + int(sig)


def cmd_present(args: argparse.Namespace) -> int:
    presenter = TmuxPresenter()
    try:
        presenter.load(args.config)
    except PreflightError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        asyncio.run(presenter.start())
    except PreflightError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except FatalControlError as e:
        print(f"Fatal: {e}", file=sys.stderr)
        return EXIT_FATAL
    except (KeyboardInterrupt, asyncio.CancelledError):
        print("\nPresentation interrupted", file=sys.stderr)
        return _interrupted_exit(presenter)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="tmux-presenter",
        description="Run a scripted multi-pane tmux presentation",
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_present = sub.add_parser("present", help="Run a presentation from a YAML file")
    p_present.add_argument("config", help="Path to the presentation YAML")
    p_present.set_defaults(func=cmd_present)

    return p


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
