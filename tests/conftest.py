"""Pytest 配置"""

import io
import textwrap

import pytest
from rich.console import Console

from tmuxpresenter import config
from tmuxpresenter.telemetry import metrics


class FakeTmux:
    """In-memory stand-in for TmuxClient.

    Every call is appended to `calls` as (method, *args). Pane text returned
    by capture_pane comes from `contents`, keyed by tmux pane id; a callable
    value is invoked on every read.
    """

    def __init__(self, installed: bool = True, window_index: int = 0, pane_base: int = 0):
        self.installed = installed
        self.window_index = window_index
        self.pane_base = pane_base
        self.sessions: set[str] = set()
        self.panes: list[str] = []
        self.calls: list[tuple] = []
        self.contents: dict = {}
        self.ttys: dict[str, str] = {}
        self._next_id = 0

    def _new_pane(self) -> str:
        pane_id = f"%{self._next_id}"
        self._next_id += 1
        self.panes.append(pane_id)
        return pane_id

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def is_installed(self) -> bool:
        return self.installed

    async def has_session(self, session):
        self.calls.append(("has_session", session))
        return session in self.sessions

    async def kill_session(self, session):
        self.calls.append(("kill_session", session))
        if session not in self.sessions:
            return False
        self.sessions.discard(session)
        self.panes.clear()
        return True

    async def new_session(self, session, work_dir):
        self.calls.append(("new_session", session, work_dir))
        self.sessions.add(session)
        return self._new_pane()

    async def split_window(self, target, horizontal=True):
        self.calls.append(("split_window", target, horizontal))
        return self._new_pane()

    async def list_panes(self, target):
        self.calls.append(("list_panes", target))
        return [
            {
                "pane_id": pane_id,
                "window_index": self.window_index,
                "pane_index": self.pane_base + index,
                "width": 80,
                "title": "",
            }
            for index, pane_id in enumerate(self.panes)
        ]

    async def select_layout(self, target, layout):
        self.calls.append(("select_layout", target, layout))

    async def set_hook(self, session, hook, command):
        self.calls.append(("set_hook", session, hook, command))

    async def window_layout(self, target):
        self.calls.append(("window_layout", target))
        return "b25d,160x40,0,0"

    async def resize_pane_width(self, target, width):
        self.calls.append(("resize_pane_width", target, width))

    async def zoom_pane(self, target):
        self.calls.append(("zoom_pane", target))

    async def rename_pane(self, target, title):
        self.calls.append(("rename_pane", target, title))

    async def select_pane(self, target):
        self.calls.append(("select_pane", target))

    async def paste_text(self, target, text):
        self.calls.append(("paste_text", target, text))

    async def send_keys(self, target, *keys):
        self.calls.append(("send_keys", target, *keys))

    async def capture_pane(self, target, lines=None):
        self.calls.append(("capture_pane", target))
        content = self.contents.get(target, "")
        return content() if callable(content) else content

    async def display(self, target, fmt):
        self.calls.append(("display", target, fmt))
        return ""

    async def pane_width(self, target):
        self.calls.append(("pane_width", target))
        return 80

    async def window_width(self, target):
        self.calls.append(("window_width", target))
        return 160

    async def pane_tty(self, target):
        self.calls.append(("pane_tty", target))
        return self.ttys.get(target, f"/dev/ttys{target.lstrip('%')}")


class ScriptedReader:
    """Gate reader that answers immediately and logs each gate."""

    def __init__(self, log: list | None = None):
        self.count = 0
        self.log = log

    async def __call__(self) -> str:
        self.count += 1
        if self.log is not None:
            self.log.append(("gate",))
        return "\n"


SAMPLE_DOCUMENT = textwrap.dedent(
    """
    metadata:
      name: Webhook Demo
      duration: 10 minutes
      description: Receive a webhook end to end
    environment:
      workingDirectory: ./
    layout:
      sessionName: demo-test
      panes:
        - id: p0
          title: Server
          position: 0
          defaultFocus: true
        - id: p1
          title: Tunnel
          position: 1
        - id: p2
          title: Client
          position: 2
          initialCommand: clear
    steps:
      - id: intro
        title: Introduction
        speakerNotes: Say hello
        actions:
          - type: command
            pane: p0
            command: echo hi
      - id: finish
        title: Finish
        actions:
          - type: pause
            duration: 10
    """
)


@pytest.fixture(autouse=True)
def no_delays(monkeypatch):
    """Zero the settle delays so runs complete instantly."""
    for name in (
        "SESSION_READY_DELAY",
        "LAYOUT_SETTLE_DELAY",
        "SPAWN_SETTLE_DELAY",
        "STAGE_SETTLE_DELAY",
        "CAPTURE_RESIZE_SETTLE",
        "CAPTURE_REFRESH_SETTLE",
        "CAPTURE_RESTORE_SETTLE",
    ):
        monkeypatch.setattr(config, name, 0)
    monkeypatch.setattr(config, "CAPTURE_POLL_INTERVAL", 0.01)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def fake_tmux():
    return FakeTmux()


@pytest.fixture
def reader():
    return ScriptedReader()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, force_terminal=False)


@pytest.fixture
def presentation_file(tmp_path):
    path = tmp_path / "presentation.yaml"
    path.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def make_tmux():
    return FakeTmux


@pytest.fixture
def make_reader():
    return ScriptedReader
