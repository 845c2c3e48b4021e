"""tmux-presenter configuration

Settings are grouped as:
- Capture: poll interval, timeouts, window-widening workaround
- Layout / host: settle delays, default window geometry
- Host selection: which terminal application is scripted
- Logging / metrics
"""

import os

# === Capture 配置 ===
CAPTURE_POLL_INTERVAL = 0.1  # Seconds between pane reads while polling
CAPTURE_DEFAULT_TIMEOUT_MS = 5000  # Used when a capture action declares no timeout
CAPTURE_WIDE_WINDOW_WIDTH = 5000  # Host window width (px) forced during capture
CAPTURE_RESIZE_SETTLE = 1.0  # Seconds for the host window to finish resizing
CAPTURE_REFRESH_SETTLE = 0.5  # Seconds for a TUI to redraw after C-l
CAPTURE_RESTORE_SETTLE = 0.3  # Seconds after restoring the original geometry
CAPTURE_SCROLLBACK_LINES = 32768  # tmux history depth read by capture-pane
CAPTURE_REFRESH_KEY = "C-l"

# === Layout 配置 ===
SESSION_READY_DELAY = 0.5  # After new-session, before splitting
LAYOUT_SETTLE_DELAY = 1.0  # After the layout is built
SPAWN_SETTLE_DELAY = 2.0  # After the host window is spawned
STAGE_SETTLE_DELAY = 0.1  # After typing a staged command, before the gate
LAYOUT_NAME = "even-horizontal"
RESIZE_HOOK = "after-resize-pane"
PASTE_BUFFER_NAME = "tmuxpresenter"
DISPLAY_LINE_RESET = "\r\x1b[K"  # Column 0, erase line: display text replaces the prompt

# === Terminal host 配置 ===
# auto | terminal-app | iterm2 | none
TERMINAL_HOST = os.environ.get("TMUXPRESENTER_TERMINAL_HOST", "auto")
DEFAULT_WINDOW_WIDTH = 1200
DEFAULT_WINDOW_HEIGHT = 600
DEFAULT_FONT_SIZE = 11
MENU_BAR_HEIGHT = 23  # macOS menu bar, kept clear when maximizing

# === Gate 配置 ===
DEFAULT_GATE_PROMPT = "Press ENTER to continue..."
WAIT_GATE_PROMPT = "⏸️  Press ENTER to continue..."
WINDOW_RESTORED_PROMPT = "🪟 Window restored. Please verify position before continuing..."
ERROR_GATE_PROMPT = "Press ENTER to continue despite error..."

# === 日志配置 ===
LOG_LEVEL = os.environ.get("TMUXPRESENTER_LOG_LEVEL", "WARNING")
LOG_MAX_CMD_LEN = 120  # tmux command log truncation

# === 指标配置 ===
METRICS_ENABLED = True
