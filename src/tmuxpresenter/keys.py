"""Key and signal vocabulary

Maps the symbolic names used in presentation documents to tmux key names.
Unknown names are passed to tmux unchanged.
"""

KEY_MAP: dict[str, str] = {
    "Up": "Up",
    "Down": "Down",
    "Left": "Left",
    "Right": "Right",
    "Esc": "Escape",
    "ESC": "Escape",
    "Enter": "Enter",
    "Space": "Space",
    "Tab": "Tab",
}

# Signals delivered through the terminal driver's control characters
SIGNAL_KEYS: dict[str, str] = {
    "SIGINT": "C-c",
    "INT": "C-c",
    "SIGTSTP": "C-z",
    "TSTP": "C-z",
    "SIGQUIT": "C-\\",
    "QUIT": "C-\\",
    "EOF": "C-d",
}


def map_key(key: str) -> str:
    """Document key name -> tmux key name"""
    return KEY_MAP.get(key, key)


def map_signal(signal: str) -> str:
    """Signal name (SIGINT, INT, C-c, ...) -> tmux key name"""
    return SIGNAL_KEYS.get(signal.upper(), signal)
