"""Curses key normalization"""

import curses
from typing import Union

SPECIAL_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_HOME: "home",
    curses.KEY_END: "end",
    curses.KEY_PPAGE: "pgup",
    curses.KEY_NPAGE: "pgdown",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_BTAB: "shift+tab",
    curses.KEY_RESIZE: "resize",
}

CONTROL_CHARS = {
    "\n": "enter",
    "\r": "enter",
    "\t": "tab",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "ctrl+c",
}


def key_name(key: Union[int, str]) -> str:
    """
    Name a key returned by get_wch().

    Printable characters are returned as-is (one character, possibly
    non-ASCII); everything else gets a multi-character name so it can never
    be mistaken for text input.
    """
    if isinstance(key, int):
        return SPECIAL_KEYS.get(key, f"key_{key}")

    if key in CONTROL_CHARS:
        return CONTROL_CHARS[key]

    if len(key) == 1 and ord(key) < 32:
        return f"ctrl+{chr(ord(key) + 96)}"

    return key


def is_text(key: str) -> bool:
    """True for a single printable character."""
    return len(key) == 1 and key.isprintable()
