"""Terminal utilities module"""

import curses
import re
from typing import Optional

# ANSI sequences and other control characters that would corrupt the screen
CONTROL_PATTERN = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b-\x1f\x7f]")


def sanitize(text: str) -> str:
    """Remove escape sequences and control characters; newlines become spaces."""
    return CONTROL_PATTERN.sub("", text.replace("\n", " ").replace("\t", " "))


def truncate(text: str, max_length: int, ellipsis: str = "...") -> str:
    """Truncate text to maximum length"""
    if max_length <= 0:
        return ""
    if len(text) <= max_length:
        return text
    if max_length <= len(ellipsis):
        return text[:max_length]
    return text[: max_length - len(ellipsis)] + ellipsis


def fit(text: str, width: int) -> str:
    """Truncate or pad text to exactly width characters."""
    return truncate(text, width).ljust(max(0, width))


def safe_addstr(
    window: "curses.window",
    y: int,
    x: int,
    text: str,
    attr: int = 0,
    max_width: Optional[int] = None,
) -> int:
    """
    Write text clipped to the window, ignoring errors at the screen edge.
    Returns the column after the written text.
    """
    max_y, max_x = window.getmaxyx()
    if y < 0 or y >= max_y or x < 0 or x >= max_x:
        return x

    available = max_x - x
    if max_width is not None:
        available = min(available, max_width)

    # Writing the bottom-right cell moves the cursor off screen
    if y == max_y - 1 and x + available >= max_x:
        available = max_x - x - 1

    clipped = sanitize(text)[: max(0, available)]
    try:
        window.addstr(y, x, clipped, attr)
    except curses.error:
        pass
    return x + len(clipped)
