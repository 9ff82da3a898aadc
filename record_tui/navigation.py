"""Cursor movement module"""

from dataclasses import replace
from typing import Optional

from .state import BrowserState


def move_up(state: BrowserState) -> BrowserState:
    if state.cursor > 0:
        return replace(state, cursor=state.cursor - 1)
    return state


def move_down(state: BrowserState) -> BrowserState:
    if state.cursor < len(state.visible) - 1:
        return replace(state, cursor=state.cursor + 1)
    return state


def jump_first(state: BrowserState) -> BrowserState:
    return replace(state, cursor=0)


def jump_last(state: BrowserState) -> BrowserState:
    if not state.visible:
        return state
    return replace(state, cursor=len(state.visible) - 1)


def station_at_cursor(state: BrowserState) -> Optional[int]:
    """Catalog index under the cursor, None when nothing is visible."""
    if 0 <= state.cursor < len(state.visible):
        return state.visible[state.cursor]
    return None
