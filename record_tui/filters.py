"""Visibility filter module"""

from dataclasses import replace
from typing import Callable, List, Sequence, Tuple

from .models import ALL_TAB, AllTab, GenreTab, Station, Tab
from .search import clear_search, retain_visible_matches
from .state import BrowserState

FavoriteTest = Callable[[int], bool]


def rebuild_visible(
    stations: Sequence[Station],
    tab: Tab,
    favorites_only: bool,
    is_favorite: FavoriteTest,
) -> Tuple[int, ...]:
    """
    Compute the ordered catalog indices to display.

    On the All tab with the favorites filter off, favorites are pinned to the
    top; everywhere else catalog order is kept.
    """
    if isinstance(tab, AllTab) and not favorites_only:
        favorites = [i for i, s in enumerate(stations) if is_favorite(s.id)]
        others = [i for i, s in enumerate(stations) if not is_favorite(s.id)]
        return tuple(favorites + others)

    visible: List[int] = []
    for i, station in enumerate(stations):
        if favorites_only and not is_favorite(station.id):
            continue
        if isinstance(tab, GenreTab) and not station.has_genre(tab.name):
            continue
        visible.append(i)
    return tuple(visible)


def apply_filters(state: BrowserState, is_favorite: FavoriteTest) -> BrowserState:
    """
    Rebuild the visible list; the cursor snaps to the top if it falls off
    and matches that are no longer visible are dropped.
    """
    visible = rebuild_visible(state.catalog.stations, state.tab, state.favorites_only, is_favorite)
    cursor = state.cursor if state.cursor < len(visible) else 0
    return retain_visible_matches(replace(state, visible=visible, cursor=cursor))


def tab_position(tab: Tab, genres: Sequence[str]) -> int:
    """Index of the tab in the genre list, -1 for All or an unknown genre."""
    if isinstance(tab, GenreTab) and tab.name in genres:
        return list(genres).index(tab.name)
    return -1


def tab_at(position: int, genres: Sequence[str]) -> Tab:
    if 0 <= position < len(genres):
        return GenreTab(genres[position])
    return ALL_TAB


def next_tab(tab: Tab, genres: Sequence[str]) -> Tab:
    """Advance one tab; past the last genre wraps to All."""
    return tab_at(tab_position(tab, genres) + 1, genres)


def prev_tab(tab: Tab, genres: Sequence[str]) -> Tab:
    """Retreat one tab; before All wraps to the last genre."""
    position = tab_position(tab, genres) - 1
    if position < -1:
        position = len(genres) - 1
    return tab_at(position, genres)


def _switch(state: BrowserState, is_favorite: FavoriteTest, **changes) -> BrowserState:
    return clear_search(apply_filters(replace(state, **changes), is_favorite))


def cycle_tab(state: BrowserState, is_favorite: FavoriteTest, backwards: bool = False) -> BrowserState:
    step = prev_tab if backwards else next_tab
    return _switch(state, is_favorite, tab=step(state.tab, state.catalog.genres))


def toggle_favorites_only(state: BrowserState, is_favorite: FavoriteTest) -> BrowserState:
    return _switch(state, is_favorite, favorites_only=not state.favorites_only)


def reset_filters(state: BrowserState, is_favorite: FavoriteTest) -> BrowserState:
    return _switch(state, is_favorite, tab=ALL_TAB, favorites_only=False)
