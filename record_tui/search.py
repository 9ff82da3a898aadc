"""Incremental station search module"""

from dataclasses import replace
from typing import List, Sequence, Tuple

from .models import Station
from .state import BrowserState

Span = Tuple[int, int]


def _fold(text: str) -> Tuple[str, List[int]]:
    """
    Lowercase text one character at a time, remembering which original
    character each folded one came from. Queries go through the same fold,
    so context-sensitive rules like the final sigma never apply.
    """
    folded: List[str] = []
    origin: List[int] = []
    for i, char in enumerate(text):
        lowered = char.lower()
        folded.append(lowered)
        origin.extend([i] * len(lowered))
    return "".join(folded), origin


def contains(text: str, query: str) -> bool:
    """Case-insensitive substring test."""
    return _fold(query)[0] in _fold(text)[0]


def station_matches(station: Station, query: str) -> bool:
    return contains(station.title, query) or contains(station.description, query)


def find_matches(stations: Sequence[Station], visible: Sequence[int], query: str) -> Tuple[int, ...]:
    """Visible station indices matching the query, in visible order."""
    if not query:
        return ()
    return tuple(i for i in visible if station_matches(stations[i], query))


def match_spans(text: str, query: str) -> List[Span]:
    """
    Character offsets (start, end) of every case-insensitive occurrence of
    query in text, leftmost first and non-overlapping.
    """
    if not query:
        return []

    needle = _fold(query)[0]
    folded, origin = _fold(text)
    spans: List[Span] = []
    position = 0
    while True:
        start = folded.find(needle, position)
        if start == -1:
            break
        end = start + len(needle)
        spans.append((origin[start], origin[end - 1] + 1))
        position = end
    return spans


def _focus_match(state: BrowserState, match_index: int) -> BrowserState:
    station_index = state.matches[match_index]
    cursor = state.visible.index(station_index)
    return replace(state, match_index=match_index, cursor=cursor)


def set_query(state: BrowserState, query: str) -> BrowserState:
    """Recompute matches for a query and jump to the first one."""
    matches = find_matches(state.catalog.stations, state.visible, query)
    state = replace(state, query=query, matches=matches, match_index=0)
    if matches:
        state = _focus_match(state, 0)
    return state


def retain_visible_matches(state: BrowserState) -> BrowserState:
    """Drop matches that left the visible list and keep the pointer in range."""
    matches = tuple(i for i in state.matches if i in state.visible)
    if matches == state.matches:
        return state
    match_index = min(state.match_index, len(matches) - 1) if matches else 0
    return replace(state, matches=matches, match_index=match_index)


def next_match(state: BrowserState) -> BrowserState:
    if not state.matches:
        return state
    return _focus_match(state, (state.match_index + 1) % len(state.matches))


def prev_match(state: BrowserState) -> BrowserState:
    if not state.matches:
        return state
    return _focus_match(state, (state.match_index - 1) % len(state.matches))


def clear_search(state: BrowserState) -> BrowserState:
    """Drop the query and all matches."""
    return replace(state, query="", matches=(), match_index=0)


def commit_search(state: BrowserState) -> BrowserState:
    """End highlighting but keep cursor and matches for n/N."""
    return replace(state, query="")
