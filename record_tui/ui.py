"""User interface module"""

import curses
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import quote_plus

from .models import AllTab, LoadStatus, Mode, Station, Track
from .search import match_spans
from .state import BrowserState
from .terminal import fit, safe_addstr, truncate

# Color pair ids
NORMAL = 1
SELECTED = 2
DIM = 3
MATCH = 4
FAVORITE = 5
TAB_ACTIVE = 6
VOLUME = 7
STATUS_BAR = 8

TITLE_WIDTH = 20
NOW_PLAYING_HEIGHT = 6  # box border + track + three links
FIXED_ROWS = 6  # header, tabs, two separators, status bar, footer
MIN_LIST_HEIGHT = 5
TAB_WINDOW = 7

HELP_TEXT = [
    ("Navigation", "Playback"),
    ("j / Down     Move down", "Enter / Space  Play station"),
    ("k / Up       Move up", "s              Stop"),
    ("g / Home     First station", "+ / =          Volume +5"),
    ("G / End      Last station", "- / _          Volume -5"),
    ("", ""),
    ("Search", "Filters"),
    ("/            Start search", "Tab            Next genre"),
    ("Enter        Apply search", "Shift+Tab      Previous genre"),
    ("Esc          Cancel/clear", "f              Toggle favorite"),
    ("n            Next match", "F              Favorites only"),
    ("N            Previous match", "0              Reset filters"),
    ("", ""),
    ("Quick access", "Other"),
    ("1-9          Favorite #1-9", "?              This help"),
    ("", "q / Ctrl+C     Quit"),
]

FOOTER_HINT = "? help | / search | Tab genres | 0 reset | f fav | +/- volume | Enter play"


def get_favorite_icon() -> str:
    return "♥"


def get_music_symbol() -> str:
    return "♪"


def tab_labels(genres: Sequence[str]) -> List[str]:
    """All tab first, then genres in derivation order."""
    return [AllTab.label] + list(genres)


def active_tab_index(state: BrowserState) -> int:
    """Position of the active tab in tab_labels()."""
    if isinstance(state.tab, AllTab) or state.tab.name not in state.catalog.genres:
        return 0
    return state.catalog.genres.index(state.tab.name) + 1


def tab_window(count: int, active: int, size: int = TAB_WINDOW) -> Tuple[int, int]:
    """Range of tabs to show when they do not fit, keeping the active one in view."""
    start = max(0, active - size // 2)
    end = start + size
    if end > count:
        end = count
        start = max(0, end - size)
    return start, end


def list_window(cursor: int, height: int, total: int) -> Tuple[int, int]:
    """Rows of the visible list that fit on screen with the cursor in view."""
    start = cursor - height + 1 if cursor >= height else 0
    return start, min(total, start + height)


def hotkey_for(station_id: int, favorites: Sequence[int]) -> Optional[int]:
    """Quick-select digit of a favorite, if it has one."""
    for position, favorite_id in enumerate(favorites[:9], start=1):
        if favorite_id == station_id:
            return position
    return None


def highlight_segments(text: str, query: str) -> List[Tuple[str, bool]]:
    """Split text into (segment, is_match) pieces for the current query."""
    segments: List[Tuple[str, bool]] = []
    last = 0
    for start, end in match_spans(text, query):
        if start > last:
            segments.append((text[last:start], False))
        segments.append((text[start:end], True))
        last = end
    if last < len(text) or not segments:
        segments.append((text[last:], False))
    return segments


def search_links(track: Track) -> List[Tuple[str, str]]:
    """Music service search links for the current track."""
    query = quote_plus(f"{track.display_artist()} {track.song}")
    return [
        ("YT Music", f"https://music.youtube.com/search?q={query}"),
        ("Yandex", f"https://music.yandex.ru/search?text={query}"),
        ("Spotify", f"https://open.spotify.com/search/{query}"),
    ]


def status_text(state: BrowserState) -> str:
    position = state.cursor + 1 if state.visible else 0
    text = f" {position}/{len(state.visible)} stations"
    if state.matches:
        text += f" | Search: {state.match_index + 1}/{len(state.matches)}"
    return text


class UIScreen:
    """Curses renderer for a BrowserState"""

    def init_colors(self) -> None:
        """Initialize colors"""
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK

        if curses.COLORS >= 256:
            accent, gray, pink = 208, 245, 205
        else:
            accent, gray, pink = curses.COLOR_YELLOW, curses.COLOR_WHITE, curses.COLOR_MAGENTA

        curses.init_pair(NORMAL, curses.COLOR_WHITE, background)
        curses.init_pair(SELECTED, accent, background)
        curses.init_pair(DIM, gray, background)
        curses.init_pair(MATCH, curses.COLOR_YELLOW, background)
        curses.init_pair(FAVORITE, pink, background)
        curses.init_pair(TAB_ACTIVE, curses.COLOR_BLACK, accent)
        curses.init_pair(VOLUME, curses.COLOR_GREEN, background)
        curses.init_pair(STATUS_BAR, curses.COLOR_WHITE, curses.COLOR_BLUE)

    def display(
        self,
        stdscr: "curses.window",
        state: BrowserState,
        is_favorite: Callable[[int], bool],
        favorites: Sequence[int],
        volume: int,
    ) -> None:
        """Display the whole interface"""
        stdscr.erase()
        max_y, max_x = stdscr.getmaxyx()

        if state.status == LoadStatus.LOADING:
            self._display_centered(stdscr, max_y, max_x, "Loading stations...", curses.color_pair(SELECTED) | curses.A_BOLD)
        elif state.status == LoadStatus.ERROR:
            self._display_error(stdscr, max_y, max_x, state.error or "unknown error")
        elif state.mode == Mode.HELP:
            self._display_help(stdscr, max_y, max_x)
        else:
            self._display_browser(stdscr, max_y, max_x, state, is_favorite, favorites, volume)

        stdscr.refresh()

    def _display_centered(self, stdscr: "curses.window", max_y: int, max_x: int, text: str, attr: int) -> None:
        safe_addstr(stdscr, max_y // 2, max(0, (max_x - len(text)) // 2), text, attr)

    def _display_error(self, stdscr: "curses.window", max_y: int, max_x: int, message: str) -> None:
        safe_addstr(stdscr, 0, 0, f"Error: {message}", curses.color_pair(SELECTED) | curses.A_BOLD)
        safe_addstr(stdscr, 2, 0, "Press q to quit", curses.color_pair(DIM))

    def _display_browser(
        self,
        stdscr: "curses.window",
        max_y: int,
        max_x: int,
        state: BrowserState,
        is_favorite: Callable[[int], bool],
        favorites: Sequence[int],
        volume: int,
    ) -> None:
        show_now_playing = state.selected_station is not None and state.now_playing is not None
        list_height = max(MIN_LIST_HEIGHT, max_y - FIXED_ROWS - (NOW_PLAYING_HEIGHT if show_now_playing else 0))

        self._display_header(stdscr, max_x, state, volume)
        self._display_tabs(stdscr, 1, max_x, state)
        safe_addstr(stdscr, 2, 0, "─" * max_x, curses.color_pair(DIM))

        y = self._display_stations(stdscr, 3, max_x, list_height, state, is_favorite, favorites)

        safe_addstr(stdscr, y, 0, "─" * max_x, curses.color_pair(DIM))
        safe_addstr(stdscr, y + 1, 0, fit(status_text(state), max_x), curses.color_pair(STATUS_BAR))
        y += 2

        if show_now_playing:
            y = self._display_now_playing(stdscr, y, max_x, state.now_playing)

        self._display_footer(stdscr, y, max_x, state)

    def _display_header(self, stdscr: "curses.window", max_x: int, state: BrowserState, volume: int) -> None:
        x = safe_addstr(stdscr, 0, 0, "Radio Record", curses.color_pair(SELECTED) | curses.A_BOLD)
        if state.favorites_only:
            safe_addstr(stdscr, 0, x + 1, f"[{get_favorite_icon()} Favorites]", curses.color_pair(FAVORITE))

        volume_text = f"{volume}%"
        safe_addstr(stdscr, 0, max(0, max_x - len(volume_text) - 1), volume_text, curses.color_pair(VOLUME))

    def _display_tabs(self, stdscr: "curses.window", y: int, max_x: int, state: BrowserState) -> None:
        labels = tab_labels(state.catalog.genres)
        active = active_tab_index(state)

        start, end = 0, len(labels)
        if sum(len(label) + 3 for label in labels) > max_x:
            start, end = tab_window(len(labels), active)

        x = 0
        if start > 0:
            x = safe_addstr(stdscr, y, x, "◀ ", curses.color_pair(DIM))
        for i in range(start, end):
            attr = curses.color_pair(TAB_ACTIVE) if i == active else curses.color_pair(DIM)
            x = safe_addstr(stdscr, y, x, f" {labels[i]} ", attr) + 1
        if end < len(labels):
            safe_addstr(stdscr, y, x, "▶", curses.color_pair(DIM))

    def _display_stations(
        self,
        stdscr: "curses.window",
        top: int,
        max_x: int,
        height: int,
        state: BrowserState,
        is_favorite: Callable[[int], bool],
        favorites: Sequence[int],
    ) -> int:
        """Draw the station list; returns the row after it."""
        if not state.visible:
            safe_addstr(stdscr, top, 2, "No stations to show", curses.color_pair(DIM))
            return top + height

        start, end = list_window(state.cursor, height, len(state.visible))
        for row, position in enumerate(range(start, end)):
            station_index = state.visible[position]
            self._display_station_row(
                stdscr,
                top + row,
                max_x,
                state,
                position,
                station_index,
                is_favorite,
                favorites,
            )
        return top + height

    def _display_station_row(
        self,
        stdscr: "curses.window",
        y: int,
        max_x: int,
        state: BrowserState,
        position: int,
        station_index: int,
        is_favorite: Callable[[int], bool],
        favorites: Sequence[int],
    ) -> None:
        station: Station = state.catalog.stations[station_index]
        marker, attr = "  ", curses.color_pair(NORMAL)
        if position == state.cursor:
            marker, attr = "▸ ", curses.color_pair(SELECTED) | curses.A_BOLD
        if station_index == state.selection:
            marker, attr = f"{get_music_symbol()} ", curses.color_pair(SELECTED) | curses.A_BOLD
        matched = state.is_match(station_index)
        if matched and position != state.cursor:
            attr = curses.color_pair(MATCH)

        x = safe_addstr(stdscr, y, 0, marker, attr)
        x = safe_addstr(stdscr, y, x, f"{station_index + 1:3d}. ", curses.color_pair(DIM))

        hotkey = hotkey_for(station.id, favorites)
        if hotkey is not None:
            x = safe_addstr(stdscr, y, x, f"[{hotkey}] ", curses.color_pair(DIM))
        if is_favorite(station.id):
            x = safe_addstr(stdscr, y, x, f"{get_favorite_icon()} ", curses.color_pair(FAVORITE))

        query = state.query if matched else ""
        x = self._display_highlighted(stdscr, y, x, fit(station.title, TITLE_WIDTH), query, attr)
        description = truncate(station.description, max(10, max_x - TITLE_WIDTH - 20))
        self._display_highlighted(stdscr, y, x + 1, description, query, curses.color_pair(DIM))

    def _display_highlighted(self, stdscr: "curses.window", y: int, x: int, text: str, query: str, attr: int) -> int:
        for segment, is_match in highlight_segments(text, query):
            x = safe_addstr(stdscr, y, x, segment, curses.color_pair(MATCH) | curses.A_BOLD if is_match else attr)
        return x

    def _display_now_playing(self, stdscr: "curses.window", y: int, max_x: int, track: Track) -> int:
        width = max(10, max_x - 2)
        inner = width - 4
        lines = [(truncate(f"▶ {track.display_artist()} — {track.song}", inner), curses.color_pair(SELECTED) | curses.A_BOLD)]
        for name, url in search_links(track):
            lines.append((truncate(f"{name + ':':<9} {url}", inner), curses.color_pair(DIM)))

        border = curses.color_pair(SELECTED)
        safe_addstr(stdscr, y, 0, "╭" + "─" * (width - 2) + "╮", border)
        for i, (text, attr) in enumerate(lines, start=1):
            safe_addstr(stdscr, y + i, 0, "│ ", border)
            safe_addstr(stdscr, y + i, 2, fit(text, inner), attr)
            safe_addstr(stdscr, y + i, width - 2, " │", border)
        safe_addstr(stdscr, y + len(lines) + 1, 0, "╰" + "─" * (width - 2) + "╯", border)
        return y + NOW_PLAYING_HEIGHT

    def _display_footer(self, stdscr: "curses.window", y: int, max_x: int, state: BrowserState) -> None:
        if state.mode == Mode.SEARCH:
            safe_addstr(stdscr, y, 0, fit(f"/{state.query}▌", max_x), curses.color_pair(STATUS_BAR))
            return

        padding = max(0, (max_x - len(FOOTER_HINT)) // 2)
        safe_addstr(stdscr, y, padding, FOOTER_HINT, curses.color_pair(DIM))

    def _display_help(self, stdscr: "curses.window", max_y: int, max_x: int) -> None:
        """Display help screen"""
        column = 34
        box_width = min(max_x, column * 2 + 6)
        box_height = len(HELP_TEXT) + 6
        top = max(0, (max_y - box_height) // 2)
        left = max(0, (max_x - box_width) // 2)
        border = curses.color_pair(SELECTED) | curses.A_BOLD

        safe_addstr(stdscr, top, left, "Radio Record - Keyboard Shortcuts", border)
        safe_addstr(stdscr, top + 1, left, "╭" + "─" * (box_width - 2) + "╮", border)
        for i, (left_text, right_text) in enumerate(HELP_TEXT):
            y = top + 2 + i
            is_section = left_text and not left_text[0].isspace() and "  " not in left_text
            attr = curses.color_pair(SELECTED) | curses.A_BOLD if is_section else curses.color_pair(NORMAL)
            safe_addstr(stdscr, y, left, "│", border)
            safe_addstr(stdscr, y, left + 2, fit(left_text, column) + fit(right_text, box_width - column - 4), attr)
            safe_addstr(stdscr, y, left + box_width - 1, "│", border)
        bottom = top + 2 + len(HELP_TEXT)
        safe_addstr(stdscr, bottom, left, "╰" + "─" * (box_width - 2) + "╯", border)
        safe_addstr(stdscr, bottom + 2, left, "Press any key to close", curses.color_pair(DIM))
