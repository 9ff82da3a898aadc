"""Input dispatcher: routes events to mode handlers and collaborators"""

import logging
from dataclasses import replace
from functools import partial
from typing import Any, Callable, Dict

from .errors import PlayerError
from .events import Job, KeyPressed, MediaCommand, NowPlayingLoaded, StationsLoaded, Tick
from .filters import apply_filters, cycle_tab, reset_filters, toggle_favorites_only
from .keys import is_text
from .models import AllTab, LoadStatus, Mode
from .navigation import jump_first, jump_last, move_down, move_up, station_at_cursor
from .search import clear_search, commit_search, next_match, prev_match, set_query
from .state import BrowserState, Catalog

Handler = Callable[[BrowserState], BrowserState]


class Dispatcher:
    """
    Single entry point for every event.

    Each call takes a state snapshot and returns the next one. Collaborators:
    source (fetch_stations, fetch_now_playing), preferences (is_favorite,
    toggle_favorite, favorite_at), player (play, stop, volume_up, volume_down)
    and run_async, which runs a job off the loop and posts the event it returns.
    """

    def __init__(
        self,
        source: Any,
        preferences: Any,
        player: Any,
        run_async: Callable[[Job], None],
        stream_quality: str = "320",
    ):
        self.source = source
        self.preferences = preferences
        self.player = player
        self.run_async = run_async
        self.stream_quality = stream_quality

        self._event_handlers: Dict[type, Callable[[BrowserState, Any], BrowserState]] = {
            KeyPressed: self._on_key,
            Tick: self._on_tick,
            StationsLoaded: self._on_stations_loaded,
            NowPlayingLoaded: self._on_now_playing,
            MediaCommand: self._on_media_command,
        }
        self._mode_handlers: Dict[Mode, Callable[[BrowserState, str], BrowserState]] = {
            Mode.NORMAL: self._handle_normal,
            Mode.SEARCH: self._handle_search,
            Mode.HELP: self._handle_help,
        }
        self._bindings = self._normal_bindings()

    def _normal_bindings(self) -> Dict[str, Handler]:
        bindings: Dict[str, Handler] = {
            "q": self._quit,
            "ctrl+c": self._quit,
            "/": self._start_search,
            "?": self._show_help,
            "esc": clear_search,
            "n": next_match,
            "N": prev_match,
            "up": move_up,
            "k": move_up,
            "down": move_down,
            "j": move_down,
            "g": jump_first,
            "home": jump_first,
            "G": jump_last,
            "end": jump_last,
            "enter": self._play_cursor,
            " ": self._play_cursor,
            "s": self._stop,
            "+": self._volume_up,
            "=": self._volume_up,
            "-": self._volume_down,
            "_": self._volume_down,
            "tab": partial(self._with_favorites, cycle_tab),
            "shift+tab": partial(self._with_favorites, cycle_tab, backwards=True),
            "f": self._toggle_favorite,
            "F": partial(self._with_favorites, toggle_favorites_only),
            "0": partial(self._with_favorites, reset_filters),
        }
        for digit in range(1, 10):
            bindings[str(digit)] = partial(self._quick_select, digit)
        return bindings

    def start(self, state: BrowserState) -> BrowserState:
        """Kick off the catalog fetch."""
        self.run_async(self._load_stations)
        return replace(state, status=LoadStatus.LOADING, error=None)

    def dispatch(self, state: BrowserState, event: Any) -> BrowserState:
        handler = self._event_handlers.get(type(event))
        if handler is None:
            logging.debug(f"Ignoring unknown event {event!r}")
            return state
        return handler(state, event)

    # Key handling per mode

    def _on_key(self, state: BrowserState, event: KeyPressed) -> BrowserState:
        return self._mode_handlers[state.mode](state, event.key)

    def _handle_normal(self, state: BrowserState, key: str) -> BrowserState:
        handler = self._bindings.get(key)
        if handler is None:
            return state
        return handler(state)

    def _handle_search(self, state: BrowserState, key: str) -> BrowserState:
        if key == "enter":
            return replace(commit_search(state), mode=Mode.NORMAL)
        if key == "esc":
            return replace(clear_search(state), mode=Mode.NORMAL)
        if key == "backspace":
            if not state.query:
                return state
            return set_query(state, state.query[:-1])
        if is_text(key):
            return set_query(state, state.query + key)
        return state

    def _handle_help(self, state: BrowserState, key: str) -> BrowserState:
        return replace(state, mode=Mode.NORMAL)

    # Normal mode actions

    def _with_favorites(self, transition: Callable[..., BrowserState], state: BrowserState, **kwargs) -> BrowserState:
        return transition(state, self.preferences.is_favorite, **kwargs)

    def _quit(self, state: BrowserState) -> BrowserState:
        self.player.stop()
        return replace(state, running=False)

    def _start_search(self, state: BrowserState) -> BrowserState:
        return replace(state, mode=Mode.SEARCH, query="")

    def _show_help(self, state: BrowserState) -> BrowserState:
        return replace(state, mode=Mode.HELP)

    def _play_cursor(self, state: BrowserState) -> BrowserState:
        index = station_at_cursor(state)
        if index is None:
            return state
        return self._play(state, index)

    def _play(self, state: BrowserState, index: int) -> BrowserState:
        station = state.catalog.station(index)
        if station is None:
            return state

        url = station.get_stream_url(self.stream_quality)
        if not url:
            logging.warning(f"No stream found for station {station.title}")
            return state

        try:
            self.player.play(url)
        except PlayerError as e:
            logging.error(f"Error playing station: {e}")
            return replace(state, selection=None, now_playing=None)

        logging.info(f"Playing station: {station.title}")
        self._request_now_playing(station.id)
        return replace(state, selection=index, now_playing=None)

    def _stop(self, state: BrowserState) -> BrowserState:
        self.player.stop()
        return replace(state, selection=None, now_playing=None)

    def _volume_up(self, state: BrowserState) -> BrowserState:
        self.player.volume_up()
        return state

    def _volume_down(self, state: BrowserState) -> BrowserState:
        self.player.volume_down()
        return state

    def _toggle_favorite(self, state: BrowserState) -> BrowserState:
        index = station_at_cursor(state)
        if index is None:
            return state

        self.preferences.toggle_favorite(state.catalog.stations[index].id)
        # Membership elsewhere is unaffected; only the pinned All order and
        # the favorites-only list change.
        if state.favorites_only or isinstance(state.tab, AllTab):
            return apply_filters(state, self.preferences.is_favorite)
        return state

    def _quick_select(self, position: int, state: BrowserState) -> BrowserState:
        station_id = self.preferences.favorite_at(position)
        if station_id is None:
            return state
        index = state.catalog.index_of(station_id)
        if index is None:
            return state
        return self._play(state, index)

    # Background results and timers

    def _load_stations(self) -> StationsLoaded:
        try:
            return StationsLoaded(stations=self.source.fetch_stations())
        except Exception as e:
            # Any failure must still reach the loop as the Error status.
            logging.error(f"Error fetching station list: {e}")
            return StationsLoaded(error=str(e))

    def _request_now_playing(self, station_id: int) -> None:
        self.run_async(lambda: NowPlayingLoaded(station_id, self.source.fetch_now_playing(station_id)))

    def _on_stations_loaded(self, state: BrowserState, event: StationsLoaded) -> BrowserState:
        if event.error is not None:
            return replace(state, status=LoadStatus.ERROR, error=event.error)

        state = replace(
            state,
            catalog=Catalog.load(event.stations),
            status=LoadStatus.READY,
            error=None,
            selection=None,
            now_playing=None,
        )
        return clear_search(apply_filters(state, self.preferences.is_favorite))

    def _on_now_playing(self, state: BrowserState, event: NowPlayingLoaded) -> BrowserState:
        station = state.selected_station
        if station is None or station.id != event.station_id:
            logging.debug(f"Discarding stale now playing for station {event.station_id}")
            return state
        return replace(state, now_playing=event.track)

    def _on_tick(self, state: BrowserState, event: Tick) -> BrowserState:
        station = state.selected_station
        if station is not None:
            self._request_now_playing(station.id)
        return state

    def _on_media_command(self, state: BrowserState, event: MediaCommand) -> BrowserState:
        action = event.action
        if action == "quit":
            return self._quit(state)
        if action == "stop":
            return self._stop(state)
        if action == "play_pause":
            if state.selection is not None:
                return self._stop(state)
            return self._play_cursor(state)
        if action == "play":
            if state.selection is None:
                return self._play_cursor(state)
            return state
        if action in ("next", "previous") and state.visible:
            step = 1 if action == "next" else -1
            state = replace(state, cursor=(state.cursor + step) % len(state.visible))
            return self._play_cursor(state)
        return state
