from dataclasses import replace

from record_tui.filters import apply_filters
from record_tui.models import GenreTab
from record_tui.search import (
    clear_search,
    commit_search,
    find_matches,
    match_spans,
    next_match,
    prev_match,
    retain_visible_matches,
    set_query,
    station_matches,
)
from record_tui.state import BrowserState, Catalog


def _state(stations, tab=None, favorites=()) -> BrowserState:
    state = BrowserState(catalog=Catalog.load(stations))
    if tab is not None:
        state = replace(state, tab=tab)
    return apply_filters(state, lambda station_id: station_id in favorites)


def test_query_matches_title_or_description_case_insensitively(catalog_stations) -> None:
    state = set_query(_state(catalog_stations), "TECH")

    assert state.matches == (2, 4)


def test_description_only_match(catalog_stations) -> None:
    state = set_query(_state(catalog_stations), "soulful")

    assert state.matches == (1,)


def test_search_is_scoped_to_visible_stations(catalog_stations) -> None:
    state = _state(catalog_stations, tab=GenreTab("House"))

    state = set_query(state, "Chill-Out")

    assert state.matches == ()


def test_first_match_moves_cursor_to_its_visible_position(catalog_stations) -> None:
    # Favorites pinned: 104 then 105 lead the All tab
    state = _state(catalog_stations, favorites=(104, 105))
    assert state.visible == (3, 4, 0, 1, 2)

    state = set_query(state, "techno")

    assert state.matches == (2,)
    assert state.cursor == 4
    assert state.match_index == 0


def test_matches_follow_visible_order(catalog_stations) -> None:
    state = _state(catalog_stations, favorites=(105,))

    assert find_matches(state.catalog.stations, state.visible, "house") == (4, 1)


def test_empty_query_has_no_matches(catalog_stations) -> None:
    state = set_query(_state(catalog_stations), "")

    assert state.matches == ()
    assert state.cursor == 0


def test_next_match_wraps_around(catalog_stations) -> None:
    state = set_query(_state(catalog_stations), "e")
    assert len(state.matches) == 5

    state = set_query(_state(catalog_stations), "ou")
    assert state.matches == (1, 3, 4)

    for _ in range(3):
        state = next_match(state)

    assert state.match_index == 0
    assert state.cursor == 1


def test_prev_match_wraps_to_last(catalog_stations) -> None:
    state = set_query(_state(catalog_stations), "ou")

    state = prev_match(state)

    assert state.match_index == 2
    assert state.cursor == 4


def test_match_cycling_is_noop_without_matches(catalog_stations) -> None:
    state = replace(_state(catalog_stations), cursor=3)

    assert next_match(state) == state
    assert prev_match(state) == state


def test_commit_keeps_cursor_and_matches(catalog_stations) -> None:
    state = next_match(set_query(_state(catalog_stations), "ou"))

    committed = commit_search(state)

    assert committed.query == ""
    assert committed.matches == state.matches
    assert committed.cursor == state.cursor
    assert next_match(committed).cursor == 4


def test_clear_search_resets_everything(catalog_stations) -> None:
    state = next_match(set_query(_state(catalog_stations), "ou"))

    state = clear_search(state)

    assert (state.query, state.matches, state.match_index) == ("", (), 0)


def test_match_spans_are_leftmost_and_non_overlapping() -> None:
    assert match_spans("aaaa", "aa") == [(0, 2), (2, 4)]
    assert match_spans("aaa", "aa") == [(0, 2)]


def test_match_spans_ignore_case() -> None:
    assert match_spans("Deep HOUSE deep", "deep") == [(0, 4), (11, 15)]


def test_match_spans_count_characters_not_bytes() -> None:
    text = "Рекорд Супердискотека 90-х"

    assert match_spans(text, "ДИСКО") == [(12, 17)]
    assert text[12:17] == "диско"


def test_match_spans_empty_query_or_no_hit() -> None:
    assert match_spans("Record", "") == []
    assert match_spans("Record", "xyz") == []


def test_match_spans_map_back_when_lowercase_is_longer() -> None:
    # "İ" lowercases to two characters
    text = "İstanbul Beat"

    assert match_spans(text, "beat") == [(9, 13)]


def test_text_always_matches_itself(station_factory) -> None:
    # Whole-string lowercasing would turn the trailing sigma into "ς"
    station = station_factory(1, "ΟΔΟΣ")

    assert station_matches(station, "ΟΔΟΣ")
    assert station_matches(station, "οδοσ")
    assert match_spans("ΟΔΟΣ FM", "ΟΔΟΣ") == [(0, 4)]
    assert match_spans("İstanbul Beat", "İstanbul") == [(0, 8)]


def test_retain_visible_matches_clamps_pointer(catalog_stations) -> None:
    state = replace(_state(catalog_stations), matches=(1, 3, 4), match_index=2)

    state = retain_visible_matches(replace(state, visible=(0, 1, 3)))

    assert state.matches == (1, 3)
    assert state.match_index == 1

    state = retain_visible_matches(replace(state, visible=(0,)))

    assert (state.matches, state.match_index) == ((), 0)
