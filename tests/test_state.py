from record_tui.models import Genre, Station
from record_tui.state import BrowserState, Catalog, derive_genres


def test_genre_tabs_keep_first_seen_order(station_factory) -> None:
    stations = [
        station_factory(1, "A", genres=["Techno"]),
        station_factory(2, "B", genres=["House"]),
        station_factory(3, "C", genres=["Techno"]),
    ]

    assert derive_genres(stations) == ("Techno", "House")


def test_genres_with_same_name_collapse_regardless_of_id() -> None:
    stations = [
        Station(id=1, title="A", genres=(Genre(id=5, name="Trance"),)),
        Station(id=2, title="B", genres=(Genre(id=9, name="Trance"), Genre(id=2, name="Dance"))),
    ]

    assert derive_genres(stations) == ("Trance", "Dance")


def test_empty_catalog_has_no_tabs() -> None:
    catalog = Catalog.load([])

    assert catalog.genres == ()
    assert len(catalog) == 0
    assert catalog.station(0) is None


def test_catalog_lookups(catalog_stations) -> None:
    catalog = Catalog.load(catalog_stations)

    assert catalog.station(2).title == "Techno"
    assert catalog.index_of(105) == 4
    assert catalog.index_of(999) is None


def test_selected_station_follows_selection(catalog_stations) -> None:
    state = BrowserState(catalog=Catalog.load(catalog_stations), selection=1)

    assert state.selected_station.id == 102
    assert BrowserState().selected_station is None
