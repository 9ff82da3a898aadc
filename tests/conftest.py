from typing import Callable, Optional, Sequence

import pytest

from record_tui.dispatcher import Dispatcher
from record_tui.errors import PlayerError
from record_tui.events import Job
from record_tui.models import Genre, Station, Track
from record_tui.state import BrowserState


def make_station(
    station_id: int,
    title: str,
    description: str = "",
    genres: Sequence[str] = (),
) -> Station:
    return Station(
        id=station_id,
        title=title,
        description=description,
        prefix=title.lower().replace(" ", ""),
        streams={"320": f"https://radio.example/{station_id}_320", "128": f"https://radio.example/{station_id}_128"},
        genres=tuple(Genre(id=i + 1, name=name) for i, name in enumerate(genres)),
    )


class FakePreferences:
    def __init__(self, favorites: Sequence[int] = ()) -> None:
        self._favorites = list(favorites)
        self.toggled: list[int] = []

    def is_favorite(self, station_id: int) -> bool:
        return station_id in self._favorites

    def favorites(self) -> list[int]:
        return list(self._favorites)

    def favorite_at(self, position: int) -> Optional[int]:
        if 1 <= position <= len(self._favorites):
            return self._favorites[position - 1]
        return None

    def toggle_favorite(self, station_id: int) -> bool:
        self.toggled.append(station_id)
        if station_id in self._favorites:
            self._favorites.remove(station_id)
            return False
        self._favorites.append(station_id)
        return True


class FakePlayer:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.played: list[str] = []
        self.stopped = 0
        self._volume = 80

    def play(self, url: str) -> None:
        if self.fail:
            raise PlayerError("boom")
        self.played.append(url)

    def stop(self) -> None:
        self.stopped += 1

    def volume(self) -> int:
        return self._volume

    def volume_up(self) -> None:
        self._volume = min(100, self._volume + 5)

    def volume_down(self) -> None:
        self._volume = max(0, self._volume - 5)


class FakeSource:
    def __init__(self, stations: Sequence[Station] = (), error: Optional[Exception] = None) -> None:
        self.stations = list(stations)
        self.error = error
        self.now_playing_requests: list[int] = []

    def fetch_stations(self) -> list[Station]:
        if self.error is not None:
            raise self.error
        return self.stations

    def fetch_now_playing(self, station_id: int) -> Optional[Track]:
        self.now_playing_requests.append(station_id)
        return Track(id=station_id, artist="Artist", song=f"Song {station_id}")


class JobCollector:
    """Keeps background jobs so tests decide when (and whether) they complete."""

    def __init__(self) -> None:
        self.jobs: list[Job] = []

    def __call__(self, job: Job) -> None:
        self.jobs.append(job)

    def run_all(self) -> list:
        jobs, self.jobs = self.jobs, []
        return [job() for job in jobs]


@pytest.fixture
def catalog_stations() -> list[Station]:
    return [
        make_station(101, "Record", "Main channel", ["Dance", "Pop"]),
        make_station(102, "Deep House", "Deep and soulful", ["House"]),
        make_station(103, "Techno", "Hard techno", ["Techno"]),
        make_station(104, "Chill-Out", "Relax and chill", ["Lounge"]),
        make_station(105, "Tech House", "Groovy tech", ["House", "Techno"]),
    ]


@pytest.fixture
def station_factory() -> Callable[..., Station]:
    return make_station


@pytest.fixture
def preferences() -> FakePreferences:
    return FakePreferences()


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def jobs() -> JobCollector:
    return JobCollector()


@pytest.fixture
def build_dispatcher(jobs: JobCollector, player: FakePlayer, preferences: FakePreferences):
    def _build(source: Optional[FakeSource] = None, prefs: Optional[FakePreferences] = None) -> Dispatcher:
        return Dispatcher(
            source or FakeSource(),
            prefs or preferences,
            player,
            jobs,
            stream_quality="320",
        )

    return _build


@pytest.fixture
def loaded_state(build_dispatcher, catalog_stations, jobs, preferences) -> BrowserState:
    """Ready state with the fixture catalog loaded and no favorites."""
    dispatcher = build_dispatcher(FakeSource(catalog_stations))
    state = dispatcher.start(BrowserState())
    (event,) = jobs.run_all()
    return dispatcher.dispatch(state, event)
