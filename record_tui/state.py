"""Browser state module - immutable snapshots updated with dataclasses.replace"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .models import ALL_TAB, LoadStatus, Mode, Station, Tab, Track


def derive_genres(stations: Iterable[Station]) -> Tuple[str, ...]:
    """Distinct genre names in first-seen order."""
    seen = set()
    genres: List[str] = []
    for station in stations:
        for genre in station.genres:
            if genre.name not in seen:
                seen.add(genre.name)
                genres.append(genre.name)
    return tuple(genres)


@dataclass(frozen=True)
class Catalog:
    """Last fetched station list and the genre tabs derived from it"""
    stations: Tuple[Station, ...] = ()
    genres: Tuple[str, ...] = ()

    @classmethod
    def load(cls, stations: Iterable[Station]) -> "Catalog":
        stations = tuple(stations)
        return cls(stations=stations, genres=derive_genres(stations))

    def __len__(self) -> int:
        return len(self.stations)

    def station(self, index: int) -> Optional[Station]:
        if 0 <= index < len(self.stations):
            return self.stations[index]
        return None

    def index_of(self, station_id: int) -> Optional[int]:
        """Catalog position of a station id."""
        for i, station in enumerate(self.stations):
            if station.id == station_id:
                return i
        return None


@dataclass(frozen=True)
class BrowserState:
    """Everything the input dispatcher and the renderer need"""
    catalog: Catalog = field(default_factory=Catalog)
    tab: Tab = ALL_TAB
    favorites_only: bool = False
    visible: Tuple[int, ...] = ()
    cursor: int = 0
    query: str = ""
    matches: Tuple[int, ...] = ()
    match_index: int = 0
    mode: Mode = Mode.NORMAL
    selection: Optional[int] = None
    now_playing: Optional[Track] = None
    status: LoadStatus = LoadStatus.LOADING
    error: Optional[str] = None
    running: bool = True

    @property
    def selected_station(self) -> Optional[Station]:
        if self.selection is None:
            return None
        return self.catalog.station(self.selection)

    def is_match(self, station_index: int) -> bool:
        return station_index in self.matches
