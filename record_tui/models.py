"""Data types module"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

# Stream qualities in order of preference when the configured one is missing
STREAM_QUALITIES = ("320", "128", "64", "hls")


@dataclass(frozen=True)
class Genre:
    """Station genre tag"""
    id: int
    name: str

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Genre":
        """Create genre from API response."""
        return cls(id=int(data.get("id", 0)), name=data.get("name", ""))


@dataclass(frozen=True)
class Station:
    """Radio Record station"""
    id: int
    title: str
    description: str = ""
    prefix: str = ""
    streams: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)
    genres: Tuple[Genre, ...] = ()

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Station":
        """Create station from API response."""
        streams = {}
        for quality in STREAM_QUALITIES:
            url = data.get(f"stream_{quality}")
            if url:
                streams[quality] = url

        return cls(
            id=int(data.get("id", 0)),
            title=data.get("title", "Unknown"),
            description=data.get("tooltip") or "",
            prefix=data.get("prefix", ""),
            streams=streams,
            genres=tuple(Genre.from_api_response(g) for g in data.get("genre") or []),
        )

    def has_genre(self, name: str) -> bool:
        """Check genre membership by name."""
        return any(genre.name == name for genre in self.genres)

    def get_stream_url(self, quality: str = "320") -> Optional[str]:
        """Get stream URL, falling back to other qualities."""
        if quality in self.streams:
            return self.streams[quality]

        for fallback in STREAM_QUALITIES:
            if fallback in self.streams:
                return self.streams[fallback]

        return None


@dataclass(frozen=True)
class Track:
    """Now playing track"""
    id: int = 0
    artist: str = ""
    song: str = ""
    image100: str = ""
    image200: str = ""
    time_formatted: str = ""

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Track":
        """Create track from history API response."""
        return cls(
            id=int(data.get("id", 0)),
            artist=data.get("artist") or "",
            song=data.get("song") or "",
            image100=data.get("image100") or "",
            image200=data.get("image200") or "",
            time_formatted=data.get("time_formatted") or "",
        )

    def display_artist(self) -> str:
        return self.artist or "Radio Record"


@dataclass(frozen=True)
class AllTab:
    """Synthetic tab showing every station"""
    label = "All"


@dataclass(frozen=True)
class GenreTab:
    """Tab filtering stations by genre name"""
    name: str

    @property
    def label(self) -> str:
        return self.name


Tab = Union[AllTab, GenreTab]

ALL_TAB = AllTab()


class Mode(Enum):
    """Input mode of the browser"""
    NORMAL = "normal"
    SEARCH = "search"
    HELP = "help"


class LoadStatus(Enum):
    """Catalog load status"""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def parse_stations(items: List[Dict[str, Any]]) -> List[Station]:
    """Parse a list of API station objects."""
    return [Station.from_api_response(item) for item in items]
