"""Events delivered to the single-threaded browser loop"""

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from .models import Station, Track


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Tick:
    """Periodic now playing refresh"""


@dataclass(frozen=True)
class StationsLoaded:
    stations: List[Station] = field(default_factory=list)
    error: Optional[str] = None


@dataclass(frozen=True)
class NowPlayingLoaded:
    """Completion of a now playing fetch, tagged with the station it was issued for"""
    station_id: int
    track: Optional[Track] = None


@dataclass(frozen=True)
class MediaCommand:
    """Remote control request (MPRIS): play_pause, play, stop, next, previous, quit"""
    action: str


Event = Union[KeyPressed, Tick, StationsLoaded, NowPlayingLoaded, MediaCommand]
Job = Callable[[], Event]


class EventQueue:
    """Thread-safe inbox; background jobs post their result event here"""

    def __init__(self):
        self._queue: "queue.Queue[Event]" = queue.Queue()

    def post(self, event: Event) -> None:
        self._queue.put(event)

    def run_async(self, job: Job) -> None:
        """Run job on a daemon thread and post the event it returns."""
        def worker() -> None:
            try:
                event = job()
            except Exception as e:
                logging.error(f"Background job failed: {e}")
                return
            self.post(event)

        threading.Thread(target=worker, daemon=True).start()

    def get(self, timeout: Optional[float] = None) -> Optional[Event]:
        """Next event, or None if nothing arrived within timeout."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
