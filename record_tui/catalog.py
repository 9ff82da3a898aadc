"""Radio Record catalog module"""

import json
import logging
import os
import time
from typing import Any, Dict, List, Optional

from .http_client import DEFAULT_TIMEOUT, fetch_json
from .models import Station, Track, parse_stations

API_URL = "https://www.radiorecord.ru/api"
CACHE_MAX_AGE = 3600  # 1 hour in seconds


def _stations_from_payload(data: Any) -> List[Station]:
    if not isinstance(data, dict):
        raise ValueError("Unexpected stations payload")
    try:
        result = data.get("result") or {}
        return parse_stations(result.get("stations") or [])
    except (TypeError, AttributeError, KeyError) as e:
        raise ValueError(f"Malformed station entry: {e}") from e


def _read_cache(cache_file: str) -> List[Station]:
    with open(cache_file, "r") as f:
        return _stations_from_payload(json.load(f))


class CatalogSource:
    """Station list and now playing lookups against the Radio Record API"""

    def __init__(
        self,
        base_url: str = API_URL,
        cache_file: Optional[str] = None,
        cache_max_age: int = CACHE_MAX_AGE,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache_file = cache_file
        self.cache_max_age = cache_max_age
        self.timeout = timeout

    def fetch_stations(self) -> List[Station]:
        """
        Fetch stations from the API.
        Uses caching to reduce API load; raises ConnectionError on failure.
        """
        cache_file = self.cache_file

        # Try to use cache first
        if cache_file and os.path.exists(cache_file):
            try:
                cache_age = time.time() - os.path.getmtime(cache_file)
                if cache_age < self.cache_max_age:
                    logging.debug(f"Using cached stations (age: {cache_age:.0f}s)")
                    return _read_cache(cache_file)
            except (ValueError, IOError) as e:
                logging.warning(f"Failed to read cache: {e}")

        url = f"{self.base_url}/stations/"
        data = fetch_json(url, timeout=self.timeout)

        if data is None:
            # Try to use stale cache if network fails
            if cache_file and os.path.exists(cache_file):
                logging.warning("Using stale cache due to network error")
                try:
                    return _read_cache(cache_file)
                except (ValueError, IOError) as e:
                    logging.warning(f"Stale cache unusable: {e}")
            raise ConnectionError(f"Failed to fetch stations from {url}")

        try:
            stations = _stations_from_payload(data)
        except ValueError as e:
            raise ConnectionError(f"Invalid stations response from {url}: {e}") from e

        if cache_file:
            self._write_cache(cache_file, data)

        logging.info(f"Fetched {len(stations)} stations")
        return stations

    def _write_cache(self, cache_file: str, data: Dict[str, Any]) -> None:
        try:
            os.makedirs(os.path.dirname(cache_file), exist_ok=True)
            with open(cache_file, "w") as f:
                json.dump(data, f)
            logging.debug("Stations cached successfully")
        except IOError as e:
            logging.warning(f"Failed to write cache: {e}")

    def fetch_now_playing(self, station_id: int) -> Optional[Track]:
        """Fetch the current track of a station, None when unknown."""
        url = f"{self.base_url}/station/history/"
        data = fetch_json(url, params={"id": station_id}, timeout=self.timeout)
        if not isinstance(data, dict):
            return None

        history = (data.get("result") or {}).get("history") or []
        if not history:
            logging.warning(f"No now playing history for station {station_id}")
            return None

        try:
            return Track.from_api_response(history[0])
        except (ValueError, TypeError, AttributeError) as e:
            logging.warning(f"Bad now playing entry for station {station_id}: {e}")
            return None
