"""Favorites and volume persistence module"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from .config import CONFIG_FILE, FAVORITES_FILE, save_config


def load_favorites(favorites_file: str) -> List[int]:
    """Load ordered favorite station ids."""
    if not os.path.exists(favorites_file):
        return []

    try:
        with open(favorites_file, "r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logging.warning(f"Failed to read favorites: {e}")
        return []

    favorites: List[int] = []
    for item in data if isinstance(data, list) else []:
        try:
            station_id = int(item)
        except (ValueError, TypeError):
            continue
        if station_id not in favorites:
            favorites.append(station_id)
    return favorites


def save_favorites(favorites_file: str, favorites: List[int]) -> None:
    """Save ordered favorite station ids."""
    try:
        os.makedirs(os.path.dirname(favorites_file), exist_ok=True)
        with open(favorites_file, "w") as f:
            json.dump(favorites, f)
    except IOError as e:
        logging.error(f"Error saving favorites: {e}")


class PreferenceStore:
    """Favorites list and volume, backed by the config directory"""

    def __init__(
        self,
        config: Dict[str, Any],
        favorites_file: str = FAVORITES_FILE,
        config_file: str = CONFIG_FILE,
    ):
        self.config = config
        self.favorites_file = favorites_file
        self.config_file = config_file
        self._favorites = load_favorites(favorites_file)

    def is_favorite(self, station_id: int) -> bool:
        return station_id in self._favorites

    def favorites(self) -> List[int]:
        """Favorite ids in the order they were added."""
        return list(self._favorites)

    def favorite_at(self, position: int) -> Optional[int]:
        """Favorite id by 1-based position, None when out of range."""
        if 1 <= position <= len(self._favorites):
            return self._favorites[position - 1]
        return None

    def toggle_favorite(self, station_id: int) -> bool:
        """Add or remove a favorite and persist immediately.

        Returns True when the station is now a favorite.
        """
        if station_id in self._favorites:
            self._favorites.remove(station_id)
            added = False
        else:
            self._favorites.append(station_id)
            added = True

        save_favorites(self.favorites_file, self._favorites)
        logging.info(f"Station {station_id} {'added to' if added else 'removed from'} favorites")
        return added

    @property
    def volume(self) -> int:
        return self.config.get("volume", 80)

    @volume.setter
    def volume(self, value: int) -> None:
        self.config["volume"] = max(0, min(100, int(value)))

    def save(self) -> None:
        """Persist the configuration (volume included)."""
        try:
            save_config(self.config, self.config_file)
        except IOError as e:
            logging.error(f"Error saving config: {e}")
