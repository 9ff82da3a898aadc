"""Application configuration module"""

import configparser
import logging
import os
from typing import Any, Dict

from .models import STREAM_QUALITIES

HOME = os.path.expanduser("~")
CONFIG_DIR = os.path.join(HOME, ".record_tui")
CONFIG_FILE = os.path.join(CONFIG_DIR, "record_tui.cfg")
FAVORITES_FILE = os.path.join(CONFIG_DIR, "favorites.json")
SECTION = "record_tui"

# Default configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    "volume": 80,
    "stream_quality": "320",
    "refresh_interval": 5,
    "dbus_allowed": False,
    "dbus_send_metadata": False,
}

# Type mapping for config values
CONFIG_TYPES = {
    "volume": int,
    "stream_quality": str,
    "refresh_interval": int,
    "dbus_allowed": bool,
    "dbus_send_metadata": bool,
}

# Comments for each config option
CONFIG_COMMENTS = {
    "volume": "Volume restored on start, saved on exit (0-100)",
    "stream_quality": "Preferred stream quality (64, 128, 320, hls)",
    "refresh_interval": "Seconds between now playing updates",
    "dbus_allowed": "Enable MPRIS/D-Bus support for media keys (true/false)",
    "dbus_send_metadata": "Send now playing metadata over D-Bus (true/false)",
}


def get_default_config() -> Dict[str, Any]:
    """Returns a copy of the default configuration."""
    return DEFAULT_CONFIG.copy()


def _parse_bool(raw_value: str) -> bool:
    return raw_value.lower() in ("true", "1", "yes", "on")


def load_config(config_file: str = CONFIG_FILE) -> Dict[str, Any]:
    """Load configuration from file using configparser."""
    # If config file doesn't exist, create with defaults
    if not os.path.exists(config_file):
        save_config(DEFAULT_CONFIG, config_file)
        return get_default_config()

    config = get_default_config()

    try:
        parser = configparser.ConfigParser()
        parser.read(config_file)
    except configparser.Error as e:
        logging.warning(f"Failed to parse {config_file}, using defaults: {e}")
        return config

    if parser.has_section(SECTION):
        for key in CONFIG_TYPES:
            if parser.has_option(SECTION, key):
                raw_value = parser.get(SECTION, key)
                try:
                    if CONFIG_TYPES[key] == bool:
                        config[key] = _parse_bool(raw_value)
                    else:
                        config[key] = CONFIG_TYPES[key](raw_value)
                except (ValueError, TypeError):
                    logging.warning(f"Invalid value for {key}: {raw_value!r}")

    return config


def save_config(config: Dict[str, Any], config_file: str = CONFIG_FILE) -> None:
    """Save configuration to file using configparser."""
    os.makedirs(os.path.dirname(config_file), exist_ok=True)

    parser = configparser.ConfigParser()
    parser.add_section(SECTION)

    for key, value in config.items():
        if isinstance(value, bool):
            value = str(value).lower()
        parser.set(SECTION, key, str(value))

    with open(config_file, "w") as f:
        f.write("# Configuration file for Radio Record TUI\n")
        f.write("#\n")
        for key, comment in CONFIG_COMMENTS.items():
            f.write(f"# {key}: {comment}\n")
        f.write("#\n")
        parser.write(f)


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate configuration values."""
    validated = get_default_config()

    for key, default_value in DEFAULT_CONFIG.items():
        if key in config:
            value = config[key]
            expected_type = CONFIG_TYPES.get(key, type(default_value))

            try:
                if expected_type == bool and isinstance(value, str):
                    value = _parse_bool(value)

                validated[key] = expected_type(value)
            except (ValueError, TypeError):
                validated[key] = default_value

    validated["volume"] = max(0, min(100, validated["volume"]))
    validated["refresh_interval"] = max(1, validated["refresh_interval"])
    if validated["stream_quality"] not in STREAM_QUALITIES:
        validated["stream_quality"] = DEFAULT_CONFIG["stream_quality"]

    return validated
