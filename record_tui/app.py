"""Radio Record TUI main module"""

import curses
import logging
import os
import signal
import sys
import threading
import time
from typing import Any, Dict, Optional

from .catalog import CatalogSource
from .config import CONFIG_DIR, load_config, validate_config
from .dispatcher import Dispatcher
from .events import EventQueue, KeyPressed, Tick
from .http_client import close_session
from .keys import key_name
from .mpris_service import MPRISService, run_mpris_loop
from .player import AudioPlayer
from .preferences import PreferenceStore
from .state import BrowserState
from .ui import UIScreen

# Constants
TEMP_DIR = "/tmp/.record_tui"
CACHE_DIR = os.path.join(TEMP_DIR, "cache")
STATIONS_CACHE_FILE = os.path.join(CACHE_DIR, "stations.json")
LOG_FILE = os.path.join(TEMP_DIR, "record_tui.log")
IDLE_TIMEOUT = 0.05  # seconds to wait for background events between key polls


def ensure_directories() -> None:
    """Create required directories"""
    os.makedirs(CONFIG_DIR, exist_ok=True)
    os.makedirs(CACHE_DIR, exist_ok=True)


def setup_logging() -> None:
    """Configure logging"""
    os.makedirs(TEMP_DIR, exist_ok=True)
    logging.basicConfig(
        filename=LOG_FILE,
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


_global_app: Optional["RecordRadioApp"] = None


def _signal_handler(signum, frame):
    """Handle termination signals"""
    signal_name = signal.Signals(signum).name
    logging.info(f"Received {signal_name}, shutting down...")
    if _global_app is not None:
        _global_app._signal_received = True


class RecordRadioApp:
    """Wires collaborators to the dispatcher and runs the curses loop"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.had_error = False
        self._signal_received = False
        ensure_directories()
        setup_logging()
        self._setup_signal_handlers()

        self.config = validate_config(config if config is not None else load_config())
        self.preferences = PreferenceStore(self.config)
        self.player = AudioPlayer(volume=self.preferences.volume)
        self.source = CatalogSource(cache_file=STATIONS_CACHE_FILE)
        self.events = EventQueue()
        self.dispatcher = Dispatcher(
            self.source,
            self.preferences,
            self.player,
            self.events.run_async,
            stream_quality=self.config["stream_quality"],
        )

        self.state = BrowserState()
        self.ui_screen = UIScreen()
        self.stdscr: Optional["curses.window"] = None
        self._init_mpris()

    def _init_mpris(self) -> None:
        """Initialize MPRIS service"""
        self.mpris_service: Optional[MPRISService] = None

        if not self.config.get("dbus_allowed", False):
            logging.info("MPRIS service disabled by configuration")
            return

        try:
            self.mpris_service = MPRISService(
                self.events.post,
                self.player.volume,
                send_metadata=self.config.get("dbus_send_metadata", False),
            )
            threading.Thread(target=run_mpris_loop, args=(self.mpris_service,), daemon=True).start()
            logging.info("MPRIS service thread started")
        except Exception as e:
            logging.error(f"Failed to start MPRIS service: {e}")
            self.mpris_service = None

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown"""
        global _global_app
        _global_app = self

        signal.signal(signal.SIGTERM, _signal_handler)
        signal.signal(signal.SIGINT, _signal_handler)

    def _handle(self, event: Any) -> None:
        previous = self.state
        self.state = self.dispatcher.dispatch(previous, event)
        self._sync_mpris(previous, self.state)

    def _sync_mpris(self, previous: BrowserState, current: BrowserState) -> None:
        if self.mpris_service is None:
            return
        if previous.selection != current.selection:
            self.mpris_service.update_playback_status("Playing" if current.selection is not None else "Stopped")
        if previous.selection != current.selection or previous.now_playing != current.now_playing:
            self.mpris_service.update_metadata(current.selected_station, current.now_playing)

    def _display_interface(self) -> None:
        if self.stdscr is None:
            return
        self.ui_screen.display(
            self.stdscr,
            self.state,
            self.preferences.is_favorite,
            self.preferences.favorites(),
            self.player.volume(),
        )

    def _read_key(self) -> Optional[str]:
        try:
            key = self.stdscr.get_wch()
        except curses.error:
            return None
        return key_name(key)

    def _cleanup(self) -> None:
        """Clean up resources"""
        self.preferences.volume = self.player.volume()
        self.preferences.save()
        self.player.terminate()
        close_session()

    def run(self) -> None:
        """Run main application loop"""

        def main(stdscr: "curses.window") -> None:
            try:
                self.stdscr = stdscr
                self.ui_screen.init_colors()

                stdscr.keypad(True)
                curses.raw()
                curses.curs_set(0)
                stdscr.nodelay(True)

                self.state = self.dispatcher.start(self.state)
                interval = self.config["refresh_interval"]
                next_tick = time.monotonic() + interval
                self._display_interface()

                while self.state.running and not self._signal_received:
                    changed = False

                    key = self._read_key()
                    if key == "resize":
                        changed = True
                    elif key is not None:
                        self._handle(KeyPressed(key))
                        changed = True

                    event = self.events.get(timeout=0 if key else IDLE_TIMEOUT)
                    if event is not None:
                        self._handle(event)
                        changed = True

                    if time.monotonic() >= next_tick:
                        self._handle(Tick())
                        next_tick = time.monotonic() + interval

                    if changed:
                        self._display_interface()

            except Exception as e:
                self.had_error = True
                logging.error(f"Application error: {e}")
                raise
            finally:
                self._cleanup()

        os.environ.setdefault("ESCDELAY", "25")
        try:
            curses.wrapper(main)
        except Exception as e:
            self.had_error = True
            logging.error(f"Fatal error: {e}")
            print(f"An error occurred. Check logs at {LOG_FILE}")
            sys.exit(1)
