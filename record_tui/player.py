"""Audio playback module backed by libmpv"""

import locale
import logging
import threading
from typing import Optional

# Set locale to C for MPV compatibility
locale.setlocale(locale.LC_NUMERIC, "C")

import mpv

from .errors import PlayerError

VOLUME_STEP = 5


def clamp_volume(volume: int) -> int:
    return max(0, min(100, int(volume)))


class AudioPlayer:
    """Single mpv instance, serialized by a lock"""

    def __init__(self, volume: int = 80):
        self._lock = threading.Lock()
        self._mpv: Optional[mpv.MPV] = None
        self._volume = clamp_volume(volume)
        self._stream_url: Optional[str] = None

    def _ensure_mpv(self) -> mpv.MPV:
        if self._mpv is None:
            self._mpv = mpv.MPV(video=False, ytdl=False, input_default_bindings=False)
        return self._mpv

    def play(self, url: str) -> None:
        """Start playing a stream, replacing the current one."""
        with self._lock:
            try:
                player = self._ensure_mpv()
                player.volume = self._volume
                player.play(url)
                player.pause = False
            except (mpv.ShutdownError, OSError, RuntimeError, ValueError) as e:
                self._stream_url = None
                raise PlayerError(f"Cannot play {url}: {e}") from e

            self._stream_url = url
            logging.info(f"Playing stream: {url}")

    def stop(self) -> None:
        with self._lock:
            if self._mpv is not None and self._stream_url is not None:
                try:
                    self._mpv.stop()
                except (mpv.ShutdownError, RuntimeError, ValueError) as e:
                    logging.warning(f"Error stopping playback: {e}")
            self._stream_url = None

    def set_volume(self, volume: int) -> None:
        """Set volume (0-100); out-of-range values are clamped."""
        with self._lock:
            self._volume = clamp_volume(volume)
            if self._mpv is not None:
                try:
                    self._mpv.volume = self._volume
                except (mpv.ShutdownError, RuntimeError, ValueError) as e:
                    logging.warning(f"Error setting volume: {e}")

    def volume(self) -> int:
        with self._lock:
            return self._volume

    def volume_up(self, step: int = VOLUME_STEP) -> None:
        self.set_volume(self.volume() + step)

    def volume_down(self, step: int = VOLUME_STEP) -> None:
        self.set_volume(self.volume() - step)

    def terminate(self) -> None:
        """Shut down mpv."""
        with self._lock:
            if self._mpv is not None:
                self._mpv.terminate()
                self._mpv = None
            self._stream_url = None
