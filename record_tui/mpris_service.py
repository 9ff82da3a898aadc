#!/usr/bin/env python3
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from dbus_next.aio.message_bus import MessageBus
from dbus_next.constants import BusType, PropertyAccess
from dbus_next.service import ServiceInterface, dbus_property, method
from dbus_next.signature import Variant

from .events import MediaCommand
from .models import Station, Track

DBUS_NAME = 'org.mpris.MediaPlayer2.record_tui'
DBUS_TITLE = 'Radio Record TUI'
OBJECT_PATH = '/org/mpris/MediaPlayer2'

Post = Callable[[MediaCommand], None]


def build_metadata(station: Optional[Station], track: Optional[Track]) -> Dict[str, Variant]:
    """MPRIS metadata for the playing station and its current track."""
    metadata: Dict[str, Variant] = {}
    if station is None:
        return metadata

    metadata['mpris:trackid'] = Variant('o', f"/org/record_tui/station/{station.id}")
    metadata['xesam:album'] = Variant('s', station.title)
    if station.description:
        metadata['xesam:comment'] = Variant('as', [station.description])

    if track is not None:
        metadata['xesam:artist'] = Variant('as', [track.display_artist()])
        if track.song:
            metadata['xesam:title'] = Variant('s', track.song)
        if track.image200:
            metadata['mpris:artUrl'] = Variant('s', track.image200)
    else:
        metadata['xesam:title'] = Variant('s', station.title)

    return metadata


class MediaPlayer2Interface(ServiceInterface):
    def __init__(self, post: Post):
        super().__init__('org.mpris.MediaPlayer2')
        self.post = post

    @method()
    def Raise(self):
        pass

    @method()
    def Quit(self):
        self.post(MediaCommand('quit'))

    @dbus_property(access=PropertyAccess.READ)
    def CanQuit(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanRaise(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def HasTrackList(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def Identity(self) -> 's':
        return DBUS_TITLE

    @dbus_property(access=PropertyAccess.READ)
    def SupportedUriSchemes(self) -> 'as':
        return ['http', 'https']

    @dbus_property(access=PropertyAccess.READ)
    def SupportedMimeTypes(self) -> 'as':
        return ['audio/mpeg', 'audio/aac']


class MediaPlayer2PlayerInterface(ServiceInterface):
    """org.mpris.MediaPlayer2.Player; every control request becomes a MediaCommand"""

    def __init__(self, post: Post, volume: Callable[[], int]):
        super().__init__('org.mpris.MediaPlayer2.Player')
        self.post = post
        self.volume = volume
        self._playback_status = "Stopped"
        self._metadata: Dict[str, Variant] = {}

    @method()
    def Next(self):
        self.post(MediaCommand('next'))

    @method()
    def Previous(self):
        self.post(MediaCommand('previous'))

    @method()
    def Pause(self):
        # Live streams cannot pause; pausing stops.
        self.post(MediaCommand('stop'))

    @method()
    def PlayPause(self):
        self.post(MediaCommand('play_pause'))

    @method()
    def Stop(self):
        self.post(MediaCommand('stop'))

    @method()
    def Play(self):
        self.post(MediaCommand('play'))

    @dbus_property(access=PropertyAccess.READ)
    def PlaybackStatus(self) -> 's':
        return self._playback_status

    @dbus_property(access=PropertyAccess.READ)
    def Metadata(self) -> 'a{sv}':
        return self._metadata

    @dbus_property(access=PropertyAccess.READ)
    def Volume(self) -> 'd':
        return self.volume() / 100.0

    @dbus_property(access=PropertyAccess.READ)
    def Position(self) -> 'x':
        return 0

    @dbus_property(access=PropertyAccess.READ)
    def CanGoNext(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanGoPrevious(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanPlay(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanPause(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanSeek(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def CanControl(self) -> 'b':
        return True

    def update_playback_status(self, status: str) -> None:
        if self._playback_status != status:
            self._playback_status = status
            self._emit_properties_changed({'PlaybackStatus': status})

    def update_metadata(self, metadata: Dict[str, Variant]) -> None:
        self._metadata = metadata
        self._emit_properties_changed({'Metadata': metadata})

    def _emit_properties_changed(self, changed_properties: Dict[str, Any]) -> None:
        try:
            self.emit_properties_changed(changed_properties, [])
        except Exception as e:
            logging.error(f"Failed to emit properties changed signal: {e}")


class MPRISService:
    """Session bus service; updates are marshalled onto its own asyncio loop"""

    def __init__(self, post: Post, volume: Callable[[], int], send_metadata: bool = False):
        self.post = post
        self.volume = volume
        self.send_metadata = send_metadata
        self.bus: Optional[MessageBus] = None
        self.loop: Optional[asyncio.AbstractEventLoop] = None
        self.root_interface: Optional[MediaPlayer2Interface] = None
        self.player_interface: Optional[MediaPlayer2PlayerInterface] = None

    async def start(self) -> bool:
        try:
            self.bus = await MessageBus(bus_type=BusType.SESSION).connect()
            self.root_interface = MediaPlayer2Interface(self.post)
            self.player_interface = MediaPlayer2PlayerInterface(self.post, self.volume)
            self.bus.export(OBJECT_PATH, self.root_interface)
            self.bus.export(OBJECT_PATH, self.player_interface)
            await self.bus.request_name(DBUS_NAME)
            logging.info("MPRIS service started")
            return True
        except Exception as e:
            logging.error(f"Failed to start MPRIS service: {e}")
            return False

    async def stop(self) -> None:
        if self.bus:
            try:
                await self.bus.release_name(DBUS_NAME)
                self.bus.disconnect()
            except Exception as e:
                logging.error(f"Error stopping MPRIS service: {e}")

    def _call_soon(self, callback: Callable[..., None], *args: Any) -> None:
        if self.loop is not None and self.player_interface is not None:
            self.loop.call_soon_threadsafe(callback, *args)

    def update_playback_status(self, status: str) -> None:
        if self.player_interface:
            self._call_soon(self.player_interface.update_playback_status, status)

    def update_metadata(self, station: Optional[Station], track: Optional[Track]) -> None:
        if self.player_interface and self.send_metadata:
            self._call_soon(self.player_interface.update_metadata, build_metadata(station, track))


def run_mpris_loop(mpris_service: MPRISService) -> None:
    try:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        mpris_service.loop = loop
        loop.run_until_complete(mpris_service.start())
        loop.run_forever()
    except Exception as e:
        logging.error(f"MPRIS loop error: {e}")
