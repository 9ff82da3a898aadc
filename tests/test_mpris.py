from record_tui.events import MediaCommand
from record_tui.models import Track
from record_tui.mpris_service import MediaPlayer2PlayerInterface, build_metadata


def test_metadata_empty_without_station() -> None:
    assert build_metadata(None, Track(song="x")) == {}


def test_metadata_for_station_only(station_factory) -> None:
    metadata = build_metadata(station_factory(101, "Record", "Main channel"), None)

    assert metadata["xesam:title"].value == "Record"
    assert metadata["xesam:album"].value == "Record"
    assert metadata["mpris:trackid"].value == "/org/record_tui/station/101"


def test_metadata_with_track(station_factory) -> None:
    track = Track(artist="", song="Jingle", image200="https://img.example/j.jpg")

    metadata = build_metadata(station_factory(101, "Record"), track)

    assert metadata["xesam:artist"].value == ["Radio Record"]
    assert metadata["xesam:title"].value == "Jingle"
    assert metadata["mpris:artUrl"].value == "https://img.example/j.jpg"
    assert "xesam:comment" not in metadata


def test_player_methods_post_media_commands() -> None:
    posted = []
    interface = MediaPlayer2PlayerInterface(posted.append, lambda: 80)

    interface.Next()
    interface.Previous()
    interface.Pause()
    interface.PlayPause()

    assert posted == [
        MediaCommand("next"),
        MediaCommand("previous"),
        MediaCommand("stop"),
        MediaCommand("play_pause"),
    ]
