import os

from record_tui.config import DEFAULT_CONFIG, load_config, save_config, validate_config


def test_missing_file_is_created_with_defaults(tmp_path) -> None:
    config_file = tmp_path / "cfg" / "record_tui.cfg"

    config = load_config(str(config_file))

    assert config == DEFAULT_CONFIG
    assert os.path.exists(config_file)
    assert "[record_tui]" in config_file.read_text()


def test_values_are_typed(tmp_path) -> None:
    config_file = tmp_path / "record_tui.cfg"
    config_file.write_text(
        "[record_tui]\nvolume = 35\nstream_quality = 128\ndbus_allowed = yes\nrefresh_interval = 9\n"
    )

    config = load_config(str(config_file))

    assert config["volume"] == 35
    assert config["stream_quality"] == "128"
    assert config["dbus_allowed"] is True
    assert config["dbus_send_metadata"] is False
    assert config["refresh_interval"] == 9


def test_invalid_value_keeps_default(tmp_path) -> None:
    config_file = tmp_path / "record_tui.cfg"
    config_file.write_text("[record_tui]\nvolume = loud\n")

    assert load_config(str(config_file))["volume"] == 80


def test_unparseable_file_falls_back_to_defaults(tmp_path) -> None:
    config_file = tmp_path / "record_tui.cfg"
    config_file.write_text("volume = 10\n")

    assert load_config(str(config_file)) == DEFAULT_CONFIG


def test_save_then_load_keeps_values(tmp_path) -> None:
    config_file = str(tmp_path / "record_tui.cfg")
    config = dict(DEFAULT_CONFIG, volume=15, dbus_send_metadata=True)

    save_config(config, config_file)

    assert load_config(config_file) == config


def test_validate_clamps_and_rejects() -> None:
    config = validate_config(
        {"volume": 250, "refresh_interval": 0, "stream_quality": "999", "dbus_allowed": "on"}
    )

    assert config["volume"] == 100
    assert config["refresh_interval"] == 1
    assert config["stream_quality"] == "320"
    assert config["dbus_allowed"] is True


def test_validate_ignores_unknown_keys() -> None:
    assert "theme" not in validate_config({"theme": "dark"})
