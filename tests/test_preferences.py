import json

from record_tui.config import DEFAULT_CONFIG, load_config
from record_tui.preferences import PreferenceStore, load_favorites


def _store(tmp_path, favorites=None) -> PreferenceStore:
    favorites_file = tmp_path / "favorites.json"
    if favorites is not None:
        favorites_file.write_text(json.dumps(favorites))
    return PreferenceStore(
        dict(DEFAULT_CONFIG),
        favorites_file=str(favorites_file),
        config_file=str(tmp_path / "record_tui.cfg"),
    )


def test_favorites_keep_insertion_order(tmp_path) -> None:
    store = _store(tmp_path)

    store.toggle_favorite(7)
    store.toggle_favorite(3)
    store.toggle_favorite(9)

    assert store.favorites() == [7, 3, 9]
    assert store.favorite_at(2) == 3
    assert store.favorite_at(4) is None
    assert store.favorite_at(0) is None


def test_toggle_persists_immediately(tmp_path) -> None:
    store = _store(tmp_path)

    assert store.toggle_favorite(101) is True
    assert json.loads((tmp_path / "favorites.json").read_text()) == [101]

    assert store.toggle_favorite(101) is False
    assert json.loads((tmp_path / "favorites.json").read_text()) == []
    assert not store.is_favorite(101)


def test_favorites_survive_reload(tmp_path) -> None:
    _store(tmp_path).toggle_favorite(5)

    assert _store(tmp_path).favorites() == [5]


def test_bad_favorites_data_is_tolerated(tmp_path) -> None:
    path = tmp_path / "favorites.json"

    path.write_text("{not json")
    assert load_favorites(str(path)) == []

    path.write_text(json.dumps([4, "4", "x", None, 2]))
    assert load_favorites(str(path)) == [4, 2]

    path.write_text(json.dumps({"ids": [1]}))
    assert load_favorites(str(path)) == []


def test_volume_is_clamped_and_saved(tmp_path) -> None:
    store = _store(tmp_path, favorites=[])

    store.volume = 140
    assert store.volume == 100

    store.volume = 42
    store.save()

    assert load_config(str(tmp_path / "record_tui.cfg"))["volume"] == 42
