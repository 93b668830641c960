from pathlib import Path

import pytest

from domain.favorites import FavoritesStore
from domain.preferences import ThemePreference
from domain.storage import SqliteKeyValueStore, StorageError, UnavailableStore
from tests.stubs import InMemoryStore


def test_sqlite_get_missing_key() -> None:
    assert SqliteKeyValueStore().get("favorites") is None


def test_sqlite_set_replaces_value() -> None:
    store = SqliteKeyValueStore()
    store.set("favorites", '["A"]')
    store.set("favorites", '["A", "B"]')
    assert store.get("favorites") == '["A", "B"]'


def test_sqlite_persists_across_connections(tmp_path: Path) -> None:
    path = tmp_path / "browser.db"
    store = SqliteKeyValueStore(path)
    FavoritesStore(store).toggle("52772")
    store.close()

    assert FavoritesStore(SqliteKeyValueStore(path)).all() == ["52772"]


def test_sqlite_unopenable_path_is_storage_error(tmp_path: Path) -> None:
    with pytest.raises(StorageError):
        SqliteKeyValueStore(tmp_path / "missing" / "browser.db")


def test_unavailable_store_reads_nothing_and_refuses_writes() -> None:
    store = UnavailableStore("disk gone")

    assert store.get("favorites") is None
    with pytest.raises(StorageError):
        store.set("favorites", "[]")


def test_theme_defaults_to_light() -> None:
    assert ThemePreference(InMemoryStore()).dark_mode is False


def test_theme_toggle_persists_boolean_string() -> None:
    store = InMemoryStore()
    theme = ThemePreference(store)

    assert theme.toggle() is True
    assert store.items["darkMode"] == "true"
    assert theme.dark_mode is True

    assert theme.toggle() is False
    assert store.items["darkMode"] == "false"
