from pathlib import Path
from typing import Protocol

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError


CREATE_STORAGE_TABLE = """
CREATE TABLE IF NOT EXISTS Storage (key VARCHAR(256) PRIMARY KEY, value TEXT)
"""


GET_ITEM = "SELECT value FROM Storage WHERE key = :key"


SET_ITEM = """
INSERT INTO Storage(key, value) VALUES (:key, :value)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""


class StorageError(Exception):
    pass


class KeyValueStore(Protocol):
    """Persistent string store, the server side stand-in for browser storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value or ``None`` when the key was never set."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


def sqlite_url(path: Path | str) -> str:
    if str(path) == ":memory:":
        return "sqlite://"
    return f"sqlite:///{path}"


class SqliteKeyValueStore:
    def __init__(self, path: Path | str = ":memory:") -> None:
        self.engine = create_engine(sqlite_url(path))
        try:
            with self.engine.begin() as conn:
                conn.execute(text(CREATE_STORAGE_TABLE))
        except SQLAlchemyError as e:
            self.engine.dispose()
            raise StorageError(f"Could not open storage at {path}.") from e

    def get(self, key: str) -> str | None:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(text(GET_ITEM), {"key": key}).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not read {key!r}.") from e
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(text(SET_ITEM), {"key": key, "value": value})
        except SQLAlchemyError as e:
            raise StorageError(f"Could not write {key!r}.") from e

    def close(self) -> None:
        self.engine.dispose()


class UnavailableStore:
    """Stands in when storage could not be opened. Nothing is ever kept."""

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str) -> None:
        raise StorageError(f"Storage unavailable: {self.reason}")
