import logging

from domain.storage import KeyValueStore, StorageError


logger = logging.getLogger(__name__)


THEME_KEY = "darkMode"


class ThemePreference:
    def __init__(self, storage: KeyValueStore, *, key: str = THEME_KEY) -> None:
        self.storage = storage
        self.key = key

    @property
    def dark_mode(self) -> bool:
        try:
            return self.storage.get(self.key) == "true"
        except StorageError:
            logger.warning("Could not read theme preference.", exc_info=True)
            return False

    def toggle(self) -> bool:
        dark_mode = not self.dark_mode
        try:
            self.storage.set(self.key, "true" if dark_mode else "false")
        except StorageError:
            logger.warning("Could not save theme preference.", exc_info=True)
        return dark_mode
