import json
import logging

from domain.storage import KeyValueStore, StorageError


logger = logging.getLogger(__name__)


FAVORITES_KEY = "favorites"


class FavoritesStore:
    """Insertion ordered set of favorite recipe ids.

    Loaded once on construction. Every toggle writes the whole list back to
    storage; persistence is best effort and never raises.
    """

    def __init__(self, storage: KeyValueStore, *, key: str = FAVORITES_KEY) -> None:
        self.storage = storage
        self.key = key
        self._ids = self.load()

    def load(self) -> list[str]:
        try:
            raw = self.storage.get(self.key)
        except StorageError:
            logger.warning("Could not read favorites, starting empty.", exc_info=True)
            return []

        if raw is None:
            return []

        try:
            ids = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unparseable favorites: %r", raw)
            return []

        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            logger.warning("Ignoring favorites that are not a list of ids: %r", raw)
            return []

        # dict keeps the first occurrence of each id in order
        return list(dict.fromkeys(ids))

    def contains(self, recipe_id: str) -> bool:
        return recipe_id in self._ids

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def toggle(self, recipe_id: str) -> bool:
        if recipe_id in self._ids:
            self._ids.remove(recipe_id)
        else:
            self._ids.append(recipe_id)
        self._save()
        return recipe_id in self._ids

    def all(self) -> list[str]:
        return list(self._ids)

    def _save(self) -> None:
        try:
            self.storage.set(self.key, json.dumps(self._ids))
        except StorageError:
            logger.warning("Could not save favorites.", exc_info=True)
