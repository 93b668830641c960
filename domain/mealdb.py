"""Thin async client for the TheMealDB JSON API.

Every endpoint answers with ``{"meals": [...]}``, where ``null`` (or a missing
key) means nothing matched. Callers get raw meal objects back; mapping them to
recipes happens in :mod:`domain.fetcher`.
"""

import logging
from typing import Any

import httpx

from domain.errors import NetworkError, NotFound, UpstreamFormatError
from domain.models import Meal


logger = logging.getLogger(__name__)


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20


def mealdb_client_factory(
    base_url: str = BASE_URL,
    timeout: float | None = TIMEOUT,
) -> httpx.AsyncClient:
    if not base_url.endswith("/"):
        base_url += "/"
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


def parse_meals(data: Any) -> list[Meal] | None:
    if not isinstance(data, dict):
        raise UpstreamFormatError(f"Expected a JSON object, got {type(data).__name__}.")
    meals = data.get("meals")
    if meals is None:
        return None
    if not isinstance(meals, list) or not all(isinstance(m, dict) for m in meals):
        raise UpstreamFormatError(f"Expected a list of meals. {data}")
    return meals


class MealDBClient:
    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self._client = mealdb_client_factory() if http_client is None else http_client

    async def _get(self, path: str, params: dict[str, str] | None = None) -> list[Meal] | None:
        logger.debug("GET %s %s", path, params or {})
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {path} failed: {e!r}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamFormatError(f"Response from {path} is not JSON.") from e

        return parse_meals(data)

    async def random_meal(self) -> Meal:
        meals = await self._get("random.php")
        if not meals:
            raise UpstreamFormatError("Random lookup returned no meal.")
        return meals[0]

    async def filter_by_category(self, category: str) -> list[Meal]:
        return await self._get("filter.php", {"c": category}) or []

    async def search_by_name(self, term: str) -> list[Meal]:
        return await self._get("search.php", {"s": term}) or []

    async def lookup(self, recipe_id: str) -> Meal:
        meals = await self._get("lookup.php", {"i": recipe_id})
        if not meals:
            raise NotFound(recipe_id)
        return meals[0]

    async def close(self) -> None:
        await self._client.aclose()
