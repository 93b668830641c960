import asyncio
from enum import Enum
import logging
from typing import Awaitable, Iterable, Protocol, TypeVar

from domain.errors import BatchFetchError, InvalidArgument, NotFound, RecipeBrowserError
from domain.models import Meal, RecipeDetail, RecipeSummary


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Upstream(Protocol):
    async def random_meal(self) -> Meal: ...

    async def filter_by_category(self, category: str) -> list[Meal]: ...

    async def search_by_name(self, term: str) -> list[Meal]: ...

    async def lookup(self, recipe_id: str) -> Meal: ...


class JoinPolicy(Enum):
    ALL_OR_NOTHING = "all_or_nothing"
    SKIP_NOT_FOUND = "skip_not_found"


async def _settle(aw: Awaitable[T]) -> T | RecipeBrowserError:
    try:
        return await aw
    except RecipeBrowserError as e:
        return e


async def gather_all(
    aws: Iterable[Awaitable[T]],
    *,
    policy: JoinPolicy = JoinPolicy.ALL_OR_NOTHING,
) -> list[T]:
    """Run every awaitable concurrently and join once all have settled.

    Failures are captured per task so a failing request never cancels its
    siblings. Results keep the order the awaitables were given in.
    """
    async with asyncio.TaskGroup() as tg:
        tasks = [tg.create_task(_settle(aw)) for aw in aws]

    results: list[T] = []
    for task in tasks:
        outcome = task.result()
        if isinstance(outcome, NotFound) and policy is JoinPolicy.SKIP_NOT_FOUND:
            logger.info("Skipping missing recipe %s", outcome.recipe_id)
            continue
        if isinstance(outcome, RecipeBrowserError):
            raise BatchFetchError(outcome) from outcome
        results.append(outcome)
    return results


class AggregateFetcher:
    def __init__(self, upstream: Upstream) -> None:
        self.upstream = upstream

    async def _random(self) -> RecipeDetail:
        return RecipeDetail.from_meal(await self.upstream.random_meal())

    async def _detail(self, recipe_id: str) -> RecipeDetail:
        return RecipeDetail.from_meal(await self.upstream.lookup(recipe_id))

    async def fetch_random(self) -> RecipeDetail:
        return await self._random()

    async def fetch_random_batch(self, count: int) -> list[RecipeDetail]:
        if count < 0:
            raise InvalidArgument(f"Batch size must not be negative, got {count}.")
        return await gather_all(self._random() for _ in range(count))

    async def fetch_by_category(self, category: str) -> list[RecipeSummary]:
        category = category.strip()
        if not category:
            raise InvalidArgument("Category must not be blank.")
        meals = await self.upstream.filter_by_category(category)
        return [RecipeSummary.from_meal(m) for m in meals]

    async def fetch_by_search_term(self, term: str) -> list[RecipeSummary]:
        term = term.strip()
        if not term:
            raise InvalidArgument("Search term must not be blank.")
        meals = await self.upstream.search_by_name(term)
        return [RecipeSummary.from_meal(m) for m in meals]

    async def fetch_by_ids(self, ids: Iterable[str]) -> list[RecipeDetail]:
        return await gather_all(
            (self._detail(recipe_id) for recipe_id in ids),
            policy=JoinPolicy.SKIP_NOT_FOUND,
        )

    async def fetch_detail(self, recipe_id: str) -> RecipeDetail:
        return await self._detail(recipe_id)
