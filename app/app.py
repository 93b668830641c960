import contextlib
import functools
import logging
from typing import Any, Awaitable, Callable, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Route

from app.config import Config, Env
from app.html.recipe_detail import FavoriteButton, RecipeDetailView
from app.html.recipe_list import EMPTY_MESSAGE, RecipeList
from domain.errors import InvalidArgument, RecipeBrowserError
from domain.favorites import FavoritesStore
from domain.fetcher import AggregateFetcher, Upstream
from domain.mealdb import MealDBClient, mealdb_client_factory
from domain.models import RecipeSummary
from domain.preferences import ThemePreference
from domain.storage import (
    KeyValueStore,
    SqliteKeyValueStore,
    StorageError,
    UnavailableStore,
)


logger = logging.getLogger(__name__)


LOAD_FAILED = "Failed to load recipes. Please try again later."
SEARCH_FAILED = "Failed to search recipes. Please try again later."
FEATURED_FAILED = "Failed to load featured recipes."
RANDOM_FAILED = "Failed to load random recipe. Please try again later."
DETAIL_FAILED = "Failed to load recipe details. Please try again later."
FAVORITES_FAILED = "Failed to load favorite recipes. Please try again later."
NO_FAVORITES = (
    "You have no saved recipes yet. "
    "Click the heart icon on any recipe to save it."
)


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


async def _grid(
    request: Request,
    recipes: Awaitable[Sequence[RecipeSummary]],
    *,
    heading: str | None,
    failure: str,
    empty_message: str = EMPTY_MESSAGE,
) -> str:
    env: Environment = request.app.state.templates
    try:
        found = await recipes
    except InvalidArgument as e:
        return RecipeList(environment=env, heading=heading, message=str(e)).render()
    except RecipeBrowserError:
        # Shown instead of the results, never retried.
        logger.exception(failure)
        return RecipeList(environment=env, heading=heading, message=failure).render()

    return RecipeList(
        found, environment=env, heading=heading, empty_message=empty_message
    ).render()


@aHTMLResponse
async def homepage(request: Request) -> str:
    state = request.app.state
    return state.templates.get_template("index.html").render(
        categories=state.config.categories,
        dark_mode=state.theme.dark_mode,
    )


@aHTMLResponse
async def recipes(request: Request) -> str:
    fetcher: AggregateFetcher = request.app.state.fetcher
    params = request.query_params

    if "search" in params:
        term = params["search"].strip()
        return await _grid(
            request,
            fetcher.fetch_by_search_term(term),
            heading=f'Search Results for "{term}"' if term else None,
            failure=SEARCH_FAILED,
            empty_message=f'No recipes found for "{term}". Try a different search term.',
        )

    category = params.get("category", "").strip() or "all"
    if category == "all":
        return await _grid(
            request,
            fetcher.fetch_random_batch(request.app.state.config.random_batch_size),
            heading="All Recipes",
            failure=LOAD_FAILED,
        )
    return await _grid(
        request,
        fetcher.fetch_by_category(category),
        heading=f"{category} Recipes",
        failure=LOAD_FAILED,
    )


@aHTMLResponse
async def featured(request: Request) -> str:
    fetcher: AggregateFetcher = request.app.state.fetcher
    return await _grid(
        request,
        fetcher.fetch_random_batch(request.app.state.config.featured_batch_size),
        heading=None,
        failure=FEATURED_FAILED,
    )


async def _one_random(fetcher: AggregateFetcher) -> list[RecipeSummary]:
    return [await fetcher.fetch_random()]


@aHTMLResponse
async def surprise(request: Request) -> str:
    return await _grid(
        request,
        _one_random(request.app.state.fetcher),
        heading="Random Recipe",
        failure=RANDOM_FAILED,
    )


@aHTMLResponse
async def favorites(request: Request) -> str:
    state = request.app.state
    store: FavoritesStore = state.favorites
    ids = store.all()
    if not ids:
        return RecipeList(
            environment=state.templates,
            heading="Favorite Recipes",
            message=NO_FAVORITES,
        ).render()
    return await _grid(
        request,
        state.fetcher.fetch_by_ids(ids),
        heading="Favorite Recipes",
        failure=FAVORITES_FAILED,
    )


@aHTMLResponse
async def recipe_detail(request: Request) -> str:
    state = request.app.state
    recipe_id = request.path_params["id"]
    try:
        recipe = await state.fetcher.fetch_detail(recipe_id)
    except RecipeBrowserError:
        logger.exception(DETAIL_FAILED)
        return state.templates.get_template("message.html").render(
            message=DETAIL_FAILED
        )
    return RecipeDetailView(
        recipe,
        is_favorite=state.favorites.contains(recipe.id),
        environment=state.templates,
    ).render()


@aHTMLResponse
async def toggle_favorite(request: Request) -> str:
    state = request.app.state
    recipe_id = request.path_params["id"]
    is_favorite = state.favorites.toggle(recipe_id)
    logger.info("Recipe %s favorite: %s", recipe_id, is_favorite)
    # Only the button is re-rendered, cards elsewhere keep their state.
    return FavoriteButton(
        recipe_id, is_favorite=is_favorite, environment=state.templates
    ).render()


@aHTMLResponse
async def toggle_theme(request: Request) -> str:
    state = request.app.state
    dark_mode = state.theme.toggle()
    return state.templates.get_template("theme-toggle.html").render(
        dark_mode=dark_mode
    )


def create_app(
    config: Config | None = None,
    *,
    upstream: Upstream | None = None,
    storage: KeyValueStore | None = None,
) -> Starlette:
    """Build the app. Collaborators not passed in are built from ``config``."""
    config = Config() if config is None else config

    client: MealDBClient | None = None
    if upstream is None:
        client = MealDBClient(
            mealdb_client_factory(config.mealdb_url, config.request_timeout)
        )
        upstream = client

    sqlite_store: SqliteKeyValueStore | None = None
    if storage is None:
        try:
            sqlite_store = SqliteKeyValueStore(config.storage_path)
        except StorageError as e:
            # Favorites and theme still work, they just are not kept.
            logger.exception("Could not open storage, nothing will be saved.")
            storage = UnavailableStore(str(e))
        else:
            storage = sqlite_store

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        if client is not None:
            await client.close()
        if sqlite_store is not None:
            sqlite_store.close()

    app = Starlette(
        debug=config.env == Env.local,
        routes=[
            Route("/", homepage),
            Route("/recipes", recipes),
            Route("/recipes/featured", featured),
            Route("/recipes/random", surprise),
            Route("/recipes/{id}", recipe_detail),
            Route("/favorites", favorites),
            Route("/favorites/{id}", toggle_favorite, methods=["POST"]),
            Route("/theme", toggle_theme, methods=["POST"]),
        ],
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.templates = Environment(
        loader=FileSystemLoader(config.html_dir),
        autoescape=select_autoescape(),
    )
    app.state.fetcher = AggregateFetcher(upstream)
    app.state.favorites = FavoritesStore(storage, key=config.favorites_key)
    app.state.theme = ThemePreference(storage, key=config.theme_key)
    return app
