from typing import Any

import httpx
import pytest

from domain.errors import NetworkError, NotFound, UpstreamFormatError
from domain.mealdb import BASE_URL, MealDBClient, mealdb_client_factory, parse_meals
from tests.stubs import make_meal


def client_for(handler: Any) -> MealDBClient:
    return MealDBClient(
        httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    )


def test_factory_appends_trailing_slash() -> None:
    client = mealdb_client_factory("https://example.com/api")
    assert str(client.base_url) == "https://example.com/api/"


@pytest.mark.parametrize(
    "data,expected",
    (
        ({"meals": None}, None),
        ({}, None),
        ({"meals": [{"idMeal": "1"}]}, [{"idMeal": "1"}]),
    ),
)
def test_parse_meals(data: Any, expected: Any) -> None:
    assert parse_meals(data) == expected


@pytest.mark.parametrize("data", ([], {"meals": "none"}, {"meals": ["1"]}))
def test_parse_meals_rejects_bad_shapes(data: Any) -> None:
    with pytest.raises(UpstreamFormatError):
        parse_meals(data)


@pytest.mark.asyncio
async def test_search_sends_term_and_parses_meals() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"meals": [make_meal("1")]})

    meals = await client_for(handler).search_by_name("Arrabiata")

    assert [m["idMeal"] for m in meals] == ["1"]
    assert requests[0].url.path == "/api/json/v1/1/search.php"
    assert requests[0].url.params["s"] == "Arrabiata"


@pytest.mark.asyncio
async def test_none_found_is_empty_for_lists() -> None:
    client = client_for(lambda request: httpx.Response(200, json={"meals": None}))

    assert await client.filter_by_category("Seafood") == []
    assert await client.search_by_name("nothing") == []


@pytest.mark.asyncio
async def test_lookup_none_found_is_not_found() -> None:
    client = client_for(lambda request: httpx.Response(200, json={"meals": None}))

    with pytest.raises(NotFound):
        await client.lookup("52772")


@pytest.mark.asyncio
async def test_random_none_found_is_format_error() -> None:
    client = client_for(lambda request: httpx.Response(200, json={"meals": None}))

    with pytest.raises(UpstreamFormatError):
        await client.random_meal()


@pytest.mark.asyncio
async def test_lookup_returns_first_meal() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["i"] == "52772"
        return httpx.Response(200, json={"meals": [make_meal("52772")]})

    meal = await client_for(handler).lookup("52772")
    assert meal["idMeal"] == "52772"


@pytest.mark.asyncio
async def test_http_error_status_is_network_error() -> None:
    client = client_for(lambda request: httpx.Response(503))

    with pytest.raises(NetworkError):
        await client.random_meal()


@pytest.mark.asyncio
async def test_transport_failure_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(NetworkError):
        await client_for(handler).lookup("1")


@pytest.mark.asyncio
async def test_non_json_body_is_format_error() -> None:
    client = client_for(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(UpstreamFormatError):
        await client.search_by_name("a")
