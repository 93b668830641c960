import pytest

from tests.stubs import InMemoryStore, StubUpstream, make_meal


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream(
        {
            "A": make_meal("A", strMeal="Arrabiata"),
            "B": make_meal("B", strMeal="Beef Wellington", strCategory="Beef"),
            "C": make_meal("C", strMeal="Chocolate Gateau", strCategory="Dessert"),
        },
        categories={
            "Dessert": [
                {"idMeal": "C", "strMeal": "Chocolate Gateau", "strMealThumb": "c.jpg"},
            ],
        },
    )
