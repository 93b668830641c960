from dataclasses import dataclass
from typing import Any, Self, TypeAlias

from domain.errors import UpstreamFormatError


Meal: TypeAlias = dict[str, Any]


DEFAULT_CATEGORY = "Uncategorized"
MAX_INGREDIENTS = 20
STEP_SEPARATOR = "\r\n"


def _text(meal: Meal, key: str) -> str | None:
    value = meal.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def parse_ingredients(meal: Meal) -> tuple[str, ...]:
    ingredients: list[str] = []
    for i in range(1, MAX_INGREDIENTS + 1):
        ingredient = _text(meal, f"strIngredient{i}")
        if ingredient is None:
            continue
        measure = _text(meal, f"strMeasure{i}") or ""
        ingredients.append(f"{measure} {ingredient}".strip())
    return tuple(ingredients)


def parse_instructions(instructions: str | None) -> tuple[str, ...]:
    if not instructions:
        return ()
    steps = (step.strip() for step in instructions.split(STEP_SEPARATOR))
    return tuple(step for step in steps if step)


def parse_tags(tags: str | None) -> tuple[str, ...]:
    if not tags:
        return ()
    return tuple(tag.strip() for tag in tags.split(",") if tag.strip())


def _required(meal: Meal, key: str) -> str:
    value = meal.get(key)
    if value is None or isinstance(value, (dict, list)):
        raise UpstreamFormatError(f"Recipe is missing {key!r}: {meal!r}")
    return str(value)


@dataclass(frozen=True, eq=False)
class RecipeSummary:
    """What a recipe card shows. Equal recipes share an id."""

    id: str
    title: str
    thumbnail_url: str
    category: str = DEFAULT_CATEGORY

    @classmethod
    def from_meal(cls, meal: Meal) -> Self:
        return cls(
            id=_required(meal, "idMeal"),
            title=_required(meal, "strMeal"),
            thumbnail_url=_text(meal, "strMealThumb") or "",
            category=_text(meal, "strCategory") or DEFAULT_CATEGORY,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecipeSummary):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True, eq=False)
class RecipeDetail(RecipeSummary):
    area: str | None = None
    tags: tuple[str, ...] = ()
    instructions: tuple[str, ...] = ()
    ingredients: tuple[str, ...] = ()
    video_url: str | None = None
    source_url: str | None = None

    @classmethod
    def from_meal(cls, meal: Meal) -> Self:
        return cls(
            id=_required(meal, "idMeal"),
            title=_required(meal, "strMeal"),
            thumbnail_url=_text(meal, "strMealThumb") or "",
            category=_text(meal, "strCategory") or DEFAULT_CATEGORY,
            area=_text(meal, "strArea"),
            tags=parse_tags(_text(meal, "strTags")),
            instructions=parse_instructions(_text(meal, "strInstructions")),
            ingredients=parse_ingredients(meal),
            video_url=_text(meal, "strYoutube"),
            source_url=_text(meal, "strSource"),
        )
