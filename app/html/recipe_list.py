from typing import Sequence

from jinja2 import Environment

from domain.models import RecipeSummary


EMPTY_MESSAGE = "No recipes found."


class RecipeList:
    """A grid of recipe cards, or a single message in place of the cards."""

    def __init__(
        self,
        recipes: Sequence[RecipeSummary] = (),
        *,
        environment: Environment,
        heading: str | None = None,
        message: str | None = None,
        empty_message: str = EMPTY_MESSAGE,
        template_name: str = "recipe-list.html",
    ) -> None:
        self.recipes = recipes
        self.heading = heading
        self.env = environment
        self.name = template_name
        if message is None and not recipes:
            message = empty_message
        self.message = message

    def render(self) -> str:
        return self.env.get_template(self.name).render(grid=self)
