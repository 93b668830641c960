from jinja2 import Environment

from domain.models import RecipeDetail


class FavoriteButton:
    def __init__(
        self,
        recipe_id: str,
        *,
        is_favorite: bool,
        environment: Environment,
        template_name: str = "favorite-button.html",
    ) -> None:
        self.recipe_id = recipe_id
        self.is_favorite = is_favorite
        self.env = environment
        self.name = template_name

    @property
    def icon(self) -> str:
        return "fas fa-heart" if self.is_favorite else "far fa-heart"

    @property
    def label(self) -> str:
        return "Saved" if self.is_favorite else "Save Recipe"

    def render(self) -> str:
        return self.env.get_template(self.name).render(button=self)


class RecipeDetailView:
    def __init__(
        self,
        recipe: RecipeDetail,
        *,
        is_favorite: bool,
        environment: Environment,
        template_name: str = "recipe-detail.html",
    ) -> None:
        self.recipe = recipe
        self.env = environment
        self.name = template_name
        self.favorite_button = FavoriteButton(
            recipe.id, is_favorite=is_favorite, environment=environment
        )

    @property
    def title(self) -> str:
        return self.recipe.title

    @property
    def steps(self) -> list[tuple[int, str]]:
        return list(enumerate(self.recipe.instructions, start=1))

    def render(self) -> str:
        return self.env.get_template(self.name).render(recipe=self)
