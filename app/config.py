from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


ROOT = Path(__file__).resolve().parents[1]


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    html_dir: Path = ROOT / "assets" / "html"
    mealdb_url: str = "https://www.themealdb.com/api/json/v1/1/"
    # Per request. None waits forever.
    request_timeout: float | None = 20
    random_batch_size: int = 8
    featured_batch_size: int = 5
    storage_path: Path = Path("recipe-browser.db")
    favorites_key: str = "favorites"
    theme_key: str = "darkMode"
    categories: list[str] = [
        "Beef",
        "Chicken",
        "Dessert",
        "Pasta",
        "Seafood",
        "Vegetarian",
        "Breakfast",
    ]
    log_level: str = "INFO"
