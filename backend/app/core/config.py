from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings

DEFAULT_STAPLE_INGREDIENTS = [
    "salt",
    "pepper",
    "butter",
    "oil",
    "olive oil",
    "vegetable oil",
    "canola oil",
    "sugar",
    "milk",
    "egg",
    "all-purpose flour",
    "vanilla extract",
    "baking soda",
    "cooking spray",
    "honey",
    "water",
    "basil",
    "oregano",
    "red pepper",
]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    openai_api_key: str = ""
    openai_model: str = "gpt-3.5-turbo"
    openai_temperature: float = 0.7

    spoonacular_api_key: str = ""
    serpapi_key: str = ""
    catalog_site: str = "traderjoes.com"

    http_timeout: float = 30.0
    max_concurrent_matches: int = 5
    top_ingredient_count: int = 5

    # JSON list when set through the environment
    staple_ingredients: List[str] = DEFAULT_STAPLE_INGREDIENTS

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_prefix": "",
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
