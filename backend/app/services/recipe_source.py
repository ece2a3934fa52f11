"""
Spoonacular recipe extraction client.
"""

import logging
import re
from typing import Optional

import httpx

from ..core.errors import MissingCredentialsError, RecipeFetchError
from ..models.recipe import RecipeData

log = logging.getLogger(__name__)

EXTRACT_URL = "https://api.spoonacular.com/recipes/extract"
UNKNOWN_INGREDIENT = "Unknown ingredient"

_HTML_TAG = re.compile(r"<[^>]+>")


def strip_html(text: str) -> str:
    return _HTML_TAG.sub("", text)


def recipe_from_payload(data: dict) -> RecipeData:
    """Build RecipeData from a Spoonacular extract response.

    Raises ValueError when the payload is not a JSON object.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a recipe object, got {type(data).__name__}")
    lines = [
        (ing.get("original") if isinstance(ing, dict) else None) or UNKNOWN_INGREDIENT
        for ing in data.get("extendedIngredients") or []
    ]
    instructions = data.get("instructions") or data.get("summary") or ""
    if not isinstance(instructions, str):
        raise ValueError("Recipe instructions must be text")
    return RecipeData(
        title=data.get("title") or None,
        image=data.get("image") or None,
        ingredient_lines=lines,
        instructions=strip_html(instructions),
    )


class SpoonacularRecipeSource:
    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.api_key = api_key
        self.client = client
        self.timeout = timeout

    async def fetch(self, url: str) -> RecipeData:
        if not self.api_key:
            raise MissingCredentialsError("spoonacular_api_key")

        params = {"apiKey": self.api_key, "url": url}
        log.info(f"🔗 Extracting recipe from {url}")
        try:
            if self.client is not None:
                response = await self.client.get(EXTRACT_URL, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(EXTRACT_URL, params=params)
            response.raise_for_status()
            recipe = recipe_from_payload(response.json())
        except (httpx.HTTPError, ValueError) as e:
            log.error(f"❌ Failed to fetch recipe {url}: {e}")
            raise RecipeFetchError("Failed to fetch recipe.") from e

        log.info(f"✅ Recipe '{recipe.title}' has {len(recipe.ingredient_lines)} ingredient lines")
        return recipe
