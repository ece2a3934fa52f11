"""
Recipe URL -> shopping list conversion.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

import httpx

from ..core.classifier import classify_ingredients
from ..core.config import Settings
from ..core.errors import CatalogSearchError, MissingCredentialsError
from ..core.staples import StapleVocabulary
from ..models.recipe import (
    CatalogMatch,
    ConversionResult,
    MATCH_ERROR_TITLE,
    NotableIngredient,
    ParsedIngredient,
)
from .catalog import SerpApiCatalog
from .ingredient_parser import to_title_case
from .openai_client import RecipeSimplifier
from .recipe_source import SpoonacularRecipeSource

log = logging.getLogger(__name__)

EventCallback = Callable[[dict], Awaitable[None]]


async def _noop(event: dict) -> None:
    return None


class RecipeConverter:
    """
    Fetches a recipe, splits staples from notable ingredients, matches the
    notable ones against the retailer catalog and asks the simplifier for the
    final shopping list.
    """

    def __init__(
        self,
        recipe_source: SpoonacularRecipeSource,
        catalog: SerpApiCatalog,
        simplifier: RecipeSimplifier,
        vocabulary: StapleVocabulary,
        max_concurrent_matches: int = 5,
    ):
        self.recipe_source = recipe_source
        self.catalog = catalog
        self.simplifier = simplifier
        self.vocabulary = vocabulary
        self.max_concurrent_matches = max(1, max_concurrent_matches)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecipeConverter":
        return cls(
            recipe_source=SpoonacularRecipeSource(settings.spoonacular_api_key, timeout=settings.http_timeout),
            catalog=SerpApiCatalog(settings.serpapi_key, settings.catalog_site, timeout=settings.http_timeout),
            simplifier=RecipeSimplifier(
                settings.openai_api_key,
                model=settings.openai_model,
                temperature=settings.openai_temperature,
                top=settings.top_ingredient_count,
            ),
            vocabulary=StapleVocabulary(settings.staple_ingredients),
            max_concurrent_matches=settings.max_concurrent_matches,
        )

    async def match_ingredient(self, parsed: ParsedIngredient) -> NotableIngredient:
        """Find a catalog entry for one ingredient; failures become a sentinel entry."""
        name = to_title_case(parsed.name)
        try:
            match = await self.catalog.search(parsed.name)
        except (CatalogSearchError, httpx.HTTPError, ValueError) as e:
            log.error(f"❌ Failed to match catalog item for '{parsed.name}': {e}")
            match = CatalogMatch(title=MATCH_ERROR_TITLE)
        return NotableIngredient.from_match(name, parsed.display_quantity, match)

    async def match_all(
        self, notable: List[ParsedIngredient], on_event: EventCallback = _noop
    ) -> List[NotableIngredient]:
        """Match every ingredient concurrently, keeping the input order."""
        semaphore = asyncio.Semaphore(self.max_concurrent_matches)

        async def bounded(index: int, parsed: ParsedIngredient) -> NotableIngredient:
            async with semaphore:
                matched = await self.match_ingredient(parsed)
            await on_event({"type": "match", "index": index, "ingredient": matched.model_dump()})
            return matched

        return list(await asyncio.gather(*(bounded(i, p) for i, p in enumerate(notable))))

    async def convert(self, url: str, on_event: Optional[EventCallback] = None) -> ConversionResult:
        on_event = on_event or _noop
        if not self.catalog.api_key:
            raise MissingCredentialsError("serpapi_key")

        recipe = await self.recipe_source.fetch(url)
        await on_event({"type": "recipe", "title": recipe.title, "image": recipe.image})

        classified = classify_ingredients(recipe.ingredient_lines, self.vocabulary)
        await on_event({"type": "classified", **classified.model_dump()})

        matched = await self.match_all(classified.notable, on_event)

        simplified = await self.simplifier.simplify(
            matched, [s.name for s in classified.staples], recipe.instructions
        )
        await on_event({"type": "simplified", "simplified": simplified.simplified})

        return ConversionResult(
            title=recipe.title,
            image=recipe.image,
            ingredients=simplified.chosen_ingredients,
            staples=classified.staples,
            additional_ingredients=simplified.discarded_ingredients,
            instructions=simplified.instructions,
            simplified=simplified.simplified,
        )
