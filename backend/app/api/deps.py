from fastapi import Depends

from ..core.config import Settings, get_settings
from ..core.staples import StapleVocabulary
from ..services.catalog import SerpApiCatalog
from ..services.converter import RecipeConverter
from ..services.openai_client import RecipeSimplifier


def get_vocabulary(settings: Settings = Depends(get_settings)) -> StapleVocabulary:
    return StapleVocabulary(settings.staple_ingredients)


def get_catalog(settings: Settings = Depends(get_settings)) -> SerpApiCatalog:
    return SerpApiCatalog(settings.serpapi_key, settings.catalog_site, timeout=settings.http_timeout)


def get_simplifier(settings: Settings = Depends(get_settings)) -> RecipeSimplifier:
    return RecipeSimplifier(
        settings.openai_api_key,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        top=settings.top_ingredient_count,
    )


def get_converter(settings: Settings = Depends(get_settings)) -> RecipeConverter:
    return RecipeConverter.from_settings(settings)
