import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from openai import OpenAIError

from ..core.classifier import classify_ingredients
from ..core.errors import (
    CatalogSearchError,
    InvalidIngredientError,
    MissingCredentialsError,
    RecipeFetchError,
)
from ..core.staples import StapleVocabulary
from ..models.recipe import (
    CatalogMatch,
    ClassificationResult,
    ClassifyRequest,
    ConversionRequest,
    ConversionResult,
    SimplifierRequest,
)
from ..services.catalog import SerpApiCatalog
from ..services.converter import RecipeConverter
from ..services.openai_client import RecipeSimplifier, cap_reply, parse_simplifier_reply
from .deps import get_catalog, get_converter, get_simplifier, get_vocabulary

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")


@router.post("/convert", response_model=ConversionResult)
async def convert_recipe(
    body: ConversionRequest, converter: RecipeConverter = Depends(get_converter)
):
    """Turn a recipe URL into a catalog-matched shopping list."""
    try:
        return await converter.convert(body.url)
    except MissingCredentialsError as e:
        log.error(f"❌ {e}")
        raise HTTPException(status_code=503, detail=str(e))
    except RecipeFetchError:
        raise HTTPException(status_code=502, detail="Failed to fetch recipe.")


@router.post("/classify", response_model=ClassificationResult)
async def classify(body: ClassifyRequest, vocabulary: StapleVocabulary = Depends(get_vocabulary)):
    try:
        return classify_ingredients(body.lines, vocabulary)
    except InvalidIngredientError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/search", response_model=CatalogMatch)
async def search_catalog(q: str = "", catalog: SerpApiCatalog = Depends(get_catalog)):
    if not q.strip():
        raise HTTPException(status_code=400, detail="Missing query param `q`")
    try:
        return await catalog.search(q)
    except MissingCredentialsError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CatalogSearchError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except httpx.HTTPError as e:
        log.error(f"💥 SerpApi error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/simplify")
async def simplify_recipe(
    body: SimplifierRequest, simplifier: RecipeSimplifier = Depends(get_simplifier)
):
    """Ask the model for the top ingredients and rewritten instructions."""
    try:
        reply = await simplifier.complete(body)
    except MissingCredentialsError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except OpenAIError as e:
        log.error(f"💥 Simplify recipe error: {e}")
        return JSONResponse(status_code=500, content={"ingredients": [], "instructions": ""})

    parsed = parse_simplifier_reply(reply)
    if parsed is None:
        top = simplifier.top
        return {
            "ingredients": [ing.model_dump() for ing in body.ingredients[:top]],
            "discardedIngredients": [ing.model_dump() for ing in body.ingredients[top:]],
            "instructions": body.instructions,
        }
    return cap_reply(parsed, simplifier.top).model_dump(by_alias=True)
