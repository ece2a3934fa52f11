"""
Retailer catalog lookup through SerpApi site-restricted web search.
"""

import logging
from typing import Optional

import httpx

from ..core.errors import CatalogSearchError, MissingCredentialsError
from ..models.recipe import CatalogMatch, NO_MATCH_TITLE

log = logging.getLogger(__name__)

SEARCH_URL = "https://serpapi.com/search.json"


def _field(data, key) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def match_from_payload(data: dict) -> CatalogMatch:
    """Pick the first organic result of a SerpApi response.

    Anything that is not shaped like a SerpApi result is treated as no match.
    """
    results = data.get("organic_results") if isinstance(data, dict) else None
    first = results[0] if isinstance(results, list) and results else {}
    if not isinstance(first, dict):
        first = {}
    extensions = _field(_field(_field(first, "rich_snippet"), "top"), "detected_extensions")
    return CatalogMatch(
        title=first.get("title") or NO_MATCH_TITLE,
        link=first.get("link") or None,
        thumbnail=extensions.get("image") or first.get("thumbnail") or None,
        price=extensions.get("price") or None,
    )


class SerpApiCatalog:
    def __init__(
        self,
        api_key: str,
        site: str = "traderjoes.com",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.site = site
        self.client = client
        self.timeout = timeout

    async def search(self, ingredient: str) -> CatalogMatch:
        if not self.api_key:
            raise MissingCredentialsError("serpapi_key")

        params = {"q": f"site:{self.site} {ingredient}", "api_key": self.api_key}
        log.debug(f"🔎 Searching catalog for '{ingredient}'")
        if self.client is not None:
            response = await self.client.get(SEARCH_URL, params=params)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(SEARCH_URL, params=params)

        if response.is_error:
            raise CatalogSearchError("Failed to fetch from SerpApi", status_code=response.status_code)

        match = match_from_payload(response.json())
        log.debug(f"🛒 '{ingredient}' -> '{match.title}'")
        return match
