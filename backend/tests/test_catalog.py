import asyncio

import httpx
import pytest

from backend.app.core.errors import CatalogSearchError, MissingCredentialsError
from backend.app.core.staples import StapleVocabulary
from backend.app.models.recipe import CatalogMatch, ParsedIngredient
from backend.app.services.catalog import SerpApiCatalog, match_from_payload
from backend.app.services.converter import RecipeConverter

RICH_RESULT = {
    "organic_results": [
        {
            "title": "Unexpected Cheddar Cheese | Trader Joe's",
            "link": "https://www.traderjoes.com/home/products/pdp/unexpected-cheddar-cheese-048095",
            "thumbnail": "https://serpapi.com/thumb.png",
            "rich_snippet": {
                "top": {"detected_extensions": {"image": "https://tj.com/cheddar.jpg", "price": "$3.99"}}
            },
        },
        {"title": "Second result"},
    ]
}


def test_match_from_payload_prefers_rich_snippet():
    assert match_from_payload(RICH_RESULT) == CatalogMatch(
        title="Unexpected Cheddar Cheese | Trader Joe's",
        link="https://www.traderjoes.com/home/products/pdp/unexpected-cheddar-cheese-048095",
        thumbnail="https://tj.com/cheddar.jpg",
        price="$3.99",
    )


def test_match_from_payload_falls_back_to_thumbnail():
    payload = {"organic_results": [{"title": "Carrots", "link": "https://tj/carrots", "thumbnail": "https://t/1.png"}]}
    match = match_from_payload(payload)
    assert match.thumbnail == "https://t/1.png"
    assert match.price is None


@pytest.mark.parametrize("payload", [{}, {"organic_results": []}, {"organic_results": [{}]}])
def test_match_from_payload_without_results(payload):
    assert match_from_payload(payload) == CatalogMatch(title="No match found")


def test_search_sends_site_restricted_query(mock_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=RICH_RESULT)

    catalog = SerpApiCatalog("serp-key", site="traderjoes.com", client=mock_client(handler))
    match = asyncio.run(catalog.search("cheddar cheese"))

    assert match.price == "$3.99"
    assert seen[0].url.host == "serpapi.com"
    assert seen[0].url.params["q"] == "site:traderjoes.com cheddar cheese"
    assert seen[0].url.params["api_key"] == "serp-key"


def test_search_upstream_error_keeps_status(mock_client):
    catalog = SerpApiCatalog("serp-key", client=mock_client(lambda request: httpx.Response(429)))
    with pytest.raises(CatalogSearchError) as excinfo:
        asyncio.run(catalog.search("beef"))
    assert excinfo.value.status_code == 429


def test_search_without_key():
    with pytest.raises(MissingCredentialsError):
        asyncio.run(SerpApiCatalog("").search("beef"))


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "an", "object"],
        {"organic_results": ["oops"]},
        {"organic_results": "oops"},
        {"organic_results": [{"title": "Beef", "rich_snippet": {"top": ["odd"]}}]},
    ],
)
def test_match_from_payload_tolerates_odd_shapes(payload):
    match = match_from_payload(payload)
    assert match.thumbnail is None
    assert match.price is None


def test_odd_payload_does_not_abort_conversion(mock_client):
    def handler(request):
        if "beef" in request.url.params["q"]:
            return httpx.Response(200, json={"organic_results": ["oops"]})
        return httpx.Response(200, json=RICH_RESULT)

    catalog = SerpApiCatalog("serp-key", client=mock_client(handler))
    converter = RecipeConverter(None, catalog, None, StapleVocabulary.default())
    matched = asyncio.run(
        converter.match_all([ParsedIngredient(name="beef"), ParsedIngredient(name="cheddar cheese")])
    )

    assert matched[0].match_title == "No match found"
    assert matched[1].match_price == "$3.99"
