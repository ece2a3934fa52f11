from types import SimpleNamespace

import httpx
import pytest

from backend.app.core.errors import CatalogSearchError, RecipeFetchError
from backend.app.models.recipe import CatalogMatch, RecipeData


class FakeCompletions:
    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    """Stands in for AsyncOpenAI; only chat.completions.create is used."""

    def __init__(self, reply="", error=None):
        self.completions = FakeCompletions(reply, error)
        self.chat = SimpleNamespace(completions=self.completions)


class FakeRecipeSource:
    def __init__(self, recipe=None, fail=False):
        self.recipe = recipe
        self.fail = fail
        self.urls = []

    async def fetch(self, url):
        self.urls.append(url)
        if self.fail:
            raise RecipeFetchError("Failed to fetch recipe.")
        return self.recipe


class FakeCatalog:
    def __init__(self, api_key="serp-key", failing=()):
        self.api_key = api_key
        self.failing = set(failing)
        self.queries = []

    async def search(self, ingredient):
        self.queries.append(ingredient)
        if ingredient in self.failing:
            raise CatalogSearchError("Failed to fetch from SerpApi", status_code=500)
        return CatalogMatch(
            title=f"TJ's {ingredient}",
            link=f"https://www.traderjoes.com/{ingredient.replace(' ', '-')}",
            thumbnail=None,
            price="$1.99",
        )


@pytest.fixture
def fake_openai():
    return FakeOpenAI


@pytest.fixture
def fake_catalog():
    return FakeCatalog


@pytest.fixture
def fake_recipe_source():
    return FakeRecipeSource


@pytest.fixture
def sample_recipe():
    return RecipeData(
        title="Cheesy Egg Bake",
        image="https://img.example.com/bake.jpg",
        ingredient_lines=[
            "2 cups shredded cheddar cheese",
            "1 tsp salt",
            "3 large eggs, beaten",
            "1 lb ground beef",
            "2 carrots, peeled",
            "1 onion, diced",
            "1 cup rice",
            "4 chicken thighs (about 2 lbs)",
            "2 tsp kosher salt",
        ],
        instructions="Brown the beef. Mix everything and bake.",
    )


@pytest.fixture
def mock_client():
    """Build an httpx.AsyncClient whose requests are answered by ``handler``."""

    def build(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return build
