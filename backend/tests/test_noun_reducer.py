import pytest

from backend.app.core.errors import InvalidIngredientError
from backend.app.services.noun_reducer import reduce_to_core_noun, singularize


@pytest.mark.parametrize(
    "name, expected",
    [
        ("shredded cheddar cheese", "cheddar cheese"),
        ("large eggs", "egg"),
        ("extra virgin olive oil", "olive oil"),
        ("finely chopped onions", "onion"),
        ("boneless skinless chicken thighs", "chicken thigh"),
        ("ripe tomatoes", "tomato"),
        ("red bell peppers", "bell pepper"),
        ("salt to taste", "salt"),
        ("salt and pepper", "salt pepper"),
        ("kosher salt", "salt"),
        ("ground beef", "beef"),
        ("baking soda", "baking soda"),
        # numeric and unit tokens survive for the scavenging pass
        ("tbsp. unsalted butter", "tbsp. butter"),
        ("1/2 cup sugar", "1/2 cup sugar"),
    ],
)
def test_reduce_to_core_noun(name, expected):
    assert reduce_to_core_noun(name) == expected


@pytest.mark.parametrize("name", ["fresh", "diced and sliced", "  large  "])
def test_reduction_never_erases_everything(name):
    assert reduce_to_core_noun(name) == name.strip()


def test_empty_name_stays_empty():
    assert reduce_to_core_noun("") == ""


@pytest.mark.parametrize(
    "name",
    [
        "shredded cheddar cheese",
        "large eggs",
        "boneless skinless chicken thighs",
        "fresh",
        "tbsp. unsalted butter",
        "cloves garlic",
        "sweet potatoes",
    ],
)
def test_reduction_is_idempotent(name):
    once = reduce_to_core_noun(name)
    assert reduce_to_core_noun(once) == once


@pytest.mark.parametrize(
    "word, expected",
    [
        ("eggs", "egg"),
        ("cherries", "cherry"),
        ("olives", "olive"),
        ("egg", "egg"),
        ("cheese", "cheese"),
        ("hummus", "hummus"),
        ("molasses", "molasses"),
        ("swiss", "swiss"),
    ],
)
def test_singularize(word, expected):
    assert singularize(word) == expected


def test_none_name_is_rejected():
    with pytest.raises(InvalidIngredientError):
        reduce_to_core_noun(None)
