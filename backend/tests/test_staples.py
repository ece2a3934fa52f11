import pytest

from backend.app.core.config import DEFAULT_STAPLE_INGREDIENTS
from backend.app.core.staples import StapleVocabulary, is_staple
from backend.app.services.ingredient_parser import normalize_for_staples


@pytest.fixture
def vocabulary():
    return StapleVocabulary.default()


@pytest.mark.parametrize(
    "name, expected",
    [
        ("salt", True),
        ("egg", True),
        ("eggs", True),
        ("extra virgin olive oil", True),
        ("all-purpose flour", True),
        # short candidate contained in a longer entry
        ("flour", True),
        ("boiling water", True),
        ("cheddar cheese", False),
        ("chicken thigh", False),
        ("basmati rice", False),
        ("lemon", False),
        # accepted false positives of plain substring containment
        ("pepperoni", True),
        ("aluminum foil", True),
        ("eggplant", True),
    ],
)
def test_is_staple_with_default_vocabulary(vocabulary, name, expected):
    assert is_staple(name, vocabulary) is expected


def test_find_match_returns_first_entry_in_order(vocabulary):
    assert vocabulary.find_match("extra virgin olive oil") == "oil"
    assert vocabulary.find_match("cheddar cheese") is None


def test_custom_vocabulary_replaces_default():
    vocabulary = StapleVocabulary(["lemon"])
    assert is_staple("lemon zest", vocabulary)
    assert not is_staple("salt", vocabulary)


@pytest.mark.parametrize(
    "longer, shorter",
    [
        ("extra virgin olive oil", "olive oil"),
        ("eggs", "egg"),
        ("all-purpose flour", "flour"),
        ("Red Pepper Flakes", "red-pepper"),
    ],
)
def test_containment_is_symmetric(longer, shorter):
    assert normalize_for_staples(shorter) in normalize_for_staples(longer)
    assert is_staple(longer, StapleVocabulary([shorter]))
    assert is_staple(shorter, StapleVocabulary([longer]))


def test_default_vocabulary_keeps_configured_order():
    vocabulary = StapleVocabulary.default()
    assert vocabulary.entries == tuple(DEFAULT_STAPLE_INGREDIENTS)
    assert len(vocabulary) == 19
    assert "all-purpose flour" in vocabulary


def test_vocabulary_drops_duplicate_entries():
    vocabulary = StapleVocabulary(["salt", "pepper", "salt"])
    assert list(vocabulary) == ["salt", "pepper"]


@pytest.mark.parametrize("entry", ["", "the", "  - ", "123"])
def test_vocabulary_rejects_entries_that_normalize_to_nothing(entry):
    with pytest.raises(ValueError):
        StapleVocabulary(["salt", entry])
