"""
Reduce an ingredient name to its core singular noun(s).

Tokens are tagged with a small cooking lexicon: descriptors (size, freshness,
preparation, cut, quality, colour) and participle/adverb shaped words count as
adjectives, articles/prepositions/conjunctions are dropped, everything else is
treated as a noun and singularized with ``inflect``.
"""

import logging
import re
from typing import List

import inflect

from ..core.errors import InvalidIngredientError

log = logging.getLogger(__name__)

_INFLECT_ENGINE = inflect.engine()

SIZE_DESCRIPTORS = {
    "small", "medium", "large", "big", "jumbo", "mini", "tiny", "thick", "thin",
    "extra", "heaping", "generous", "scant",
}

FRESHNESS_DESCRIPTORS = {
    "fresh", "raw", "frozen", "canned", "dried", "dry", "ripe", "overripe",
    "warm", "cold", "hot", "cool", "room", "soft", "softened", "firm", "hard",
    "stale", "leftover", "instant",
}

PREPARATION_DESCRIPTORS = {
    "chopped", "diced", "minced", "sliced", "shredded", "grated", "crushed",
    "cubed", "ground", "beaten", "melted", "peeled", "pitted", "seeded",
    "rinsed", "drained", "cooked", "uncooked", "roasted", "toasted",
    "prepared", "packed", "sifted", "halved", "quartered", "trimmed",
    "cut", "torn", "julienned", "zested", "juiced", "whole", "fine", "coarse",
    "finely", "coarsely", "roughly", "thinly", "freshly", "lightly",
}

QUALITY_DESCRIPTORS = {
    "organic", "lean", "boneless", "skinless", "virgin", "pure", "plain",
    "unsalted", "salted", "sweetened", "unsweetened", "low", "fat", "reduced",
    "light", "heavy", "sharp", "mild", "good", "quality", "premium",
    "homemade", "store", "bought", "optional", "favorite", "kosher", "sweet",
}

COLOUR_DESCRIPTORS = {
    "red", "green", "yellow", "white", "black", "brown", "golden", "orange",
    "purple", "dark",
}

ADJECTIVES = (
    SIZE_DESCRIPTORS
    | FRESHNESS_DESCRIPTORS
    | PREPARATION_DESCRIPTORS
    | QUALITY_DESCRIPTORS
    | COLOUR_DESCRIPTORS
)

FUNCTION_WORDS = {
    "a", "an", "the", "of", "and", "or", "to", "for", "with", "without", "in",
    "into", "on", "at", "from", "about", "plus", "more", "as", "if", "such",
    "each", "per", "some", "any", "your", "you", "like", "then", "other",
}

# Words that look like participles or adverbs but are foods.
NOUN_WHITELIST = {
    "seed", "seeds", "bread", "shred", "jelly", "belly", "chili", "tofu",
}

# Mass or -s final nouns that should never be singularized.
UNCOUNTABLE = {
    "molasses", "hummus", "asparagus", "couscous", "swiss", "grits", "citrus",
    "octopus", "lotus", "schnapps", "series", "species", "brussels", "oats",
}

SINGULAR_OVERRIDES = {
    "olives": "olive",
    "chilies": "chili",
    "slice": "slice",
    "ramen": "ramen",
}

USAGE_PHRASES = re.compile(
    r"\b(to taste|as needed|for garnish|for serving|for topping|for greasing|if desired|optional)\b"
)

_ALPHA_TOKEN = re.compile(r"^[a-z][a-z'\-]*$")


def _is_adjective(token: str) -> bool:
    if token in NOUN_WHITELIST:
        return False
    if token in ADJECTIVES:
        return True
    if len(token) > 4 and token.endswith("ed") and not token.endswith("eed"):
        return True
    return len(token) > 4 and token.endswith("ly")


def singularize(word: str) -> str:
    """Return the singular form of a noun, or the word itself if already singular."""
    if word in UNCOUNTABLE or word.endswith("ss"):
        return word
    if word in SINGULAR_OVERRIDES:
        return SINGULAR_OVERRIDES[word]
    singular = _INFLECT_ENGINE.singular_noun(word)
    return singular or word


def reduce_to_core_noun(name: str) -> str:
    """Strip adjectives from a name and singularize what is left.

    The input is expected to already be matching-normalized (lower-case,
    comma clause and parentheticals removed). Numeric and unit-looking tokens
    are kept so a later pass can trim them. If nothing survives, the trimmed
    input is returned unchanged.

    >>> reduce_to_core_noun("shredded cheddar cheese")
    'cheddar cheese'
    >>> reduce_to_core_noun("large eggs")
    'egg'
    """
    if not isinstance(name, str):
        raise InvalidIngredientError(
            f"Ingredient name must be a string, got {type(name).__name__}"
        )

    original = name.strip()
    text = USAGE_PHRASES.sub(" ", original.lower())

    nouns: List[str] = []
    for token in text.split():
        if not _ALPHA_TOKEN.match(token):
            nouns.append(token)
            continue
        if token in FUNCTION_WORDS or _is_adjective(token):
            continue
        nouns.append(singularize(token))

    reduced = " ".join(nouns).strip()
    if not reduced:
        log.debug(f"Noun reduction emptied '{original}', keeping it as-is")
        return original
    return reduced
