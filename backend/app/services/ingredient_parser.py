"""
Regex splitting of free-text ingredient lines into quantity, unit and name.

Two normalizers live here and they are intentionally separate:
``normalize_for_matching`` produces the name that gets searched in the
catalog, ``normalize_for_staples`` produces the key compared against the
staple vocabulary.
"""

import re
from typing import List

from ..core.errors import InvalidIngredientError
from ..models.recipe import ParsedIngredient

UNIT_KEYWORDS = frozenset(
    {
        "cup", "cups",
        "tablespoon", "tablespoons", "tbsp",
        "teaspoon", "teaspoons", "tsp",
        "pound", "pounds", "lb", "lbs",
        "ounce", "ounces", "oz",
        "gram", "grams", "g",
        "ml",
        "liter", "liters", "l",
    }
)

STAPLE_STOP_WORDS = (
    "of", "into", "small", "large", "fresh", "cut", "shredded",
    "cubed", "diced", "and", "or", "a", "an", "the",
)

_LINE_PATTERN = re.compile(
    r"^\s*([0-9¼½¾.\-/\s]+)?\s*"
    r"(cups?|tablespoons?|tbsp|teaspoons?|tsp|pounds?|lbs?|oz|ounces?|grams?|g|ml|liters?|l)?"
    r"\s+(.*)$",
    re.IGNORECASE,
)
_NUMERIC_TOKEN = re.compile(r"^[0-9/¼½¾.\-]+$")
_TRAILING_CLAUSE = re.compile(r",.*$")
_PARENTHETICAL = re.compile(r"\(.*?\)")
_NON_LETTER = re.compile(r"[^a-z\s]")
_STOP_WORD = re.compile(r"\b(" + "|".join(STAPLE_STOP_WORDS) + r")\b")
_WHITESPACE = re.compile(r"\s+")
_TITLE_WORD = re.compile(r"\w\S*")


def _require_text(value) -> str:
    if not isinstance(value, str):
        raise InvalidIngredientError(
            f"Ingredient text must be a string, got {type(value).__name__}"
        )
    return value


def normalize_for_matching(text: str) -> str:
    """Lower-case and drop trailing comma clauses and parenthetical asides.

    >>> normalize_for_matching("Cheddar Cheese, shredded (about 2 cups)")
    'cheddar cheese'
    """
    text = _require_text(text).lower()
    text = _TRAILING_CLAUSE.sub("", text)
    text = _PARENTHETICAL.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def normalize_for_staples(text: str) -> str:
    """Reduce text to bare letters and spaces without stop-words.

    Hyphens become spaces, everything outside ``a-z`` and whitespace is
    removed.

    >>> normalize_for_staples("All-Purpose Flour")
    'all purpose flour'
    >>> normalize_for_staples("3 large eggs")
    'eggs'
    """
    text = _require_text(text).lower().replace("-", " ")
    text = _NON_LETTER.sub("", text)
    text = _STOP_WORD.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def split_ingredient(raw: str) -> ParsedIngredient:
    """Split a raw ingredient line into quantity, unit and name.

    The name is returned in its matching-normalized form. When the line has
    no recognizable quantity/unit prefix, the whole line is the name. If
    normalization empties the name (a bare parenthetical such as
    ``"2 cups (about 500 g)"``) the uncleaned name is kept instead.
    """
    raw = _require_text(raw)
    match = _LINE_PATTERN.match(raw)
    raw_name = (match.group(3).strip() if match else "") or raw.strip()
    quantity = (match.group(1) or "").strip() if match else ""
    unit = (match.group(2) or "").strip() if match else ""
    return ParsedIngredient(
        quantity=quantity, unit=unit, name=normalize_for_matching(raw_name) or raw_name
    )


def strip_leading_quantity_tokens(name: str) -> str:
    """Drop leftover quantity or unit tokens from the front of a name.

    Stops at the first token that is neither numeric nor a unit word. If every
    token is dropped the name is returned unchanged.
    """
    parts: List[str] = _require_text(name).split()
    while parts:
        token = parts[0].lower().rstrip(".")
        if _NUMERIC_TOKEN.match(parts[0]) or token in UNIT_KEYWORDS:
            parts.pop(0)
        else:
            break
    return " ".join(parts) or name


def to_title_case(text: str) -> str:
    """Capitalize each whitespace-delimited run, lower-casing the rest.

    Unlike ``str.title`` the letters after a hyphen stay lower-case.

    >>> to_title_case("all-purpose flour")
    'All-purpose Flour'
    """
    return _TITLE_WORD.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)
