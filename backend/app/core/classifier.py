"""Raw ingredient lines to staples and notable ingredients."""

import logging
from typing import Iterable, List

from ..models.recipe import ClassificationResult, ParsedIngredient, StapleEntry
from ..services.ingredient_parser import (
    split_ingredient,
    strip_leading_quantity_tokens,
    to_title_case,
)
from ..services.noun_reducer import reduce_to_core_noun
from .errors import InvalidIngredientError
from .staples import StapleVocabulary, is_staple

log = logging.getLogger(__name__)


def parse_ingredient_line(raw: str) -> ParsedIngredient:
    """Run one raw line through splitting, noun reduction and token scavenging."""
    parsed = split_ingredient(raw)
    core = strip_leading_quantity_tokens(reduce_to_core_noun(parsed.name)) or parsed.name
    return parsed.model_copy(update={"name": core})


def classify_ingredients(
    raw_lines: Iterable[str], vocabulary: StapleVocabulary
) -> ClassificationResult:
    """Split raw ingredient lines into staples and notable ingredients.

    Order of the input is preserved in both lists. Staples are de-duplicated
    by their title-cased name, keeping the first quantity seen.
    """
    if raw_lines is None:
        raise InvalidIngredientError("Ingredient lines must be a list of strings, got None")

    staples: List[StapleEntry] = []
    notable: List[ParsedIngredient] = []
    seen_staples = set()

    for raw in raw_lines:
        parsed = parse_ingredient_line(raw)
        if is_staple(parsed.name, vocabulary):
            title = to_title_case(parsed.name)
            if title not in seen_staples:
                seen_staples.add(title)
                staples.append(StapleEntry(name=title, quantity=parsed.display_quantity))
            continue
        notable.append(parsed)

    log.info(f"Classified {len(staples)} staples and {len(notable)} notable ingredients")
    return ClassificationResult(staples=staples, notable=notable)
