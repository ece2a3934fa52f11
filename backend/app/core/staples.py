"""Staple vocabulary and the containment rule that decides what is already on hand."""

import logging
from typing import Iterable, Optional, Tuple

from ..services.ingredient_parser import normalize_for_staples
from .config import DEFAULT_STAPLE_INGREDIENTS

log = logging.getLogger(__name__)


class StapleVocabulary:
    """Ordered, immutable set of ingredient names assumed to be on hand."""

    def __init__(self, entries: Iterable[str]):
        seen = []
        for entry in entries:
            if not normalize_for_staples(entry):
                raise ValueError(f"Staple entry {entry!r} is empty after normalization")
            if entry not in seen:
                seen.append(entry)
        self._entries: Tuple[str, ...] = tuple(seen)
        self._normalized: Tuple[str, ...] = tuple(normalize_for_staples(e) for e in seen)

    @classmethod
    def default(cls) -> "StapleVocabulary":
        return cls(DEFAULT_STAPLE_INGREDIENTS)

    @property
    def entries(self) -> Tuple[str, ...]:
        return self._entries

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item) -> bool:
        return item in self._entries

    def __repr__(self) -> str:
        return f"StapleVocabulary({list(self._entries)!r})"

    def find_match(self, name: str) -> Optional[str]:
        """Return the first entry that contains or is contained by ``name``.

        Both sides are compared in their staple-normalized form.
        """
        candidate = normalize_for_staples(name)
        for entry, normalized in zip(self._entries, self._normalized):
            if normalized in candidate or candidate in normalized:
                return entry
        return None


def is_staple(name: str, vocabulary: StapleVocabulary) -> bool:
    entry = vocabulary.find_match(name)
    if entry is not None:
        log.debug(f"'{name}' is a staple (matched '{entry}')")
        return True
    return False
