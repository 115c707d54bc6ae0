"""Shopping list categories.

A taxonomy is an ordered sequence of (category, name stems). An ingredient
belongs to the first category with a stem occurring in its name; the last
category is the fallback.
"""
from typing import Sequence, Tuple

from nutriplan.utilities.constants import DEFAULT_CATEGORY_TAXONOMY, FALLBACK_CATEGORY

Taxonomy = Sequence[Tuple[str, Sequence[str]]]


def category_names(taxonomy: Taxonomy = DEFAULT_CATEGORY_TAXONOMY) -> Tuple[str, ...]:
    return tuple(name for name, _ in taxonomy)


def categorize(name: str, taxonomy: Taxonomy = DEFAULT_CATEGORY_TAXONOMY) -> str:
    lowered = (name or "").lower()
    for category, stems in taxonomy:
        if any(stem in lowered for stem in stems):
            return category
    return taxonomy[-1][0] if taxonomy else FALLBACK_CATEGORY


__all__ = ["Taxonomy", "categorize", "category_names"]
