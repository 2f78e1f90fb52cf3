"""Canonical keyword tables used to interpret shopper prompts.

This module centralises the closed vocabularies the recommendation pipeline
matches against: makeup filter kinds, garment types, colour words and colour
families. Helper functions keep prompt matching consistent across the
classifier, the synthesizer and the product matcher.
"""

import re
from typing import Dict, Iterable, Optional, Sequence, Tuple

FILTER_KINDS: Tuple[str, ...] = (
    "lipstick",
    "eyeshadow",
    "eyeliner",
    "blush",
    "foundation",
    "highlighter",
    "contour",
)
REQUIRED_FILTER_KINDS: Tuple[str, ...] = ("lipstick", "eyeshadow", "blush")

GARMENT_TYPES: Tuple[str, ...] = (
    "shirt",
    "dress",
    "saree",
    "leggings",
    "suit",
    "shoes",
    "watch",
    "backpack",
    "lipstick",
)
PRODUCT_TYPE_TOKENS: Tuple[str, ...] = GARMENT_TYPES + tuple(
    kind for kind in FILTER_KINDS if kind not in GARMENT_TYPES
)

COLOR_TERMS: Tuple[str, ...] = (
    "pink",
    "blue",
    "green",
    "white",
    "black",
    "red",
    "yellow",
    "purple",
    "orange",
    "beige",
    "brown",
)
TONE_TERMS: Tuple[str, ...] = ("pastel", "light color")

# Colour families used when a filter hex has to be compared with catalogue
# colour words. Each family also accepts closely related product colours.
COLOR_FAMILY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "red": ("red", "berry", "wine"),
    "pink": ("pink", "rose", "berry"),
    "coral": ("coral", "peach", "orange"),
    "nude": ("nude", "beige", "peach"),
    "gold": ("gold", "bronze", "pearl"),
    "green": ("green",),
    "blue": ("blue", "navy"),
    "purple": ("purple", "plum"),
    "brown": ("brown", "bronze", "beige"),
    "black": ("black", "charcoal"),
    "white": ("white", "pearl"),
}


def normalize_prompt(prompt: Optional[str]) -> str:
    """Case-fold and trim free text for keyword matching."""

    return (prompt or "").strip().lower()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Return True when any keyword is a substring of ``text``."""

    return any(keyword in text for keyword in keywords)


def first_match(text: str, vocabulary: Sequence[str]) -> Optional[str]:
    """Return the first vocabulary entry named in ``text`` in table order.

    Only whole words count, plurals included: "suitable" does not name a suit,
    "sarees" and "dresses" name their singular.
    """

    for term in vocabulary:
        if re.search(rf"\b{re.escape(term)}(?:e?s)?\b", text):
            return term
    return None


__all__ = [
    "FILTER_KINDS",
    "REQUIRED_FILTER_KINDS",
    "GARMENT_TYPES",
    "PRODUCT_TYPE_TOKENS",
    "COLOR_TERMS",
    "TONE_TERMS",
    "COLOR_FAMILY_ALIASES",
    "normalize_prompt",
    "contains_any",
    "first_match",
]
