"""Sequential keyword narrowing of the static catalogue.

Matching never scores or re-orders: every step filters the previous list and
ties are broken by catalogue insertion order. Results are capped at five
products and three complementary suggestions.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from models.filters import FilterRecord, color_family
from models.lexicon import (
    COLOR_FAMILY_ALIASES,
    COLOR_TERMS,
    PRODUCT_TYPE_TOKENS,
    TONE_TERMS,
    contains_any,
    first_match,
    normalize_prompt,
)
from models.product import Product
from models.results import MAX_PRODUCTS, MAX_SUGGESTIONS, NO_SUGGESTIONS_EXPLANATION, SearchResult

DEFAULT_IMAGE_TYPE = "saree"
FALLBACK_SLICE = 4
NO_MATCH_EXPLANATION = (
    "I couldn't find exact matches for your query, but here are some popular items you might like."
)

ProductFilter = Callable[[Product], bool]


def _name_has(product: Product, *tokens: str) -> bool:
    name = product.name.lower()
    return any(token in name for token in tokens)


def matches_type(product: Product, token: str) -> bool:
    """Equality on ``type`` or substring on ``name``."""

    return product.type == token or token in product.name.lower()


def _is_pastel(product: Product) -> bool:
    return "pastel" in product.color or "pastel" in product.description.lower()


def _narrow(products: List[Product], predicate: ProductFilter) -> List[Product]:
    """Apply ``predicate`` only when it leaves at least one product."""

    narrowed = [product for product in products if predicate(product)]
    return narrowed or products


# Theme rules for queries without an explicit product type.
THEME_RULES: Tuple[Tuple[Tuple[str, ...], ProductFilter, Optional[int], str], ...] = (
    (
        ("rainy day", "rain"),
        lambda p: p.category == "accessories" or _name_has(p, "shoes", "jacket"),
        3,
        "I've selected items that would be practical for rainy weather while maintaining style. "
        "These include accessories and footwear that can keep you dry and comfortable.",
    ),
    (
        TONE_TERMS,
        _is_pastel,
        None,
        "Based on your request for pastel colors, I've selected items with softer color palettes "
        "that match this aesthetic.",
    ),
    (
        ("formal", "office", "professional"),
        lambda p: _name_has(p, "suit", "shirt") or p.category == "men",
        4,
        "I've selected formal attire suitable for professional settings, including classic shirts "
        "and suits that project a polished appearance.",
    ),
    (
        ("casual", "everyday"),
        lambda p: _name_has(p, "shirt", "leggings", "backpack"),
        4,
        "For your casual style needs, I've selected comfortable everyday items that offer both "
        "practicality and style for regular wear.",
    ),
)


def _fallback_slice(catalog: Sequence[Product]) -> Tuple[List[Product], str]:
    return list(catalog[:FALLBACK_SLICE]), NO_MATCH_EXPLANATION


def _match_type(
    text: str, token: str, catalog: Sequence[Product], has_images: bool
) -> Tuple[List[Product], str]:
    products = [product for product in catalog if matches_type(product, token)]
    if not products:
        return _fallback_slice(catalog)

    wants_tone = contains_any(text, TONE_TERMS)
    if wants_tone:
        products = _narrow(products, _is_pastel)

    color = first_match(text, COLOR_TERMS)
    if has_images:
        similar = "similar" in text
        if color and similar:
            products = _narrow(products, lambda p: p.type == token and color in p.color)
        if wants_tone and token == DEFAULT_IMAGE_TYPE:
            explanation = (
                f"Based on the uploaded images of {color + ' ' if color else ''}sarees, I found these "
                "pastel-colored sarees that match your style preferences while offering a softer color palette."
            )
        elif similar:
            explanation = (
                f"I analyzed your uploaded images and found these similar {token}s"
                f"{' in ' + color if color else ''} that match your search criteria."
            )
        else:
            explanation = (
                f"Based on your uploaded images, I identified {token}s and found these products "
                "that match your style preferences."
            )
        return products, explanation

    if color:
        products = _narrow(products, lambda p: color in p.color or color in p.description.lower())
    descriptor = color or ("pastel" if wants_tone else "")
    return products, f"I found these {descriptor + ' ' if descriptor else ''}{token}s that match your search criteria."


def _match_keywords(query: str, text: str, catalog: Sequence[Product]) -> Tuple[List[Product], str]:
    keywords = [word for word in text.split() if len(word) > 2]
    products = [product for product in catalog if any(word in product.search_text() for word in keywords)]
    if not products:
        return _fallback_slice(catalog)
    return products, f'I found {len(products)} items that match your search for "{query.strip()}".'


def suggest_complements(products: Sequence[Product], catalog: Sequence[Product]) -> Tuple[List[Product], str]:
    """Complementary items for the first result, in catalogue order."""

    if not products:
        return [], ""
    primary = products[0]

    if primary.type == "saree":
        picks = [
            p
            for p in catalog
            if p.type in ("jewelry", "blouse", "sandals") or _name_has(p, "jewelry", "blouse", "heel")
        ]
        if not picks:
            picks = [
                p
                for p in catalog
                if p.type != primary.type and (primary.color in p.color or primary.color in p.description.lower())
            ]
        text = "Complete your saree look with these matching accessories:"
    elif primary.type == "shirt":
        picks = [
            p
            for p in catalog
            if p.type in ("pants", "watch", "shoes") or _name_has(p, "trouser", "watch", "shoes")
        ]
        if not picks:
            picks = [p for p in catalog if p.type != primary.type and p.category == "accessories"]
        text = "Complete your outfit with these stylish pieces:"
    elif primary.type == "dress":
        picks = [
            p
            for p in catalog
            if p.type in ("jewelry", "handbag", "sandals") or _name_has(p, "jewelry", "bag", "heel")
        ]
        text = "Enhance your look with these perfect accessories:"
    else:
        picks = [p for p in catalog if p.type != primary.type and p.category == primary.category]
        text = "You might also like these complementary items:"

    if not picks:
        picks = [p for p in catalog if p.type != primary.type]
        text = "Browse these popular items to complete your look:"
    return picks[:MAX_SUGGESTIONS], text


def _finalise(products: List[Product], explanation: str, catalog: Sequence[Product]) -> SearchResult:
    products = products[:MAX_PRODUCTS]
    suggestions, suggestion_text = suggest_complements(products, catalog)
    return SearchResult(
        products=products,
        suggestions=suggestions,
        explanation=explanation,
        suggestion_text=suggestion_text,
    )


def match_query(query: Optional[str], catalog: Sequence[Product], has_images: bool = False) -> SearchResult:
    """Search the catalogue for a free-text query. Never raises."""

    if not catalog:
        return SearchResult(explanation=NO_SUGGESTIONS_EXPLANATION)

    text = normalize_prompt(query)
    token = first_match(text, PRODUCT_TYPE_TOKENS)
    if token is None and has_images:
        token = DEFAULT_IMAGE_TYPE

    if token:
        products, explanation = _match_type(text, token, catalog, has_images)
        return _finalise(products, explanation, catalog)

    for keywords, predicate, limit, explanation in THEME_RULES:
        if contains_any(text, keywords):
            products = [product for product in catalog if predicate(product)]
            if limit is not None:
                products = products[:limit]
            if products:
                return _finalise(products, explanation, catalog)

    products, explanation = _match_keywords(query or "", text, catalog)
    return _finalise(products, explanation, catalog)


def dominant_kind(record: FilterRecord, catalog: Sequence[Product]) -> Optional[str]:
    """Highest-intensity filter kind the catalogue stocks; ties keep kind order."""

    best: Optional[str] = None
    best_intensity = -1.0
    for kind, attributes in record.items():
        if not any(matches_type(product, kind) for product in catalog):
            continue
        if attributes.intensity > best_intensity:
            best, best_intensity = kind, attributes.intensity
    return best


def match_filters(record: FilterRecord, catalog: Sequence[Product]) -> SearchResult:
    """Catalogue products for the dominant feature of a makeup look."""

    if not catalog:
        return SearchResult(explanation=NO_SUGGESTIONS_EXPLANATION)

    kind = dominant_kind(record, catalog)
    if kind is None:
        products, explanation = _fallback_slice(catalog)
        return _finalise(products, explanation, catalog)

    family = color_family(record[kind].color_hex)
    aliases = COLOR_FAMILY_ALIASES.get(family, (family,))
    products = [product for product in catalog if matches_type(product, kind)]
    narrowed = [product for product in products if any(alias in product.color for alias in aliases)]
    if narrowed:
        explanation = f"These {family} {kind} picks match the recommended look."
        products = narrowed
    else:
        explanation = f"These {kind} picks pair well with the recommended look."
    return _finalise(products, explanation, catalog)


def match(
    filters_or_query: FilterRecord | str | None,
    catalog: Sequence[Product],
    has_images: bool = False,
) -> SearchResult:
    """Dispatch to :func:`match_filters` or :func:`match_query`."""

    if isinstance(filters_or_query, FilterRecord):
        return match_filters(filters_or_query, catalog)
    return match_query(filters_or_query, catalog, has_images=has_images)


__all__ = [
    "DEFAULT_IMAGE_TYPE",
    "NO_MATCH_EXPLANATION",
    "THEME_RULES",
    "dominant_kind",
    "match",
    "match_filters",
    "match_query",
    "matches_type",
    "suggest_complements",
]
