"""Result types returned by the recommendation and search pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.filters import FilterRecord
from models.product import Product

MAX_PRODUCTS = 5
MAX_SUGGESTIONS = 3
NO_SUGGESTIONS_EXPLANATION = "No suggestions available right now."


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _camel_keys(payload: Dict[str, Any]) -> Dict[str, Any]:
    """camelCase the top-level keys of a snake_case debug mapping."""

    return {_camel(key): value for key, value in payload.items()}


@dataclass
class SearchResult:
    """Catalogue matches for a free-text query."""

    products: List[Product] = field(default_factory=list)
    suggestions: List[Product] = field(default_factory=list)
    explanation: str = ""
    suggestion_text: str = ""

    def __post_init__(self) -> None:
        self.products = list(self.products)[:MAX_PRODUCTS]
        self.suggestions = list(self.suggestions)[:MAX_SUGGESTIONS]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "products": [product.to_dict() for product in self.products],
            "suggestions": [product.to_dict() for product in self.suggestions],
            "explanation": self.explanation,
            "suggestionText": self.suggestion_text,
        }


@dataclass
class RecommendationResult:
    """Filters plus matching products for one makeup request.

    Built fresh per request; ``source`` records whether the filters came from
    the generative service (``ai``), the static table (``fallback``) or the
    error path (``empty``).
    """

    filters: FilterRecord
    occasion: str
    explanation: str
    products: List[Product] = field(default_factory=list)
    suggestions: List[Product] = field(default_factory=list)
    suggestion_text: str = ""
    source: str = "fallback"
    debug_summary: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.products = list(self.products)[:MAX_PRODUCTS]
        self.suggestions = list(self.suggestions)[:MAX_SUGGESTIONS]

    def to_dict(self, include_debug: bool = False) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "filters": self.filters.to_dict(),
            "occasion": self.occasion,
            "products": [product.to_dict() for product in self.products],
            "suggestions": [product.to_dict() for product in self.suggestions],
            "suggestionText": self.suggestion_text,
            "explanation": self.explanation,
            "source": self.source,
        }
        if include_debug:
            payload["debugSummary"] = _camel_keys(self.debug_summary)
        return payload


__all__ = [
    "MAX_PRODUCTS",
    "MAX_SUGGESTIONS",
    "NO_SUGGESTIONS_EXPLANATION",
    "RecommendationResult",
    "SearchResult",
]
