"""Catalogue search agent for free-text (and image-assisted) queries."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from aurafit_app.logging_config import get_logger, log_event, operation_context
from logic.product_matcher import match_query
from models.product import Product
from models.results import NO_SUGGESTIONS_EXPLANATION, SearchResult

logger = get_logger(__name__)


class CatalogSearchAgent:
    """Keyword search over the static catalogue. Never raises."""

    def __init__(self, catalog: Sequence[Product]) -> None:
        self.catalog = list(catalog)

    def search_catalog(self, query: Optional[str], images: Sequence[str] = ()) -> SearchResult:
        with operation_context("agent:catalog_search.search_catalog") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="catalog_search",
                method="search_catalog",
                correlation_id=correlation_id,
                query=query,
                image_count=len(images),
            )
            if not self.catalog:
                logger.warning("Catalogue is empty", extra={"reason": "empty_catalog"})
                result = SearchResult(explanation=NO_SUGGESTIONS_EXPLANATION)
            else:
                try:
                    result = match_query(query, self.catalog, has_images=bool(images))
                except Exception:  # noqa: BLE001
                    logger.exception("Catalogue search failed", extra={"reason": "unexpected_error"})
                    result = SearchResult(explanation=NO_SUGGESTIONS_EXPLANATION)

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="catalog_search",
                method="search_catalog",
                correlation_id=correlation_id,
                product_count=len(result.products),
                suggestion_count=len(result.suggestions),
            )
            return result


__all__ = ["CatalogSearchAgent"]
