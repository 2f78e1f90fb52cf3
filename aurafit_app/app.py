"""Composition root wiring providers, agents, state and the AR renderer."""

import logging
from typing import Dict, List, Optional, Sequence

from agents.catalog_search import CatalogSearchAgent
from agents.makeup_advisor import MakeupAdvisorAgent
from aurafit_app.config import AuraFitConfig
from aurafit_app.logging_config import configure_logging, get_logger, log_event, operation_context
from memory.cart import Cart, CartItem
from memory.result_state import RECOMMENDATION_CHANNEL, SEARCH_CHANNEL, LatestResultTracker
from models.catalog import load_catalog
from models.product import Product
from models.results import RecommendationResult, SearchResult
from tools.genai_provider import (
    GeminiRecommendationProvider,
    HttpRecommendationProvider,
    OfflineRecommendationProvider,
    RecommendationProvider,
)
from tools.makeup_renderer import MakeupRenderer, RecordingRenderer

LOGGER = get_logger(__name__)


class AuraFitApp:
    """Owns every pipeline collaborator; nothing lives in module globals."""

    def __init__(
        self,
        config: AuraFitConfig | None = None,
        provider: RecommendationProvider | None = None,
        renderer: MakeupRenderer | None = None,
        catalog: Sequence[Product] | None = None,
    ) -> None:
        self.config = config or AuraFitConfig.from_env()
        configure_logging()

        self.catalog: List[Product] = list(catalog) if catalog is not None else load_catalog(self.config.catalog_path)
        self._products_by_id: Dict[str, Product] = {product.product_id: product for product in self.catalog}
        self.provider = provider or self._build_provider()
        self.renderer = renderer or RecordingRenderer()

        self.makeup_advisor = MakeupAdvisorAgent(config=self.config, provider=self.provider, catalog=self.catalog)
        self.catalog_search = CatalogSearchAgent(catalog=self.catalog)
        self.results = LatestResultTracker()
        self.cart = Cart()

    def _build_provider(self) -> RecommendationProvider:
        if self.config.genai_provider == "offline":
            return OfflineRecommendationProvider()
        if self.config.genai_provider == "http":
            return HttpRecommendationProvider(
                endpoint=self.config.genai_endpoint,
                api_key=self.config.api_key,
                timeout_seconds=self.config.request_timeout_seconds,
                max_retries=self.config.max_retries,
            )
        return GeminiRecommendationProvider(
            api_key=self.config.api_key,
            model=self.config.model,
            timeout_seconds=self.config.request_timeout_seconds,
            max_retries=self.config.max_retries,
        )

    def get_recommendation(self, prompt: Optional[str], images: Sequence[str] = ()) -> RecommendationResult:
        token = self.results.begin(RECOMMENDATION_CHANNEL)
        result = self.makeup_advisor.get_recommendation(prompt, images)
        self.results.commit(RECOMMENDATION_CHANNEL, token, result)
        return result

    def search_catalog(self, query: Optional[str], images: Sequence[str] = ()) -> SearchResult:
        token = self.results.begin(SEARCH_CHANNEL)
        result = self.catalog_search.search_catalog(query, images)
        self.results.commit(SEARCH_CHANNEL, token, result)
        return result

    def latest_recommendation(self) -> Optional[RecommendationResult]:
        return self.results.latest(RECOMMENDATION_CHANNEL)

    def latest_search(self) -> Optional[SearchResult]:
        return self.results.latest(SEARCH_CHANNEL)

    def try_on(self, prompt: Optional[str], images: Sequence[str] = ()) -> RecommendationResult:
        """Recommend a look and paint it, unless a newer request has started meanwhile."""

        with operation_context("app:try_on") as correlation_id:
            token = self.results.begin(RECOMMENDATION_CHANNEL)
            result = self.makeup_advisor.get_recommendation(prompt, images)
            applied = self.results.commit(RECOMMENDATION_CHANNEL, token, result)
            if applied:
                self.renderer.apply_record(result.filters)
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                agent="app",
                method="try_on",
                correlation_id=correlation_id,
                applied=applied,
                renderer_ready=self.renderer.readiness.is_ready,
            )
            return result

    def product(self, product_id: str) -> Product:
        try:
            return self._products_by_id[product_id]
        except KeyError:
            raise KeyError(f"Unknown product id {product_id!r}") from None

    def add_to_cart(self, product_id: str, size: Optional[str] = None, quantity: int = 1) -> CartItem:
        return self.cart.add(self.product(product_id), size=size, quantity=quantity)


__all__ = ["AuraFitApp"]
