"""Makeup advisor agent: prompt -> filters -> matching products."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from aurafit_app.config import AuraFitConfig
from aurafit_app.logging_config import get_logger, log_event, operation_context
from logic.fallback_table import DEFAULT_BUCKET, fallback_record
from logic.filter_synthesizer import SynthesisOutcome, fallback_outcome, resolve_filters
from logic.occasion_classifier import DEFAULT_OCCASION, classify
from logic.product_matcher import match_filters
from logic.prompts import build_makeup_prompt
from models.product import Product
from models.results import NO_SUGGESTIONS_EXPLANATION, RecommendationResult
from tools.genai_provider import RecommendationProvider, RecommendationProviderError, RecommendationRequest
from tools.observability import instrument_tool

logger = get_logger(__name__)


def _reject_request(exc: ValidationError) -> str:
    raise RecommendationProviderError("invalid_request", str(exc)) from exc


class MakeupAdvisorAgent:
    """Builds a makeup look for a prompt and never surfaces an error to the caller.

    Provider failures and malformed payloads are replaced by the fallback
    table; anything unexpected yields an empty result with a short explanation.
    """

    def __init__(
        self,
        config: AuraFitConfig,
        provider: RecommendationProvider,
        catalog: Sequence[Product],
    ) -> None:
        self.config = config
        self.provider = provider
        self.catalog = list(catalog)
        self._request = instrument_tool(
            "request_recommendation",
            input_model=RecommendationRequest,
            on_validation_error=_reject_request,
        )(provider.request_recommendation)

    def _empty_result(self, occasion: str, reason: str) -> RecommendationResult:
        return RecommendationResult(
            filters=fallback_record(DEFAULT_BUCKET),
            occasion=occasion,
            explanation=NO_SUGGESTIONS_EXPLANATION,
            source="empty",
            debug_summary={"reason": reason},
        )

    def _outcome(self, prompt: str, images: List[str], occasion: str) -> SynthesisOutcome:
        request_text = build_makeup_prompt(prompt, occasion)
        try:
            raw = self._request(prompt=request_text, images=images)
        except Exception as exc:  # noqa: BLE001
            # Every failure calling the service degrades to the fallback look.
            reason = getattr(exc, "reason", None) or type(exc).__name__
            logger.warning(
                "Using fallback makeup look",
                extra={"reason": reason, "provider": self.provider.name},
            )
            return fallback_outcome(prompt, occasion, reason=reason)
        return resolve_filters(prompt, raw, occasion)

    def get_recommendation(self, prompt: Optional[str], images: Sequence[str] = ()) -> RecommendationResult:
        """Return filters, up to five products and up to three suggestions."""

        with operation_context("agent:makeup_advisor.get_recommendation") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="makeup_advisor",
                method="get_recommendation",
                correlation_id=correlation_id,
                prompt=prompt,
                image_count=len(images),
            )
            try:
                result = self._recommend(prompt or "", list(images))
            except Exception:  # noqa: BLE001
                logger.exception("Recommendation pipeline failed", extra={"reason": "unexpected_error"})
                result = self._empty_result(DEFAULT_OCCASION, "unexpected_error")

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="makeup_advisor",
                method="get_recommendation",
                correlation_id=correlation_id,
                occasion=result.occasion,
                source=result.source,
                product_count=len(result.products),
            )
            return result

    def _recommend(self, prompt: str, images: List[str]) -> RecommendationResult:
        if not prompt.strip():
            logger.warning("Empty prompt; returning empty recommendation", extra={"reason": "empty_prompt"})
            return self._empty_result(DEFAULT_OCCASION, "empty_prompt")

        occasion = classify(prompt)
        if not self.catalog:
            logger.warning("Catalogue is empty; returning empty recommendation", extra={"reason": "empty_catalog"})
            return self._empty_result(occasion, "empty_catalog")

        outcome = self._outcome(prompt, images, occasion)
        matched = match_filters(outcome.record, self.catalog)
        return RecommendationResult(
            filters=outcome.record,
            occasion=occasion,
            explanation=outcome.look_description,
            products=matched.products,
            suggestions=matched.suggestions,
            suggestion_text=matched.suggestion_text,
            source=outcome.source,
            debug_summary={
                "bucket": outcome.bucket,
                "fallback_reason": outcome.reason,
                "validation_errors": outcome.errors,
                "suggested_products": [product.model_dump() for product in outcome.suggested_products],
                "match_explanation": matched.explanation,
            },
        )


__all__ = ["MakeupAdvisorAgent"]
