"""End-to-end recommendation flow through the application object."""

import json

import pytest

from agents import makeup_advisor
from aurafit_app.app import AuraFitApp
from aurafit_app.config import AuraFitConfig
from models.results import NO_SUGGESTIONS_EXPLANATION
from tools.genai_provider import MockRecommendationProvider, OfflineRecommendationProvider, RecommendationProviderError

VALID_PAYLOAD = json.dumps(
    {
        "lipstick": {"color": "#D40000", "intensity": 0.9, "shade": "Classic Red"},
        "eyeshadow": {"color": "#4E4E4E", "intensity": 0.8, "shade": "Smoky Charcoal"},
        "blush": {"color": "#FF80AB", "intensity": 0.5, "shade": "Rosy Pink"},
        "lookDescription": "Classic red lip with a smoky eye.",
        "products": [{"name": "Ruby Woo", "brand": "MAC", "type": "lipstick"}],
    }
)


def _app(provider=None, catalog=None) -> AuraFitApp:
    return AuraFitApp(
        config=AuraFitConfig(genai_provider="offline"),
        provider=provider or MockRecommendationProvider(error=RecommendationProviderError("request_error")),
        catalog=catalog,
    )


def test_bridal_prompt_falls_back_when_service_fails() -> None:
    app = _app()
    result = app.get_recommendation("wedding makeup for the bride")

    assert result.occasion == "Bridal Makeup"
    assert result.source == "fallback"
    assert result.filters["lipstick"].color_hex == "#D2527F"
    assert 0 < len(result.products) <= 5
    assert len(result.suggestions) <= 3
    assert result.debug_summary["fallback_reason"] == "request_error"
    assert app.latest_recommendation() is result


def test_valid_payload_is_used_as_is() -> None:
    provider = MockRecommendationProvider(response_text=VALID_PAYLOAD)
    app = _app(provider)
    result = app.get_recommendation("red lip for a date night")

    assert result.source == "ai"
    assert result.explanation == "Classic red lip with a smoky eye."
    assert result.filters["eyeshadow"].shade == "Smoky Charcoal"
    assert result.debug_summary["suggested_products"][0]["name"] == "Ruby Woo"
    assert "Detected occasion:" in provider.calls[0]["prompt"]

    payload = result.to_dict()
    assert payload["filters"]["lipstick"]["colorHex"] == "#D40000"
    assert "debugSummary" not in payload
    assert payload["suggestionText"] == result.suggestion_text
    assert "imageUrl" in payload["products"][0] and "image_url" not in payload["products"][0]
    assert result.to_dict(include_debug=True)["debugSummary"]["fallbackReason"] is None


def test_empty_prompt_returns_empty_result_without_calling_service() -> None:
    provider = MockRecommendationProvider(response_text=VALID_PAYLOAD)
    result = _app(provider).get_recommendation("   ")

    assert provider.calls == []
    assert result.source == "empty"
    assert result.products == []
    assert result.explanation == NO_SUGGESTIONS_EXPLANATION
    assert {"lipstick", "eyeshadow", "blush"} <= set(result.filters.kinds())


def test_empty_catalog_returns_empty_result() -> None:
    result = _app(catalog=[]).get_recommendation("party glam")
    assert result.source == "empty"
    assert result.occasion == "Party Makeup"
    assert result.products == [] and result.suggestions == []


def test_non_provider_errors_from_the_service_still_fall_back() -> None:
    provider = MockRecommendationProvider(error=ConnectionError("network down"))
    result = _app(provider).get_recommendation("wedding makeup for the bride")

    assert result.source == "fallback"
    assert result.filters["lipstick"].color_hex == "#D2527F"
    assert result.products
    assert result.debug_summary["fallback_reason"] == "ConnectionError"


def test_pipeline_bug_returns_empty_result(monkeypatch) -> None:
    def broken_match(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(makeup_advisor, "match_filters", broken_match)
    result = _app().get_recommendation("party glam")

    assert result.source == "empty"
    assert result.explanation == NO_SUGGESTIONS_EXPLANATION


def test_try_on_paints_the_record() -> None:
    app = _app()
    result = app.try_on("night out with a smoky eye")

    assert app.renderer.applied_kinds() == list(result.filters.kinds())
    assert result.filters["eyeshadow"].style == "smoky"


def test_cart_through_app() -> None:
    app = _app()
    item = app.add_to_cart("fashion-011", size="Free Size", quantity=2)

    assert item.quantity == 2
    assert app.cart.item_count == 2
    with pytest.raises(KeyError):
        app.add_to_cart("does-not-exist")


def test_offline_config_builds_offline_provider() -> None:
    app = AuraFitApp(config=AuraFitConfig(genai_provider="offline"))
    assert isinstance(app.provider, OfflineRecommendationProvider)

    result = app.get_recommendation("cocktail party")
    assert result.source == "fallback"
    assert result.filters["lipstick"].color_hex == "#B22222"


def test_search_through_app() -> None:
    app = _app()
    result = app.search_catalog("pastel sarees for summer")

    assert [product.product_id for product in result.products] == ["fashion-012", "fashion-013", "fashion-014"]
    assert app.latest_search() is result


def test_invalid_provider_request_falls_back() -> None:
    provider = MockRecommendationProvider(response_text=VALID_PAYLOAD)
    result = _app(provider).get_recommendation("party glam", images=[123])

    assert provider.calls == []
    assert result.source == "fallback"
    assert result.debug_summary["fallback_reason"] == "invalid_request"
