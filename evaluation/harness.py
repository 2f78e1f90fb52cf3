"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

from typing import Dict, List

from aurafit_app.app import AuraFitApp
from aurafit_app.config import AuraFitConfig
from evaluation.scenarios import EvaluationScenario, SCENARIOS
from models.results import RecommendationResult, SearchResult
from tools.genai_provider import MockRecommendationProvider


def _evaluate_recommendation(expectations: Dict[str, object], result: RecommendationResult) -> Dict[str, bool]:
    checks: Dict[str, bool] = {}
    if "occasion" in expectations:
        checks["occasion"] = result.occasion == expectations["occasion"]
    if "source" in expectations:
        checks["source"] = result.source == expectations["source"]
    if "lipstick_hex" in expectations:
        checks["lipstick_hex"] = result.filters["lipstick"].color_hex == expectations["lipstick_hex"]
    for kind in expectations.get("required_kinds", []):
        checks[f"has_{kind}"] = kind in result.filters
    checks["max_products"] = len(result.products) <= 5 and len(result.suggestions) <= 3
    return checks


def _evaluate_search(expectations: Dict[str, object], result: SearchResult) -> Dict[str, bool]:
    checks: Dict[str, bool] = {"non_empty": bool(result.products)}
    product_type = expectations.get("product_type")
    if product_type:
        checks["product_type"] = all(
            product.type == product_type or str(product_type) in product.name.lower() for product in result.products
        )
    color = expectations.get("color_contains")
    if color:
        checks["color_contains"] = all(str(color) in product.color for product in result.products)
    checks["max_products"] = len(result.products) <= int(expectations.get("max_products", 5))
    return checks


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    provider = MockRecommendationProvider(response_text=scenario.provider_response, error=scenario.provider_error)
    app = AuraFitApp(config=AuraFitConfig(genai_provider="offline"), provider=provider)

    if scenario.entry_point == "search":
        search_result = app.search_catalog(scenario.prompt, scenario.images)
        checks = _evaluate_search(scenario.expectations, search_result)
        response = search_result.to_dict()
        product_count = len(search_result.products)
    else:
        recommendation = app.get_recommendation(scenario.prompt, scenario.images)
        checks = _evaluate_recommendation(scenario.expectations, recommendation)
        response = recommendation.to_dict(include_debug=True)
        product_count = len(recommendation.products)

    return {
        "scenario": scenario.name,
        "passed": all(checks.values()),
        "checks": checks,
        "product_count": product_count,
        "response": response,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
