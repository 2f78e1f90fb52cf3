"""End-to-end evaluation scenarios for the recommendation pipeline."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tools.genai_provider import RecommendationProviderError


@dataclass
class EvaluationScenario:
    name: str
    description: str
    entry_point: str
    prompt: str
    images: List[str] = field(default_factory=list)
    provider_response: Optional[str] = None
    provider_error: Optional[Exception] = None
    expectations: Dict[str, object] = field(default_factory=dict)


_PAYLOAD_WITHOUT_BLUSH = json.dumps(
    {
        "lipstick": {"color": "#AA3355", "intensity": 0.7, "shade": "Berry Kiss"},
        "eyeshadow": {"color": "#886644", "intensity": 0.5, "shade": "Warm Taupe"},
        "lookDescription": "A look that is missing its blush entry.",
    }
)


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="bridal_prompt_with_failed_service",
        description="Bridal prompt while the generative service is unreachable falls back to the wedding look.",
        entry_point="recommendation",
        prompt="wedding makeup for the bride",
        provider_error=RecommendationProviderError("request_error"),
        expectations={
            "occasion": "Bridal Makeup",
            "source": "fallback",
            "lipstick_hex": "#D2527F",
        },
    ),
    EvaluationScenario(
        name="pastel_saree_search",
        description="Text search for pastel sarees returns only pastel saree entries.",
        entry_point="search",
        prompt="pastel sarees for summer",
        expectations={
            "product_type": "saree",
            "color_contains": "pastel",
            "max_products": 5,
        },
    ),
    EvaluationScenario(
        name="payload_missing_blush",
        description="A payload without blush is rejected entirely and replaced by the fallback look.",
        entry_point="recommendation",
        prompt="natural everyday makeup",
        provider_response=_PAYLOAD_WITHOUT_BLUSH,
        expectations={
            "source": "fallback",
            "lipstick_hex": "#F8C8DC",
            "required_kinds": ["lipstick", "eyeshadow", "blush"],
        },
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
