"""Turn upstream payloads or plain prompts into a valid :class:`FilterRecord`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from logic.fallback_table import fallback_bucket, fallback_record, look_description
from logic.validation import (
    RecommendationPayload,
    SuggestedProductPayload,
    parse_recommendation_payload,
    validation_summary,
)
from models.filters import FilterAttributes, FilterRecord, shade_for
from models.lexicon import contains_any, normalize_prompt

LOGGER = logging.getLogger(__name__)

# (phrases, colour, intensity); first match per feature wins.
LIPSTICK_ACCENTS: Tuple[Tuple[Tuple[str, ...], str, float], ...] = (
    (("red lip", "bold lip"), "#D40000", 0.9),
    (("pink lip", "rose lip"), "#FF80AB", 0.7),
    (("nude lip", "neutral lip", "natural lip"), "#C17566", 0.6),
    (("coral lip",), "#FF8A65", 0.8),
    (("berry", "burgundy"), "#AD1457", 0.8),
)
EYESHADOW_ACCENTS: Tuple[Tuple[Tuple[str, ...], str, float], ...] = (
    (("smoky eye", "smokey eye", "dramatic eye"), "#4E4E4E", 0.85),
    (("natural eye", "neutral eye"), "#D2B48C", 0.5),
    (("gold eye", "bronze eye"), "#D4AF37", 0.7),
    (("pink eye", "rose eye"), "#E8B4B8", 0.6),
    (("blue eye",), "#6A84C3", 0.7),
    (("purple eye",), "#8B5FBF", 0.7),
)
BLUSH_ACCENTS: Tuple[Tuple[Tuple[str, ...], str, float], ...] = (
    (("rosy cheek", "pink cheek", "pink blush"), "#FF80AB", 0.6),
    (("peach", "coral cheek", "coral blush"), "#FFAB91", 0.5),
    (("bronze", "sun kissed"), "#CD853F", 0.5),
    (("natural blush", "natural cheek", "subtle blush"), "#EDBCB0", 0.4),
)
EYELINER_TRIGGERS: Tuple[str, ...] = ("cat eye", "winged", "dramatic", "eyeliner", "evening", "bold")
EYELINER_COLORS: Tuple[Tuple[str, str], ...] = (
    ("brown eyeliner", "#5D4037"),
    ("blue eyeliner", "#1A237E"),
    ("colored eyeliner", "#6A1B9A"),
)
DEFAULT_EYELINER = "#000000"
EYELINER_INTENSITY = 0.8


@dataclass
class SynthesisOutcome:
    """Chosen filters plus where they came from."""

    record: FilterRecord
    source: str
    look_description: str
    bucket: Optional[str] = None
    reason: Optional[str] = None
    suggested_products: List[SuggestedProductPayload] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)


def _accent(
    entries: Dict[str, FilterAttributes],
    kind: str,
    text: str,
    table: Tuple[Tuple[Tuple[str, ...], str, float], ...],
    style: Optional[str] = None,
) -> None:
    for phrases, color, intensity in table:
        if contains_any(text, phrases):
            entries[kind] = FilterAttributes(
                color_hex=color,
                intensity=intensity,
                shade=shade_for(kind, color),
                style=style or entries[kind].style,
            )
            return


def apply_prompt_accents(record: FilterRecord, prompt: Optional[str]) -> FilterRecord:
    """Recolour features the shopper named explicitly ("red lip", "smoky eye")."""

    text = normalize_prompt(prompt)
    if not text:
        return record

    entries: Dict[str, FilterAttributes] = dict(record.items())
    _accent(entries, "lipstick", text, LIPSTICK_ACCENTS)
    smoky = "smoky" if contains_any(text, ("smoky", "smokey")) else None
    _accent(entries, "eyeshadow", text, EYESHADOW_ACCENTS, style=smoky)
    _accent(entries, "blush", text, BLUSH_ACCENTS)

    if contains_any(text, EYELINER_TRIGGERS):
        color = DEFAULT_EYELINER
        for phrase, candidate in EYELINER_COLORS:
            if phrase in text:
                color = candidate
                break
        entries["eyeliner"] = FilterAttributes(
            color_hex=color,
            intensity=EYELINER_INTENSITY,
            shade=shade_for("eyeliner", color),
            style="winged" if contains_any(text, ("cat eye", "winged")) else "classic",
        )
    return FilterRecord(entries)


def fallback_outcome(prompt: Optional[str], occasion: Optional[str] = None, reason: Optional[str] = None) -> SynthesisOutcome:
    """Deterministic fallback: static bucket look plus prompt accents."""

    bucket = fallback_bucket(f"{occasion or ''} {prompt or ''}")
    record = apply_prompt_accents(fallback_record(bucket), prompt)
    return SynthesisOutcome(
        record=record,
        source="fallback",
        look_description=look_description(bucket),
        bucket=bucket,
        reason=reason,
    )


def from_payload(payload: RecommendationPayload | str | bytes | Dict[str, Any]) -> RecommendationPayload:
    """Validate an upstream payload; raises :class:`ValidationError` when unusable."""

    if isinstance(payload, RecommendationPayload):
        return payload
    return parse_recommendation_payload(payload)


def resolve_filters(
    prompt: Optional[str],
    payload: RecommendationPayload | str | bytes | Dict[str, Any] | None = None,
    occasion: Optional[str] = None,
) -> SynthesisOutcome:
    """Use the upstream payload when it validates completely, else the fallback table."""

    if payload is None:
        return fallback_outcome(prompt, occasion)

    try:
        parsed = from_payload(payload)
    except ValidationError as exc:
        errors = validation_summary(exc)
        LOGGER.warning("Upstream payload rejected", extra={"reason": "schema_validation", "errors": errors})
        outcome = fallback_outcome(prompt, occasion, reason="schema_validation")
        outcome.errors = errors
        return outcome

    description = (parsed.look_description or "").strip()
    if not description:
        description = look_description(fallback_bucket(f"{occasion or ''} {prompt or ''}"))
    return SynthesisOutcome(
        record=parsed.to_record(),
        source="ai",
        look_description=description,
        suggested_products=list(parsed.products),
    )


def synthesize(
    prompt_or_occasion: Optional[str],
    payload: RecommendationPayload | str | bytes | Dict[str, Any] | None = None,
) -> FilterRecord:
    """Always return a structurally valid :class:`FilterRecord`."""

    return resolve_filters(prompt_or_occasion, payload).record


__all__ = [
    "SynthesisOutcome",
    "apply_prompt_accents",
    "fallback_outcome",
    "from_payload",
    "resolve_filters",
    "synthesize",
]
