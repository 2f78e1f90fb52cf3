"""Keyword-rule occasion classifier for makeup prompts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from models.lexicon import contains_any, normalize_prompt

DEFAULT_OCCASION = "Custom Makeup Look"


@dataclass(frozen=True)
class OccasionRule:
    """A broad category with ordered sub-rules and an optional catch-all label."""

    triggers: Tuple[str, ...]
    sub_rules: Tuple[Tuple[Tuple[str, ...], str], ...]
    default_label: Optional[str] = None

    def resolve(self, text: str) -> Optional[str]:
        if not contains_any(text, self.triggers):
            return None
        for keywords, label in self.sub_rules:
            if contains_any(text, keywords):
                return label
        return self.default_label


# Order matters: the first rule that resolves wins. "bridesmaid" sits ahead of
# "bride" because the former contains the latter.
OCCASION_RULES: Tuple[OccasionRule, ...] = (
    OccasionRule(
        triggers=("wedding",),
        sub_rules=(
            (("bridesmaid",), "Bridesmaid Makeup"),
            (("bride", "my wedding"), "Bridal Makeup"),
            (("guest",), "Wedding Guest Makeup"),
        ),
        default_label="Wedding Makeup",
    ),
    OccasionRule(
        triggers=("party",),
        sub_rules=(
            (("birthday",), "Birthday Party"),
            (("cocktail",), "Cocktail Party"),
            (("holiday", "christmas", "new year"), "Holiday Party"),
        ),
        default_label="Party Makeup",
    ),
    OccasionRule(
        triggers=("night out", "evening"),
        sub_rules=(
            (("club", "dancing"), "Nightclub Makeup"),
            (("dinner",), "Dinner Makeup"),
            (("formal", "gala"), "Formal Evening Makeup"),
        ),
        default_label="Evening Makeup",
    ),
    OccasionRule(
        triggers=("date",),
        sub_rules=(
            (("first date",), "First Date Makeup"),
            (("romantic",), "Romantic Date Makeup"),
        ),
        default_label="Date Night Makeup",
    ),
    OccasionRule(
        triggers=("office", "work", "professional", "business"),
        sub_rules=(
            (("interview",), "Job Interview Makeup"),
            (("meeting", "presentation"), "Business Meeting Makeup"),
            (("corporate",), "Corporate Event Makeup"),
        ),
        default_label="Professional Makeup",
    ),
    OccasionRule(
        triggers=("natural", "everyday", "daily"),
        sub_rules=(
            (("no makeup", "no-makeup"), "No-Makeup Makeup Look"),
            (("fresh", "dewy"), "Fresh-Faced Makeup"),
        ),
        default_label="Natural Everyday Makeup",
    ),
    OccasionRule(
        triggers=("bold", "dramatic", "statement"),
        sub_rules=(
            (("goth",), "Gothic Makeup"),
            (("glamour", "glam"), "Glamour Makeup"),
            (("artistic", "creative"), "Creative Artistic Makeup"),
        ),
        default_label="Bold Statement Makeup",
    ),
    OccasionRule(
        triggers=("summer", "winter", "fall", "autumn", "spring"),
        sub_rules=(
            (("summer",), "Summer Makeup"),
            (("winter",), "Winter Makeup"),
            (("fall", "autumn"), "Fall Makeup"),
            (("spring",), "Spring Makeup"),
        ),
    ),
    OccasionRule(
        triggers=("festival", "concert", "photo", "graduation", "prom"),
        sub_rules=(
            (("festival", "concert"), "Festival Makeup"),
            (("photo",), "Photography Makeup"),
            (("graduation",), "Graduation Makeup"),
            (("prom",), "Prom Makeup"),
        ),
    ),
)

OCCASION_LABELS: FrozenSet[str] = frozenset(
    [DEFAULT_OCCASION]
    + [label for rule in OCCASION_RULES for _, label in rule.sub_rules]
    + [rule.default_label for rule in OCCASION_RULES if rule.default_label]
)


def classify(prompt: Optional[str]) -> str:
    """Map a free-text prompt to exactly one occasion label.

    Never raises; empty or unmatched prompts return ``"Custom Makeup Look"``.
    """

    text = normalize_prompt(prompt)
    if not text:
        return DEFAULT_OCCASION
    for rule in OCCASION_RULES:
        label = rule.resolve(text)
        if label:
            return label
    return DEFAULT_OCCASION


__all__ = ["DEFAULT_OCCASION", "OCCASION_LABELS", "OCCASION_RULES", "OccasionRule", "classify"]
