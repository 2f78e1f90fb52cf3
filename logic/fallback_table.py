"""Static fallback makeup looks used when no upstream recommendation is usable."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from models.filters import FilterAttributes, FilterRecord
from models.lexicon import contains_any, normalize_prompt

DEFAULT_BUCKET = "natural"

# (colour, intensity, shade) per feature
FALLBACK_LOOKS: Dict[str, Dict[str, Tuple[str, float, str]]] = {
    "wedding": {
        "lipstick": ("#D2527F", 0.8, "Bridal Rose"),
        "eyeshadow": ("#F4C2C2", 0.7, "Blush Pink Shimmer"),
        "blush": ("#E8A5A5", 0.6, "Soft Petal"),
        "highlighter": ("#F9E79F", 0.5, "Champagne Glow"),
    },
    "party": {
        "lipstick": ("#B22222", 0.9, "Crimson Night"),
        "eyeshadow": ("#4B0082", 0.8, "Indigo Smoke"),
        "blush": ("#FF6347", 0.7, "Tomato Flush"),
        "highlighter": ("#FFE5B4", 0.7, "Peach Glow"),
    },
    "natural": {
        "lipstick": ("#F8C8DC", 0.5, "Ballet Pink"),
        "eyeshadow": ("#F5DEB3", 0.4, "Wheat"),
        "blush": ("#FFB6C1", 0.4, "Light Pink"),
        "highlighter": ("#FFF8DC", 0.3, "Cornsilk Glow"),
    },
}

BUCKET_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("wedding", ("wedding", "bride", "bridal")),
    ("party", ("party", "night out", "evening", "club", "cocktail")),
    ("natural", ("natural",)),
)

LOOK_DESCRIPTIONS: Dict[str, str] = {
    "wedding": (
        "Elegant bridal makeup with soft pink tones, highlighted cheekbones, and subtle shimmer "
        "for a radiant glow that looks beautiful in photographs."
    ),
    "party": (
        "Glamorous evening makeup with dramatic smokey eyes, shimmer highlights, and long-lasting "
        "lip color perfect for parties and night events."
    ),
    "natural": (
        "Fresh, natural-looking makeup with subtle definition, light coverage, and a hint of color "
        "that enhances your features without looking overdone."
    ),
}


def fallback_bucket(text: Optional[str]) -> str:
    """Pick the coarse style bucket for a prompt or occasion label."""

    lowered = normalize_prompt(text)
    for bucket, keywords in BUCKET_KEYWORDS:
        if contains_any(lowered, keywords):
            return bucket
    return DEFAULT_BUCKET


def fallback_record(bucket: str) -> FilterRecord:
    """Build the deterministic record for ``bucket`` (unknown buckets use natural)."""

    look = FALLBACK_LOOKS.get(bucket, FALLBACK_LOOKS[DEFAULT_BUCKET])
    return FilterRecord(
        {
            kind: FilterAttributes(color_hex=color, intensity=intensity, shade=shade)
            for kind, (color, intensity, shade) in look.items()
        }
    )


def look_description(bucket: str) -> str:
    return LOOK_DESCRIPTIONS.get(bucket, LOOK_DESCRIPTIONS[DEFAULT_BUCKET])


__all__ = [
    "BUCKET_KEYWORDS",
    "DEFAULT_BUCKET",
    "FALLBACK_LOOKS",
    "LOOK_DESCRIPTIONS",
    "fallback_bucket",
    "fallback_record",
    "look_description",
]
