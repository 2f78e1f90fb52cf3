"""Prompt construction and guardrails for the generative makeup service."""

from __future__ import annotations

from typing import Dict, List, Tuple

from models.lexicon import contains_any, normalize_prompt

GUARDRAIL_BULLETS: List[str] = [
    "Stay within the AURAFIT beauty scope (makeup looks and matching products).",
    "Never describe or infer identity, age, health or other sensitive traits from images.",
    "Do not echo personal details from the request back in the response.",
    "Prefer wearable, widely available shades over speculative colours.",
    "Return structured JSON only; no prose outside the JSON object.",
]

OCCASION_GUIDANCE: Tuple[Tuple[str, Tuple[str, ...], List[str]], ...] = (
    (
        "WEDDING",
        ("wedding", "bride", "bridal"),
        [
            "Create a long-lasting look that photographs well",
            "Favour soft romantic tones with a luminous finish",
            "Keep colours cohesive with traditional bridal palettes",
        ],
    ),
    (
        "PARTY/NIGHT OUT",
        ("party", "night out", "evening", "club"),
        [
            "Recommend more dramatic colors and effects",
            "Focus on creating a statement look that will stand out",
            "Consider the longevity of the makeup for an extended evening",
            "Include shimmer or metallic options where appropriate",
        ],
    ),
    (
        "NATURAL/EVERYDAY",
        ("natural", "everyday"),
        [
            "Focus on enhancing natural features with subtle colors",
            "Recommend a light, fresh look that appears effortless",
            "Suggest buildable products that can be applied lightly",
        ],
    ),
    (
        "PROFESSIONAL SETTING",
        ("office", "work", "professional"),
        [
            "Create a polished look appropriate for work settings",
            "Focus on neutral colors that appear put-together but not distracting",
            "Recommend makeup that will last through a full workday",
        ],
    ),
)

RETURN_CONTRACT = """RETURN FORMAT:
Return JSON only, in this exact shape:
{
  "lipstick": {"shade": "Descriptive name", "color": "#RRGGBB", "intensity": 0.7, "finish": "matte|glossy|satin"},
  "eyeshadow": {"shade": "Descriptive name", "color": "#RRGGBB", "intensity": 0.6, "placement": "lid|crease|outer corner", "style": "optional"},
  "blush": {"shade": "Descriptive name", "color": "#RRGGBB", "intensity": 0.5, "placement": "apples|cheekbones"},
  "eyeliner": {"color": "#RRGGBB", "intensity": 0.8, "style": "classic|winged"},
  "highlighter": {"color": "#RRGGBB", "intensity": 0.5},
  "lookDescription": "2-3 sentences describing the look"
}
lipstick, eyeshadow and blush are required; other features are optional.
Colours must be 6-digit hex values and intensity a number between 0 and 1."""


def system_instruction(role_hint: str) -> str:
    """Compose a consistent system prompt with boundary reminders."""

    boundary_text = "\n".join(f"- {bullet}" for bullet in GUARDRAIL_BULLETS)
    return (
        f"You are the AURAFIT {role_hint}.\n"
        "Follow these guardrails before responding:\n"
        f"{boundary_text}"
    )


def occasion_guidance(user_prompt: str) -> Dict[str, List[str]]:
    """Return the first matching guidance block keyed by its heading."""

    text = normalize_prompt(user_prompt)
    for heading, keywords, bullets in OCCASION_GUIDANCE:
        if contains_any(text, keywords):
            return {heading: bullets}
    return {}


def build_makeup_prompt(user_prompt: str, occasion: str) -> str:
    """Full request text sent to the generative service."""

    sections = [
        system_instruction("makeup artist"),
        f'Recommend a makeup look for this request: "{user_prompt.strip()}"',
        f"Detected occasion: {occasion}",
    ]
    for heading, bullets in occasion_guidance(user_prompt).items():
        lines = "\n".join(f"- {bullet}" for bullet in bullets)
        sections.append(f"SPECIFIC OCCASION GUIDANCE - {heading}:\n{lines}")
    sections.append(RETURN_CONTRACT)
    return "\n\n".join(sections)


__all__ = [
    "GUARDRAIL_BULLETS",
    "OCCASION_GUIDANCE",
    "RETURN_CONTRACT",
    "build_makeup_prompt",
    "occasion_guidance",
    "system_instruction",
]
