"""Makeup filter record data model and colour helpers."""

from __future__ import annotations

import colorsys
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from models.lexicon import FILTER_KINDS, REQUIRED_FILTER_KINDS

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")
DEFAULT_SHADE = "Custom Shade"

SHADE_NAMES: Dict[str, Dict[str, str]] = {
    "lipstick": {
        "#D40000": "Classic Red",
        "#FF80AB": "Pink Petal",
        "#C17566": "Nude Beige",
        "#FF8A65": "Coral Sunset",
        "#AD1457": "Berry Wine",
    },
    "eyeshadow": {
        "#4E4E4E": "Smoky Charcoal",
        "#D2B48C": "Neutral Taupe",
        "#D4AF37": "Golden Shimmer",
        "#E8B4B8": "Rose Quartz",
        "#6A84C3": "Blue Twilight",
        "#8B5FBF": "Purple Haze",
        "#CB9A6A": "Bronze Shimmer",
    },
    "blush": {
        "#FF80AB": "Rosy Glow",
        "#FFAB91": "Peach Nectar",
        "#CD853F": "Sun Kissed Bronze",
        "#EDBCB0": "Natural Flush",
        "#F08080": "Coral Bliss",
    },
    "eyeliner": {
        "#000000": "Black",
        "#5D4037": "Brown",
        "#1A237E": "Navy",
        "#6A1B9A": "Colored",
    },
}


def normalize_hex(value: str) -> str:
    """Return ``value`` as an upper-case ``#RRGGBB`` string.

    Raises a :class:`ValueError` when the value is not a 6-digit hex triplet.
    """

    match = _HEX_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(f"Invalid hex colour '{value}'. Expected #RRGGBB")
    return f"#{match.group(1).upper()}"


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and bool(_HEX_PATTERN.match(value.strip()))


def clamp_intensity(value: float) -> float:
    """Clamp an intensity into ``[0, 1]``."""

    return min(1.0, max(0.0, float(value)))


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    digits = normalize_hex(hex_color)[1:]
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def shade_for(kind: str, hex_color: str) -> str:
    """Name a shade from the per-kind lookup, falling back to a generic label."""

    return SHADE_NAMES.get(kind, {}).get(normalize_hex(hex_color), DEFAULT_SHADE)


def color_family(hex_color: str) -> str:
    """Map a hex colour to a coarse family name used for catalogue matching."""

    r, g, b = hex_to_rgb(hex_color)
    hue, lightness, saturation = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    degrees = hue * 360
    if lightness < 0.15:
        return "black"
    if lightness > 0.93:
        return "white"
    if saturation < 0.2:
        return "nude" if degrees < 70 and lightness > 0.45 else "brown" if degrees < 70 else "black"
    if degrees < 12 or degrees >= 345:
        return "pink" if lightness > 0.75 else "red"
    if degrees < 42:
        if lightness < 0.45:
            return "brown"
        return "nude" if saturation < 0.45 else "coral"
    if degrees < 70:
        return "gold"
    if degrees < 170:
        return "green"
    if degrees < 255:
        return "blue"
    if degrees < 295:
        return "purple"
    return "pink"


@dataclass(frozen=True)
class FilterAttributes:
    """Colour, intensity and optional styling for one makeup feature."""

    color_hex: str
    intensity: float
    shade: str = DEFAULT_SHADE
    style: Optional[str] = None
    placement: Optional[str] = None
    finish: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "color_hex", normalize_hex(self.color_hex))
        object.__setattr__(self, "intensity", round(clamp_intensity(self.intensity), 3))
        object.__setattr__(self, "shade", (self.shade or DEFAULT_SHADE).strip() or DEFAULT_SHADE)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "colorHex": self.color_hex,
            "intensity": self.intensity,
            "shade": self.shade,
        }
        for key in ("style", "placement", "finish"):
            value = getattr(self, key)
            if value:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class FilterRecord:
    """Per-feature makeup attributes driving one rendered look.

    ``lipstick``, ``eyeshadow`` and ``blush`` are always present; the remaining
    kinds are optional.
    """

    entries: Mapping[str, FilterAttributes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = [kind for kind in self.entries if kind not in FILTER_KINDS]
        if unknown:
            raise ValueError(f"Unsupported filter kinds: {unknown}. Allowed: {list(FILTER_KINDS)}")
        missing = [kind for kind in REQUIRED_FILTER_KINDS if kind not in self.entries]
        if missing:
            raise ValueError(f"FilterRecord missing required kinds: {missing}")
        ordered = {kind: self.entries[kind] for kind in FILTER_KINDS if kind in self.entries}
        object.__setattr__(self, "entries", ordered)

    def __getitem__(self, kind: str) -> FilterAttributes:
        return self.entries[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, kind: str) -> Optional[FilterAttributes]:
        return self.entries.get(kind)

    def items(self):
        return self.entries.items()

    def kinds(self) -> Tuple[str, ...]:
        return tuple(self.entries)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {kind: attributes.to_dict() for kind, attributes in self.entries.items()}


__all__ = [
    "DEFAULT_SHADE",
    "SHADE_NAMES",
    "FilterAttributes",
    "FilterRecord",
    "clamp_intensity",
    "color_family",
    "hex_to_rgb",
    "is_hex_color",
    "normalize_hex",
    "shade_for",
]
