"""Pydantic schemas for validating upstream recommendation payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from models.filters import FilterAttributes, FilterRecord, clamp_intensity, normalize_hex, shade_for
from models.lexicon import FILTER_KINDS, REQUIRED_FILTER_KINDS


class FilterEntryPayload(BaseModel):
    """One feature's attributes as emitted by the generative service."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    color: str = Field(validation_alias=AliasChoices("color", "colorHex", "hex"))
    intensity: float = Field(validation_alias=AliasChoices("intensity", "opacity"))
    shade: Optional[str] = Field(default=None, validation_alias=AliasChoices("shade", "name"))
    style: Optional[str] = None
    placement: Optional[str] = None
    finish: Optional[str] = None

    @field_validator("color")
    @classmethod
    def _validate_color(cls, value: str) -> str:
        return normalize_hex(value)

    @field_validator("intensity")
    @classmethod
    def _rescale_intensity(cls, value: float) -> float:
        # Some prompts ask for a 0-100 scale.
        if value > 1:
            value = value / 100
        return clamp_intensity(value)

    def to_attributes(self, kind: str) -> FilterAttributes:
        return FilterAttributes(
            color_hex=self.color,
            intensity=self.intensity,
            shade=self.shade or shade_for(kind, self.color),
            style=self.style,
            placement=self.placement,
            finish=self.finish,
        )


class MakeupFilterItem(FilterEntryPayload):
    """Entry of the list-shaped ``makeupFilters`` payload."""

    type: str

    @field_validator("type")
    @classmethod
    def _normalise_type(cls, value: str) -> str:
        return value.strip().lower()


class SuggestedProductPayload(BaseModel):
    """Product hint returned alongside filters; informational only."""

    model_config = ConfigDict(extra="ignore")

    name: str
    brand: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None
    shade: Optional[str] = None


class RecommendationPayload(BaseModel):
    """Full upstream response in either the keyed or the list shape."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    lipstick: Optional[FilterEntryPayload] = None
    eyeshadow: Optional[FilterEntryPayload] = None
    eyeliner: Optional[FilterEntryPayload] = None
    blush: Optional[FilterEntryPayload] = None
    foundation: Optional[FilterEntryPayload] = None
    highlighter: Optional[FilterEntryPayload] = None
    contour: Optional[FilterEntryPayload] = None
    makeup_filters: Optional[List[MakeupFilterItem]] = Field(
        default=None, validation_alias=AliasChoices("makeupFilters", "makeup_filters")
    )
    look_description: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("lookDescription", "look_description")
    )
    products: List[SuggestedProductPayload] = Field(default_factory=list)

    @field_validator("products", mode="before")
    @classmethod
    def _drop_unusable_hints(cls, value: Any) -> List[SuggestedProductPayload]:
        # Hints are informational; a bad entry never rejects the filters.
        if not isinstance(value, list):
            return []
        hints: List[SuggestedProductPayload] = []
        for entry in value:
            try:
                hints.append(SuggestedProductPayload.model_validate(entry))
            except ValidationError:
                continue
        return hints

    @model_validator(mode="after")
    def _merge_and_require(self) -> "RecommendationPayload":
        for item in self.makeup_filters or []:
            if item.type in FILTER_KINDS and getattr(self, item.type) is None:
                setattr(self, item.type, FilterEntryPayload.model_validate(item.model_dump()))
        missing = [kind for kind in REQUIRED_FILTER_KINDS if getattr(self, kind) is None]
        if missing:
            raise ValueError(f"payload missing required filter kinds: {missing}")
        return self

    def entries(self) -> Dict[str, FilterEntryPayload]:
        return {kind: getattr(self, kind) for kind in FILTER_KINDS if getattr(self, kind) is not None}

    def to_record(self) -> FilterRecord:
        return FilterRecord({kind: entry.to_attributes(kind) for kind, entry in self.entries().items()})


def parse_recommendation_payload(raw: str | bytes | Dict[str, Any]) -> RecommendationPayload:
    """Strictly parse an upstream payload.

    Raises :class:`pydantic.ValidationError` for malformed JSON, missing required
    kinds or unparseable colours. There is no partial acceptance.
    """

    if isinstance(raw, dict):
        return RecommendationPayload.model_validate(raw)
    return RecommendationPayload.model_validate_json(raw)


def validation_summary(exc: ValidationError) -> List[Dict[str, Any]]:
    """Reduce pydantic errors to location and message for logging."""

    return [{"loc": list(error.get("loc", ())), "msg": error.get("msg", "")} for error in exc.errors()]


__all__ = [
    "FilterEntryPayload",
    "MakeupFilterItem",
    "RecommendationPayload",
    "SuggestedProductPayload",
    "parse_recommendation_payload",
    "validation_summary",
]
