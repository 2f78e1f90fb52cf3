"""Catalogue product data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def _ensure_tuple(value: Any) -> Tuple[str, ...]:
    """Coerce a scalar or iterable into a tuple of strings."""

    if value is None:
        return ()
    if isinstance(value, (list, tuple, set)):
        return tuple(str(item) for item in value)
    return (str(value),)


@dataclass(frozen=True)
class Product:
    """A purchasable catalogue entry. Immutable for the life of the process."""

    product_id: str
    brand: str
    name: str
    image_url: str
    price: float
    category: str
    color: str
    type: str
    description: str = ""
    rating: float = 0.0
    review_count: int = 0
    sizes: Tuple[str, ...] = field(default_factory=tuple)
    shade: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValueError("Product requires a product_id")
        if float(self.price) < 0:
            raise ValueError(f"Product {self.product_id} has a negative price")
        object.__setattr__(self, "price", float(self.price))
        object.__setattr__(self, "category", self.category.strip().lower())
        object.__setattr__(self, "color", self.color.strip().lower())
        object.__setattr__(self, "type", self.type.strip().lower())
        object.__setattr__(self, "sizes", _ensure_tuple(self.sizes))

    def search_text(self) -> str:
        """Lower-cased text used for free keyword matching."""

        return f"{self.brand} {self.name} {self.category} {self.color} {self.type}".lower()

    def to_dict(self) -> Dict[str, Any]:
        """Storefront JSON shape (camelCase keys, like filter attributes)."""

        return {
            "id": self.product_id,
            "brand": self.brand,
            "name": self.name,
            "imageUrl": self.image_url,
            "price": self.price,
            "category": self.category,
            "color": self.color,
            "type": self.type,
            "description": self.description,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "sizes": list(self.sizes),
            "shade": self.shade,
        }


def from_raw_metadata(metadata: Dict[str, Any]) -> Product:
    """Factory to build a :class:`Product` from loose catalogue metadata.

    Accepts both snake_case keys and the camelCase keys used by the storefront
    (``imageUrl``, ``reviewCount``, ``img_url``, ``no_of_rating``).
    """

    required_fields = ["brand", "name", "price", "category", "color", "type"]
    missing = [key for key in required_fields if metadata.get(key) in (None, "")]
    if missing:
        raise ValueError(f"Missing required fields for Product: {missing}")

    product_id = metadata.get("product_id") or metadata.get("id")
    if not product_id:
        product_id = f"{metadata['type']}-{metadata['name']}".lower().replace(" ", "-")

    return Product(
        product_id=str(product_id),
        brand=str(metadata["brand"]),
        name=str(metadata["name"]),
        image_url=str(metadata.get("image_url") or metadata.get("imageUrl") or metadata.get("img_url") or ""),
        price=float(metadata["price"]),
        category=str(metadata["category"]),
        color=str(metadata["color"]),
        type=str(metadata["type"]),
        description=str(metadata.get("description") or ""),
        rating=float(metadata.get("rating") or 0.0),
        review_count=int(metadata.get("review_count") or metadata.get("reviewCount") or metadata.get("no_of_rating") or 0),
        sizes=_ensure_tuple(metadata.get("sizes")),
        shade=metadata.get("shade"),
    )


def products_from_raw(entries: List[Dict[str, Any]]) -> List[Product]:
    return [from_raw_metadata(entry) for entry in entries]


__all__ = ["Product", "from_raw_metadata", "products_from_raw"]
