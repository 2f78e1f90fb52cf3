"""Ephemeral storefront cart keyed by product id and size."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from models.product import Product

CartKey = Tuple[str, Optional[str]]


@dataclass
class CartItem:
    """One cart line; identity is ``(product_id, size)``."""

    product_id: str
    name: str
    price: float
    size: Optional[str] = None
    quantity: int = 1

    @property
    def key(self) -> CartKey:
        return (self.product_id, self.size)

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


class Cart:
    """In-process cart for a single shopper; nothing is persisted."""

    def __init__(self) -> None:
        self._items: Dict[CartKey, CartItem] = {}

    def add(self, product: Product, size: Optional[str] = None, quantity: int = 1) -> CartItem:
        """Add ``quantity`` units, incrementing an existing line with the same size."""

        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        key = (product.product_id, size)
        item = self._items.get(key)
        if item is None:
            item = CartItem(product_id=product.product_id, name=product.name, price=product.price, size=size, quantity=0)
            self._items[key] = item
        item.quantity += quantity
        return item

    def update_quantity(self, product_id: str, quantity: int, size: Optional[str] = None) -> Optional[CartItem]:
        """Set a line's quantity; zero or less removes it."""

        key = (product_id, size)
        if key not in self._items:
            raise KeyError(f"No cart line for {product_id!r} (size {size!r})")
        if quantity <= 0:
            del self._items[key]
            return None
        self._items[key].quantity = quantity
        return self._items[key]

    def remove(self, product_id: str, size: Optional[str] = None) -> bool:
        return self._items.pop((product_id, size), None) is not None

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> List[CartItem]:
        return list(self._items.values())

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def subtotal(self) -> float:
        return round(sum(item.price * item.quantity for item in self._items.values()), 2)


__all__ = ["Cart", "CartItem"]
