"""Model package exports."""

from models.filters import FilterAttributes, FilterRecord
from models.product import Product, from_raw_metadata

__all__ = ["FilterAttributes", "FilterRecord", "Product", "from_raw_metadata"]
