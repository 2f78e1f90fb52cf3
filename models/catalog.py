"""Embedded storefront catalogue and loaders.

The catalogue is static: it is loaded once at process start and shared
read-only by every request. A JSON file with the same record shape can
replace the embedded data through ``catalog_path`` in the app config.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from models.product import Product, products_from_raw

LOGGER = logging.getLogger(__name__)

FASHION_PRODUCTS: List[Dict[str, Any]] = [
    {
        "product_id": "fashion-001",
        "brand": "Roadster",
        "name": "Men's White Slim Fit Shirt",
        "image_url": "/png images/coll1_2.png",
        "price": 899,
        "category": "men",
        "rating": 4.5,
        "review_count": 120,
        "sizes": ["S", "M", "L", "XL"],
        "description": "A classic white slim-fit shirt for men, perfect for formal and casual occasions.",
        "color": "white",
        "type": "shirt",
    },
    {
        "product_id": "fashion-002",
        "brand": "H&M",
        "name": "Women's Black Dress",
        "image_url": "/png images/coll2_3.png",
        "price": 1499,
        "category": "women",
        "rating": 4.2,
        "review_count": 85,
        "sizes": ["XS", "S", "M", "L"],
        "description": "An elegant black dress for women, suitable for parties and evening events.",
        "color": "black",
        "type": "dress",
    },
    {
        "product_id": "fashion-003",
        "brand": "ADIDAS",
        "name": "Men's Running Shoes",
        "image_url": "/png images/coll3_1.png",
        "price": 2999,
        "category": "men",
        "rating": 4.7,
        "review_count": 210,
        "sizes": ["7", "8", "9", "10"],
        "description": "High-performance running shoes with cushioned soles for maximum comfort during workouts.",
        "color": "blue",
        "type": "shoes",
    },
    {
        "product_id": "fashion-004",
        "brand": "Lakme",
        "name": "Foundation Cream",
        "image_url": "/png images/coll3_2.png",
        "price": 399,
        "category": "beauty",
        "rating": 4.0,
        "review_count": 75,
        "sizes": [],
        "description": "Long-lasting foundation cream that provides smooth coverage and a natural look.",
        "color": "beige",
        "type": "makeup",
    },
    {
        "product_id": "fashion-005",
        "brand": "Puma",
        "name": "Women's Black Leggings",
        "image_url": "/png images/coll4_1.png",
        "price": 1299,
        "category": "women",
        "rating": 4.4,
        "review_count": 150,
        "sizes": ["S", "M", "L"],
        "description": "Comfortable and stretchable black leggings perfect for workouts and casual wear.",
        "color": "black",
        "type": "leggings",
    },
    {
        "product_id": "fashion-006",
        "brand": "Fossil",
        "name": "Men's Brown Leather Watch",
        "image_url": "/png images/coll4_2.png",
        "price": 7999,
        "category": "accessories",
        "rating": 4.6,
        "review_count": 95,
        "sizes": [],
        "description": "Elegant brown leather watch with chronograph features, suitable for formal and casual occasions.",
        "color": "brown",
        "type": "watch",
    },
    {
        "product_id": "fashion-007",
        "brand": "Skybags",
        "name": "Unisex Black Backpack",
        "image_url": "/png images/coll5_1.png",
        "price": 1499,
        "category": "accessories",
        "rating": 4.1,
        "review_count": 62,
        "sizes": [],
        "description": "Durable and spacious black backpack with multiple compartments, perfect for daily use.",
        "color": "black",
        "type": "backpack",
    },
    {
        "product_id": "fashion-008",
        "brand": "AND",
        "name": "Women's Floral Print Dress",
        "image_url": "/png images/coll6_1.png",
        "price": 1899,
        "category": "women",
        "rating": 4.3,
        "review_count": 78,
        "sizes": ["S", "M", "L", "XL"],
        "description": "Beautiful floral print dress for women, perfect for summer outings and casual occasions.",
        "color": "blue floral",
        "type": "dress",
    },
    {
        "product_id": "fashion-009",
        "brand": "Louis Philippe",
        "name": "Men's Navy Blue Suit",
        "image_url": "/png images/coll2_4.png",
        "price": 8999,
        "category": "men",
        "rating": 4.8,
        "review_count": 45,
        "sizes": ["38", "40", "42", "44"],
        "description": "Premium quality navy blue suit for men, perfect for formal events and business meetings.",
        "color": "navy blue",
        "type": "suit",
    },
    {
        "product_id": "fashion-010",
        "brand": "MAC",
        "name": "Ruby Woo Lipstick",
        "image_url": "/png images/coll2_3.png",
        "price": 1950,
        "category": "beauty",
        "rating": 4.7,
        "review_count": 120,
        "sizes": [],
        "description": "Iconic matte red lipstick with long-lasting formula, perfect for making a bold statement.",
        "color": "red",
        "type": "lipstick",
    },
    {
        "product_id": "fashion-011",
        "brand": "Sabyasachi",
        "name": "Pink Silk Saree",
        "image_url": "/png images/pink_saree.jpg",
        "price": 9999,
        "category": "women",
        "rating": 4.9,
        "review_count": 85,
        "sizes": ["Free Size"],
        "description": "Luxurious pink silk saree with intricate embroidery, perfect for special occasions and celebrations.",
        "color": "pink",
        "type": "saree",
    },
    {
        "product_id": "fashion-012",
        "brand": "FabIndia",
        "name": "Pastel Blue Cotton Saree",
        "image_url": "/png images/blue.jpg",
        "price": 2999,
        "category": "women",
        "rating": 4.3,
        "review_count": 120,
        "sizes": ["Free Size"],
        "description": "Elegant pastel blue cotton saree with minimal design, perfect for everyday wear and casual events.",
        "color": "pastel blue",
        "type": "saree",
    },
    {
        "product_id": "fashion-013",
        "brand": "Mysore Silk",
        "name": "Pastel Green Silk Saree",
        "image_url": "/png images/green.jpg",
        "price": 5999,
        "category": "women",
        "rating": 4.6,
        "review_count": 95,
        "sizes": ["Free Size"],
        "description": "Traditional pastel green Mysore silk saree with gold zari border, perfect for festivals and special occasions.",
        "color": "pastel green",
        "type": "saree",
    },
    {
        "product_id": "fashion-014",
        "brand": "Banarasi Designs",
        "name": "Pastel Pink Banarasi Saree",
        "image_url": "/png images/pastel_pink_saree.webp",
        "price": 7499,
        "category": "women",
        "rating": 4.8,
        "review_count": 65,
        "sizes": ["Free Size"],
        "description": "Stunning pastel pink Banarasi silk saree with traditional motifs, perfect for weddings and formal events.",
        "color": "pastel pink",
        "type": "saree",
    },
    {
        "product_id": "fashion-015",
        "brand": "Peter England",
        "name": "Men's Blue Formal Shirt",
        "image_url": "/png images/blue_shirt.webp",
        "price": 1499,
        "category": "men",
        "rating": 4.5,
        "review_count": 78,
        "sizes": ["S", "M", "L", "XL"],
        "description": "Premium blue formal shirt for men, perfect for office wear and professional settings.",
        "color": "blue",
        "type": "shirt",
    },
    {
        "product_id": "fashion-016",
        "brand": "Allen Solly",
        "name": "Men's Pink Casual Shirt",
        "image_url": "/png images/pink_shirt.webp",
        "price": 1299,
        "category": "men",
        "rating": 4.3,
        "review_count": 65,
        "sizes": ["S", "M", "L", "XL"],
        "description": "Stylish pink casual shirt for men, perfect for weekend outings and casual events.",
        "color": "pink",
        "type": "shirt",
    },
    {
        "product_id": "fashion-017",
        "brand": "Tanishq",
        "name": "Gold Necklace Set",
        "image_url": "/png images/coll4_2.png",
        "price": 45999,
        "category": "accessories",
        "rating": 4.9,
        "review_count": 42,
        "sizes": [],
        "description": "Elegant gold necklace set with matching earrings, perfect for complementing traditional sarees.",
        "color": "gold",
        "type": "jewelry",
    },
    {
        "product_id": "fashion-018",
        "brand": "Bata",
        "name": "Women's Formal Heels",
        "image_url": "/png images/coll3_1.png",
        "price": 1999,
        "category": "footwear",
        "rating": 4.2,
        "review_count": 87,
        "sizes": ["5", "6", "7", "8"],
        "description": "Comfortable formal heels for women, perfect for office wear and special occasions.",
        "color": "black",
        "type": "sandals",
    },
    {
        "product_id": "fashion-019",
        "brand": "Levi's",
        "name": "Men's Black Formal Trousers",
        "image_url": "/png images/coll5_1.png",
        "price": 2499,
        "category": "men",
        "rating": 4.5,
        "review_count": 95,
        "sizes": ["30", "32", "34", "36"],
        "description": "Classic black formal trousers for men, perfect for pairing with formal shirts.",
        "color": "black",
        "type": "pants",
    },
]

# (id, name, type, colour, shade, price, image slug, description)
_MAKEUP_ROWS: Tuple[Tuple[str, str, str, str, str, float, str, str], ...] = (
    ("lipstick-001", "Classic Red Lipstick", "lipstick", "red", "Classic Red", 19.99, "lipstick-red",
     "A timeless, bold red lipstick that suits all skin tones."),
    ("lipstick-002", "Nude Matte Lipstick", "lipstick", "nude", "Soft Nude", 18.99, "lipstick-nude",
     "A versatile nude lipstick perfect for everyday wear."),
    ("lipstick-003", "Pink Fusion Lipstick", "lipstick", "pink", "Rosy Pink", 19.99, "lipstick-pink",
     "A bright and vibrant pink lipstick for a fresh look."),
    ("lipstick-004", "Berry Bliss Lipstick", "lipstick", "berry", "Deep Berry", 21.99, "lipstick-berry",
     "A rich berry-toned lipstick for a bold, dramatic look."),
    ("lipstick-005", "Coral Crush Lipstick", "lipstick", "coral", "Coral Reef", 19.99, "lipstick-coral",
     "A bright coral lipstick perfect for summer looks."),
    ("eyeshadow-001", "Neutral Palette", "eyeshadow", "brown", "Neutral Brown", 29.99, "eyeshadow-neutral",
     "A versatile neutral eyeshadow palette for everyday looks."),
    ("eyeshadow-002", "Smoky Night Eyeshadow", "eyeshadow", "black", "Smoky Black", 24.99, "eyeshadow-smoky",
     "An intense black eyeshadow for creating smoky eye looks."),
    ("eyeshadow-003", "Golden Shimmer Eyeshadow", "eyeshadow", "gold", "Gold Rush", 22.99, "eyeshadow-gold",
     "A shimmering gold eyeshadow for a glamorous touch."),
    ("eyeshadow-004", "Sunset Hues Palette", "eyeshadow", "orange", "Sunset Orange", 32.99, "eyeshadow-sunset",
     "A warm-toned eyeshadow palette with sunset-inspired hues."),
    ("eyeshadow-005", "Purple Reign Eyeshadow", "eyeshadow", "purple", "Royal Purple", 24.99, "eyeshadow-purple",
     "A rich purple eyeshadow for creating bold eye looks."),
    ("blush-001", "Peachy Keen Blush", "blush", "peach", "Peachy Glow", 18.99, "blush-peach",
     "A soft peach blush for a natural-looking flush."),
    ("blush-002", "Rosy Glow Blush", "blush", "pink", "Rosy Pink", 18.99, "blush-pink",
     "A bright pink blush for a youthful, rosy glow."),
    ("blush-003", "Coral Pop Blush", "blush", "coral", "Coral Pop", 19.99, "blush-coral",
     "A vibrant coral blush for a fresh, sun-kissed look."),
    ("blush-004", "Berry Flush Blush", "blush", "berry", "Berry Flush", 19.99, "blush-berry",
     "A deep berry blush for a dramatic, flushed look."),
    ("foundation-001", "Matte Perfection Foundation", "foundation", "beige", "Light Beige", 29.99, "foundation-light",
     "A matte finish foundation for light skin tones."),
    ("foundation-002", "Matte Perfection Foundation", "foundation", "beige", "Medium Beige", 29.99, "foundation-medium",
     "A matte finish foundation for medium skin tones."),
    ("foundation-003", "Matte Perfection Foundation", "foundation", "beige", "Deep Beige", 29.99, "foundation-deep",
     "A matte finish foundation for deep skin tones."),
    ("foundation-004", "Dewy Glow Foundation", "foundation", "beige", "Light Beige", 32.99, "foundation-dewy-light",
     "A dewy finish foundation for light skin tones."),
    ("foundation-005", "Dewy Glow Foundation", "foundation", "beige", "Medium Beige", 32.99, "foundation-dewy-medium",
     "A dewy finish foundation for medium skin tones."),
    ("foundation-006", "Dewy Glow Foundation", "foundation", "beige", "Deep Beige", 32.99, "foundation-dewy-deep",
     "A dewy finish foundation for deep skin tones."),
    ("eyeliner-001", "Precision Liquid Eyeliner", "eyeliner", "black", "Jet Black", 15.99, "eyeliner-black",
     "A precise liquid eyeliner for creating sharp cat-eye looks."),
    ("eyeliner-002", "Smudge-Proof Gel Eyeliner", "eyeliner", "brown", "Brown", 16.99, "eyeliner-brown",
     "A smudge-proof gel eyeliner for a softer look."),
    ("eyeliner-003", "Precision Liquid Eyeliner", "eyeliner", "blue", "Navy Blue", 15.99, "eyeliner-blue",
     "A navy blue liquid eyeliner for a unique twist on classic looks."),
    ("highlighter-001", "Golden Glow Highlighter", "highlighter", "gold", "Golden Glow", 22.99, "highlighter-gold",
     "A warm gold highlighter for a sun-kissed glow."),
    ("highlighter-002", "Pearl Essence Highlighter", "highlighter", "pearl", "Pearl Essence", 22.99, "highlighter-pearl",
     "A pearly white highlighter for a subtle, natural glow."),
    ("highlighter-003", "Rose Gold Highlighter", "highlighter", "rose", "Rose Gold", 24.99, "highlighter-rose",
     "A rose gold highlighter for a radiant, rosy glow."),
)

MAKEUP_PRODUCTS: List[Dict[str, Any]] = [
    {
        "product_id": product_id,
        "brand": "Glam Beauty",
        "name": name,
        "image_url": f"/assets/makeup/{slug}.jpg",
        "price": price,
        "category": "beauty",
        "color": color,
        "type": kind,
        "shade": shade,
        "description": description,
    }
    for product_id, name, kind, color, shade, price, slug, description in _MAKEUP_ROWS
]


def default_catalog() -> List[Product]:
    """Return the embedded catalogue in storefront order (fashion first)."""

    return products_from_raw(FASHION_PRODUCTS + MAKEUP_PRODUCTS)


def load_catalog(path: Optional[str | Path] = None) -> List[Product]:
    """Load the catalogue from ``path`` or fall back to the embedded data.

    The file must hold a JSON array of product objects. Invalid entries raise
    ``ValueError`` because a broken catalogue is a deployment error.
    """

    if not path:
        return default_catalog()

    catalog_file = Path(path)
    raw = json.loads(catalog_file.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Catalogue file {catalog_file} must contain a JSON array")
    products = products_from_raw(raw)
    LOGGER.info("Loaded catalogue file", extra={"path": str(catalog_file), "product_count": len(products)})
    return products


__all__ = ["FASHION_PRODUCTS", "MAKEUP_PRODUCTS", "default_catalog", "load_catalog"]
