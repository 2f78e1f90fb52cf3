"""Catalogue matching for queries and synthesized filters."""

from typing import List

import pytest

from logic.fallback_table import fallback_record
from logic.product_matcher import (
    NO_MATCH_EXPLANATION,
    dominant_kind,
    match,
    match_filters,
    match_query,
    suggest_complements,
)
from models.catalog import default_catalog, load_catalog
from models.product import Product, from_raw_metadata


@pytest.fixture(scope="module")
def catalog() -> List[Product]:
    return default_catalog()


def _ids(products: List[Product]) -> List[str]:
    return [product.product_id for product in products]


def test_pastel_saree_query_returns_only_pastel_sarees(catalog) -> None:
    result = match_query("pastel sarees for summer", catalog)

    assert _ids(result.products) == ["fashion-012", "fashion-013", "fashion-014"]
    assert all(product.type == "saree" and "pastel" in product.color for product in result.products)
    assert result.explanation == "I found these pastel sarees that match your search criteria."
    assert _ids(result.suggestions) == ["fashion-017", "fashion-018"]
    assert result.suggestion_text == "Complete your saree look with these matching accessories:"


def test_type_match_is_type_or_name_and_capped(catalog) -> None:
    result = match("saree", catalog)
    assert len(result.products) <= 5
    for product in result.products:
        assert product.type == "saree" or "saree" in product.name.lower()

    lipsticks = match_query("lipstick", catalog)
    assert len(lipsticks.products) == 5
    assert lipsticks.products[0].product_id == "fashion-010"


def test_pastel_falls_back_to_all_of_type_when_no_pastel_exists() -> None:
    sarees = [
        from_raw_metadata({"id": "s1", "brand": "A", "name": "Red Saree", "price": 1, "category": "women", "color": "red", "type": "saree"}),
        from_raw_metadata({"id": "s2", "brand": "B", "name": "Green Saree", "price": 1, "category": "women", "color": "green", "type": "saree"}),
    ]
    result = match_query("pastel saree", sarees)
    assert _ids(result.products) == ["s1", "s2"]


def test_text_colour_narrows_type_matches(catalog) -> None:
    result = match_query("blue shirt", catalog)

    assert _ids(result.products) == ["fashion-015"]
    assert _ids(result.suggestions) == ["fashion-003", "fashion-006", "fashion-019"]
    assert result.suggestion_text == "Complete your outfit with these stylish pieces:"


def test_image_search_defaults_to_saree_and_needs_similar_for_colour(catalog) -> None:
    plain = match_query("pink ones", catalog, has_images=True)
    assert [product.type for product in plain.products] == ["saree"] * 4

    similar = match_query("similar pink ones", catalog, has_images=True)
    assert _ids(similar.products) == ["fashion-011", "fashion-014"]
    assert "similar sarees in pink" in similar.explanation


def test_theme_rules(catalog) -> None:
    rain = match_query("outfit for a rainy day", catalog)
    assert _ids(rain.products) == ["fashion-003", "fashion-006", "fashion-007"]

    formal = match_query("something formal for the office", catalog)
    assert len(formal.products) == 4
    assert all(
        product.category == "men" or "suit" in product.name.lower() or "shirt" in product.name.lower()
        for product in formal.products
    )


def test_type_words_inside_other_words_are_not_types(catalog) -> None:
    result = match_query("something suitable for the office", catalog)
    formal = match_query("something formal for the office", catalog)

    assert len(result.products) == 4
    assert _ids(result.products) == _ids(formal.products)

    dresses = match_query("summer dresses", catalog)
    assert dresses.products
    assert all(product.type == "dress" or "dress" in product.name.lower() for product in dresses.products)


def test_keyword_match_and_no_match_fallback(catalog) -> None:
    gold = match_query("gold", catalog)
    assert "fashion-017" in _ids(gold.products)
    assert gold.explanation.startswith("I found")

    nothing = match_query("xyzzy", catalog)
    assert _ids(nothing.products) == _ids(catalog[:4])
    assert nothing.explanation == NO_MATCH_EXPLANATION


def test_empty_catalog_never_raises() -> None:
    result = match("saree", [])
    assert result.products == [] and result.suggestions == []
    assert match(fallback_record("natural"), []).products == []


def test_filter_match_uses_dominant_kind_and_colour_family(catalog) -> None:
    result = match_filters(fallback_record("wedding"), catalog)

    assert _ids(result.products) == ["lipstick-003", "lipstick-004"]
    assert _ids(result.suggestions) == ["fashion-004", "eyeshadow-001", "eyeshadow-002"]
    assert result.suggestion_text == "You might also like these complementary items:"


def test_dominant_kind_skips_kinds_the_catalog_does_not_stock(catalog) -> None:
    record = fallback_record("wedding")
    assert dominant_kind(record, catalog) == "lipstick"

    without_lipstick = [p for p in catalog if p.type != "lipstick" and "lipstick" not in p.name.lower()]
    assert dominant_kind(record, without_lipstick) == "eyeshadow"

    sarees_only = [p for p in catalog if p.type == "saree"]
    assert dominant_kind(record, sarees_only) is None
    assert _ids(match_filters(record, sarees_only).products) == _ids(sarees_only[:4])


def test_suggestions_fall_back_to_any_other_type() -> None:
    watch = from_raw_metadata({"id": "w", "brand": "A", "name": "Steel Watch", "price": 10, "category": "accessories", "color": "silver", "type": "watch"})
    shirt = from_raw_metadata({"id": "s", "brand": "B", "name": "Plain Tee", "price": 5, "category": "men", "color": "white", "type": "tee"})

    suggestions, text = suggest_complements([watch], [watch, shirt])
    assert _ids(suggestions) == ["s"]
    assert text == "Browse these popular items to complete your look:"
    assert suggest_complements([], [watch]) == ([], "")


def test_load_catalog_from_json_file(tmp_path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        '[{"id": "x1", "brand": "A", "name": "Pastel Saree", "price": "10", "category": "women", '
        '"color": "pastel blue", "type": "saree", "img_url": "/a.png", "no_of_rating": 3}]'
    )
    products = load_catalog(path)
    assert products[0].product_id == "x1"
    assert products[0].price == 10.0
    assert products[0].review_count == 3
    assert load_catalog(None) == default_catalog()

    bad = tmp_path / "bad.json"
    bad.write_text('{"not": "a list"}')
    with pytest.raises(ValueError):
        load_catalog(bad)
