from __future__ import annotations

import pytest

from storeadmin.schema import Category, Product, SubCategory, parse_rows
from storeadmin.services.selection import CascadingSelection


@pytest.fixture
def selection(catalog_lists) -> CascadingSelection:
    return CascadingSelection(
        categories=parse_rows(Category, catalog_lists["categories"]),
        subcategories=parse_rows(SubCategory, catalog_lists["subcategories"]),
        products=parse_rows(Product, catalog_lists["products"]),
    )


def test_subcategory_options_match_category(selection):
    for category in selection.categories:
        selection.set_category(category.id)
        expected = [sc for sc in selection.subcategories if sc.category_id == category.id]
        assert selection.subcategory_options() == expected


def test_product_options_match_subcategory(selection):
    for sub in selection.subcategories:
        selection.set_category(sub.category_id)
        selection.set_subcategory(sub.id)
        expected = [p for p in selection.products if p.sub_category_id == sub.id]
        assert selection.product_options() == expected


def test_changing_category_clears_downstream(selection):
    selection.set_category(1)
    selection.set_subcategory(10)
    selection.set_product(100)

    selection.set_category(2)

    assert selection.selection == {"category_id": 2, "sub_category_id": None, "product_id": None}


def test_changing_subcategory_clears_product(selection):
    selection.set_category(1)
    selection.set_subcategory(10)
    selection.set_product(100)

    selection.set_subcategory(11)

    assert selection.sub_category_id == 11
    assert selection.product_id is None
    assert [p.name for p in selection.product_options()] == ["Trail Boot"]


def test_nothing_selected_means_no_options(selection):
    assert selection.subcategory_options() == []
    assert selection.product_options() == []


def test_lists_not_loaded_yet_render_empty():
    selection = CascadingSelection()
    selection.set_category(1)
    assert selection.subcategory_options() == []


def test_prefill_keeps_whole_chain(selection):
    selection.prefill(1, 10, 101)
    assert selection.selection == {"category_id": 1, "sub_category_id": 10, "product_id": 101}
    assert [p.id for p in selection.product_options()] == [100, 101]
