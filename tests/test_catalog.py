from __future__ import annotations

import pytest

from conftest import FakeApi
from storeadmin.schema import Category, Product, SubCategory, parse_rows
from storeadmin.services import catalog
from storeadmin.services.forms import DeleteConfirmation
from storeadmin.services.validation import FormValidationError


def test_list_categories_skips_malformed_rows():
    api = FakeApi(lists={"categories": [{"categoryId": 1, "categoryName": "Shoes"}, {"categoryName": "No id"}]})
    assert [c.name for c in catalog.list_categories(api)] == ["Shoes"]


def test_list_tolerates_failed_envelope():
    api = FakeApi(responses={("GET", "categories"): {"success": False, "message": "nope"}})
    assert catalog.list_categories(api) == []


def test_create_and_update_category():
    api = FakeApi()
    catalog.create_category(api, name="  Shoes ")
    catalog.update_category(api, 4, name="Bags")

    assert api.calls == [
        ("POST", "categories", {"json": {"categoryName": "Shoes"}}),
        ("PUT", "categories/4", {"json": {"categoryName": "Bags"}}),
    ]


def test_blank_category_is_not_sent():
    api = FakeApi()
    with pytest.raises(FormValidationError):
        catalog.create_category(api, name=" ")
    assert api.calls == []


def test_delete_category_ignores_dependents(fake_api):
    # Shoes still has subcategories and products; the request goes out anyway.
    catalog.delete_category(fake_api, 1)
    assert fake_api.paths("DELETE") == ["categories/1"]
    assert fake_api.paths("GET") == []


def test_delete_category_backend_refusal_is_surfaced(catalog_lists):
    api = FakeApi(lists=catalog_lists, fail=(("DELETE", "categories/1"),))
    confirmation = DeleteConfirmation(entity="category")
    confirmation.request(1, "Shoes")

    result = confirmation.confirm(lambda cid: catalog.delete_category(api, cid))

    assert not result.ok
    assert result.message.startswith("Failed to delete category:")
    assert api.paths("DELETE") == ["categories/1"]


def test_subcategory_body():
    api = FakeApi()
    catalog.create_subcategory(api, category_id="2", name="Totes")
    catalog.update_subcategory(api, 20, category_id=2, name="Big Totes")

    assert api.calls[0] == ("POST", "subcategories", {"json": {"categoryId": 2, "subCategoryName": "Totes"}})
    assert api.calls[1][1] == "subcategories/20"


def test_subcategory_rows_resolve_parent(catalog_lists):
    rows = catalog.subcategory_rows(
        parse_rows(SubCategory, catalog_lists["subcategories"] + [{"subCategoryId": 99, "categoryId": 42}]),
        parse_rows(Category, catalog_lists["categories"]),
    )
    assert [r["Category Name"] for r in rows] == ["Shoes", "Shoes", "Bags", "Unknown"]


def _product_values(**extra) -> dict:
    values = {
        "category_id": 1,
        "sub_category_id": 10,
        "product_name": "Air Runner",
        "product_description": "Light runner",
        "brand_name": "Acme",
        "material": "Mesh",
        "mrp_price": "2999",
        "offer_price": "2499",
    }
    values.update(extra)
    return values


def test_save_product_create_sends_multipart(good_image):
    api = FakeApi()
    catalog.save_product(api, _product_values(), image=good_image)

    method, path, kwargs = api.calls[0]
    assert (method, path) == ("POST", "products")
    assert kwargs["data"]["productName"] == "Air Runner"
    assert kwargs["data"]["subCategoryId"] == "10"
    assert [name for name, _ in kwargs["files"]] == ["productImage"]


def test_save_product_update_without_new_image():
    api = FakeApi()
    catalog.save_product(api, _product_values(), product_id=100)

    method, path, kwargs = api.calls[0]
    assert (method, path) == ("PUT", "products/100")
    assert kwargs["files"] is None


def test_save_product_rejects_mismatched_subcategory(catalog_lists):
    api = FakeApi()
    subs = parse_rows(SubCategory, catalog_lists["subcategories"])
    with pytest.raises(FormValidationError) as exc:
        catalog.save_product(api, _product_values(sub_category_id=20), subcategories=subs)
    assert "sub_category_id" in exc.value.errors
    assert api.calls == []


def test_product_values_keep_whole_prices():
    product = Product.model_validate(
        {"productId": 1, "productName": "X", "categoryId": 1, "subCategoryId": 10, "productMrpPrice": 2999.0}
    )
    values = catalog.product_values(product)
    assert values["mrp_price"] == "2999"
    assert values["offer_price"] == ""


def test_fractional_prices_are_never_truncated_on_edit():
    product = Product.model_validate(
        {
            "productId": 1,
            "productName": "X",
            "categoryId": 1,
            "subCategoryId": 10,
            "productMrpPrice": 2999.5,
            "productOfferPrice": 1499.99,
        }
    )
    values = catalog.product_values(product)
    assert values["mrp_price"] == "2999.5"
    assert values["offer_price"] == "1499.99"

    api = FakeApi()
    with pytest.raises(FormValidationError) as exc:
        catalog.save_product(api, dict(values, product_name="Renamed"), product_id=1)
    assert set(exc.value.errors) == {"mrp_price", "offer_price"}
    assert api.calls == []


def test_product_rows(catalog_lists):
    rows = catalog.product_rows(
        parse_rows(Product, catalog_lists["products"]),
        parse_rows(Category, catalog_lists["categories"]),
        parse_rows(SubCategory, catalog_lists["subcategories"]),
        "http://img/",
    )
    assert rows[0]["Category Name"] == "Shoes"
    assert rows[0]["Subcategory Name"] == "Sneakers"
    assert rows[-1]["Subcategory Name"] == "Totes"
    assert rows[0]["Product Image"] is None
