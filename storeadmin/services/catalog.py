from __future__ import annotations

from typing import Any, Optional

from storeadmin.schema import Category, Product, SubCategory, parse_rows
from storeadmin.services.images import UploadedImage
from storeadmin.services.validation import raise_if_invalid, validate_category, validate_product, validate_subcategory
from storeadmin.utils import image_url, plain_number, short_date


# -------------------------
# Categories
# -------------------------

def list_categories(api) -> list[Category]:
    return parse_rows(Category, api.get_list("categories"))


def create_category(api, *, name: str) -> Any:
    raise_if_invalid(validate_category({"category_name": name}))
    return api.post("categories", json={"categoryName": name.strip()})


def update_category(api, category_id: int, *, name: str) -> Any:
    raise_if_invalid(validate_category({"category_name": name}))
    return api.put(f"categories/{int(category_id)}", json={"categoryName": name.strip()})


def delete_category(api, category_id: int) -> Any:
    # No dependency check: the backend decides whether dependents block it.
    return api.delete(f"categories/{int(category_id)}")


def category_rows(categories: list[Category]) -> list[dict]:
    return [
        {"S.No": i + 1, "Category Name": c.name, "Created At": short_date(c.created_at)}
        for i, c in enumerate(categories)
    ]


# -------------------------
# Subcategories
# -------------------------

def list_subcategories(api) -> list[SubCategory]:
    return parse_rows(SubCategory, api.get_list("subcategories"))


def _subcategory_body(category_id: Any, name: str) -> dict:
    raise_if_invalid(validate_subcategory({"category_id": category_id, "sub_category_name": name}))
    return {"categoryId": int(category_id), "subCategoryName": name.strip()}


def create_subcategory(api, *, category_id: int, name: str) -> Any:
    return api.post("subcategories", json=_subcategory_body(category_id, name))


def update_subcategory(api, sub_category_id: int, *, category_id: int, name: str) -> Any:
    return api.put(f"subcategories/{int(sub_category_id)}", json=_subcategory_body(category_id, name))


def delete_subcategory(api, sub_category_id: int) -> Any:
    return api.delete(f"subcategories/{int(sub_category_id)}")


def subcategory_rows(subcategories: list[SubCategory], categories: list[Category]) -> list[dict]:
    names = {c.id: c.name for c in categories}
    return [
        {
            "S.No": i + 1,
            "Category Name": names.get(sc.category_id, "Unknown"),
            "Subcategory Name": sc.name,
        }
        for i, sc in enumerate(subcategories)
    ]


# -------------------------
# Products
# -------------------------

def list_products(api) -> list[Product]:
    return parse_rows(Product, api.get_list("products"))


def product_form_data(values: dict) -> dict:
    return {
        "productName": str(values["product_name"]).strip(),
        "productDescription": str(values.get("product_description") or "").strip(),
        "brandName": str(values.get("brand_name") or "").strip(),
        "material": str(values.get("material") or "").strip(),
        "productMrpPrice": str(values["mrp_price"]).strip(),
        "productOfferPrice": str(values["offer_price"]).strip(),
        "categoryId": str(int(values["category_id"])),
        "subCategoryId": str(int(values["sub_category_id"])),
    }


def save_product(
    api,
    values: dict,
    *,
    product_id: Optional[int] = None,
    image: Optional[UploadedImage] = None,
    subcategories: Optional[list[SubCategory]] = None,
) -> Any:
    """
    Create (no ``product_id``) or update a product as one multipart request.

    ``productImage`` is only sent when a new file was picked; leaving it out on
    update keeps whatever the backend has.
    """
    raise_if_invalid(validate_product(values, subcategories or []))
    files = [image.as_part("productImage")] if image is not None else None
    if product_id is None:
        return api.post("products", data=product_form_data(values), files=files)
    return api.put(f"products/{int(product_id)}", data=product_form_data(values), files=files)


def delete_product(api, product_id: int) -> Any:
    return api.delete(f"products/{int(product_id)}")


def product_values(product: Product) -> dict:
    return {
        "product_name": product.name,
        "product_description": product.description or "",
        "brand_name": product.brand or "",
        "material": product.material or "",
        "mrp_price": plain_number(product.mrp_price),
        "offer_price": plain_number(product.offer_price),
        "category_id": product.category_id,
        "sub_category_id": product.sub_category_id,
    }


def product_rows(
    products: list[Product],
    categories: list[Category],
    subcategories: list[SubCategory],
    uploads_base_url: str,
) -> list[dict]:
    cat_names = {c.id: c.name for c in categories}
    sub_names = {sc.id: sc.name for sc in subcategories}
    return [
        {
            "S.No": i + 1,
            "Category Name": cat_names.get(p.category_id, "Unknown"),
            "Subcategory Name": sub_names.get(p.sub_category_id, "Unknown"),
            "Product Name": p.name,
            "Product Brand": p.brand or "",
            "MRP": p.mrp_price,
            "Offer Price": p.offer_price,
            "Product Image": image_url(p.image, uploads_base_url),
        }
        for i, p in enumerate(products)
    ]
