from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from storeadmin.api import ApiError, FilePart, unwrap_record
from storeadmin.schema import Category, Product, ProductVariant, SubCategory, parse_rows
from storeadmin.services.forms import ModalForm, SubmitResult
from storeadmin.services.images import ImageAttachments
from storeadmin.services.selection import CascadingSelection
from storeadmin.services.validation import raise_if_invalid, validate_variant
from storeadmin.utils import image_url

logger = logging.getLogger(__name__)

TAG_FIELDS = {
    "is_new_arrival": "isNewArrival",
    "is_best_seller": "isBestSeller",
    "is_trending": "isTrending",
}


class ChildUploadError(ApiError):
    """The variant was saved but its child images were not."""

    def __init__(self, message: str, variant_id: int, status_code: Optional[int] = None) -> None:
        super().__init__(message, status_code=status_code)
        self.variant_id = variant_id


def list_variants(api) -> list[ProductVariant]:
    return parse_rows(ProductVariant, api.get_list("product-variants"))


def list_low_stock(api) -> list[ProductVariant]:
    return parse_rows(ProductVariant, api.get_list("low-stock"))


def delete_variant(api, variant_id: int) -> Any:
    return api.delete(f"product-variants/{int(variant_id)}")


def variant_form_data(values: dict) -> dict:
    data = {
        "productId": str(int(values["product_id"])),
        "productColor": str(values["product_color"]).strip(),
        "stockQuantity": str(values.get("stock_quantity") or "0").strip(),
        "lowStock": str(values.get("low_stock") or "0").strip(),
    }
    for key, wire in TAG_FIELDS.items():
        data[wire] = "true" if values.get(key) else "false"
    return data


def upload_child_images(api, variant_id: int, parts: list[FilePart]) -> Any:
    return api.post("product-variant-images", data={"variantId": str(int(variant_id))}, files=parts)


def _saved_id(response: Any) -> Optional[int]:
    record = unwrap_record(response, "data", "variant", "productVariant")
    for key in ("productVariantId", "id"):
        if record.get(key) is not None:
            return int(record[key])
    return None


def save_variant(api, values: dict, images: ImageAttachments, *, variant_id: Optional[int] = None) -> int:
    """
    Create or update a variant, then bulk-upload its new child images.

    The primary image rides along in the variant's own multipart request. Child
    images go in a second request keyed by the saved id, and only once the
    first request succeeded. Returns the variant id.
    """
    raise_if_invalid(validate_variant(values))

    files = images.primary_parts("productVariantImage") or None
    if variant_id is None:
        response = api.post("product-variants", data=variant_form_data(values), files=files)
        saved_id = _saved_id(response)
        if saved_id is None:
            raise ApiError("Server did not return the new variant id.")
    else:
        api.put(f"product-variants/{int(variant_id)}", data=variant_form_data(values), files=files)
        saved_id = int(variant_id)

    parts = images.child_parts()
    if parts:
        try:
            upload_child_images(api, saved_id, parts)
        except ApiError as e:
            raise ChildUploadError(f"Variant saved but thumb images failed: {e}", saved_id, e.status_code) from e
    return saved_id


def variant_values(variant: ProductVariant, products: list[Product]) -> dict:
    product = next((p for p in products if p.id == variant.product_id), variant.product)
    values = {
        "category_id": product.category_id if product else None,
        "sub_category_id": product.sub_category_id if product else None,
        "product_id": variant.product_id,
        "product_color": variant.color,
        "stock_quantity": str(variant.stock_quantity),
        "low_stock": str(variant.low_stock),
    }
    for key in TAG_FIELDS:
        values[key] = bool(getattr(variant, key))
    return values


@dataclass
class VariantEditor:
    """Variant modal: cascading product picker + image slots + submit flow."""

    selection: CascadingSelection
    images: ImageAttachments = field(default_factory=ImageAttachments)
    modal: ModalForm = field(default_factory=lambda: ModalForm(entity="variant"))
    existing_image_url: Optional[str] = None

    def open_create(self) -> None:
        self.close()
        self.modal.open_create({key: False for key in TAG_FIELDS})

    def open_edit(self, api, variant: ProductVariant, uploads_base_url: str = "") -> None:
        self.close()
        values = variant_values(variant, self.selection.products)
        self.selection.prefill(values["category_id"], values["sub_category_id"], values["product_id"])
        self.modal.open_edit(variant.id, values)
        self.existing_image_url = image_url(variant.image, uploads_base_url)
        try:
            self.images.load_existing(api, variant.id)
        except ApiError as e:
            logger.warning("could not load thumb images for variant %s: %s", variant.id, e)

    def submit(self, api) -> SubmitResult:
        self.modal.values.update(self.selection.selection)
        child_failure: list[str] = []

        def _create(values: dict) -> int:
            try:
                return save_variant(api, values, self.images)
            except ChildUploadError as e:
                # Retrying must update the saved variant, not create another.
                self.modal.editing_id = e.variant_id
                child_failure.append(str(e))
                raise

        def _update(variant_id: int, values: dict) -> int:
            try:
                return save_variant(api, values, self.images, variant_id=variant_id)
            except ChildUploadError as e:
                child_failure.append(str(e))
                raise

        result = self.modal.submit(validate_variant, _create, _update)
        if result.ok:
            self.close()
        elif child_failure:
            return SubmitResult(ok=False, message=child_failure[0])
        return result

    def close(self) -> None:
        self.modal.close()
        self.images.reset()
        self.selection.clear()
        self.existing_image_url = None


def variant_rows(
    variants: list[ProductVariant],
    categories: list[Category],
    subcategories: list[SubCategory],
    products: list[Product],
    uploads_base_url: str,
) -> list[dict]:
    cat_names = {c.id: c.name for c in categories}
    sub_names = {sc.id: sc.name for sc in subcategories}
    by_id = {p.id: p for p in products}

    rows = []
    for i, v in enumerate(variants):
        product = by_id.get(v.product_id) or v.product
        category = "-"
        subcategory = "-"
        if product is not None:
            category = cat_names.get(product.category_id) or (product.category.name if product.category else "-")
            subcategory = sub_names.get(product.sub_category_id) or (
                product.sub_category.name if product.sub_category else "-"
            )
        rows.append(
            {
                "S.No": i + 1,
                "Category": category,
                "SubCategory": subcategory,
                "Product": product.name if product else "-",
                "Color": v.color,
                "Stock": v.stock_quantity,
                "Low Stock": v.low_stock,
                "Tags": ", ".join(
                    label
                    for label, on in (
                        ("New Arrival", v.is_new_arrival),
                        ("Best Seller", v.is_best_seller),
                        ("Trending", v.is_trending),
                    )
                    if on
                ),
                "Image": image_url(v.image, uploads_base_url),
            }
        )
    return rows
