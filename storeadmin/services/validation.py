from __future__ import annotations

from typing import Any, Iterable, Optional

from storeadmin.schema import SubCategory
from storeadmin.utils import is_blank, is_digits

FormErrors = dict[str, str]

STOCK_REQUIRED = "Stock Quantity is required"
STOCK_NOT_NUMBER = "Stock Quantity should only be number"
STOCK_OVER_AVAILABLE = "Stock Quantity Should not be more than Available stock"

DISCOUNT_UNITS = ("percentage", "flat")
MIN_COUPON_CODE_LENGTH = 4


class FormValidationError(ValueError):
    def __init__(self, errors: FormErrors) -> None:
        super().__init__("; ".join(errors.values()))
        self.errors = errors


def raise_if_invalid(errors: FormErrors) -> None:
    if errors:
        raise FormValidationError(errors)


def _required(errors: FormErrors, values: dict, key: str, message: str) -> None:
    if is_blank(values.get(key)):
        errors[key] = message


def _digits(errors: FormErrors, values: dict, key: str, required: str, not_number: str) -> None:
    value = values.get(key)
    if is_blank(value):
        errors[key] = required
    elif not is_digits(str(value).strip()):
        errors[key] = not_number


def validate_category(values: dict) -> FormErrors:
    errors: FormErrors = {}
    _required(errors, values, "category_name", "Category name is required")
    return errors


def validate_subcategory(values: dict) -> FormErrors:
    errors: FormErrors = {}
    _required(errors, values, "sub_category_name", "Subcategory name is required")
    _required(errors, values, "category_id", "Please select a category")
    return errors


def validate_product(values: dict, subcategories: Iterable[SubCategory] = ()) -> FormErrors:
    errors: FormErrors = {}
    _required(errors, values, "category_id", "Please select a category")
    _required(errors, values, "sub_category_id", "Please select a subcategory")
    _required(errors, values, "product_name", "Product name is required")
    _digits(errors, values, "mrp_price", "MRP price is required", "MRP price should only be number")
    _digits(errors, values, "offer_price", "Offer price is required", "Offer price should only be number")

    if "category_id" not in errors and "sub_category_id" not in errors:
        owner = {sc.id: sc.category_id for sc in subcategories}
        sub_id = int(values["sub_category_id"])
        if owner and owner.get(sub_id) != int(values["category_id"]):
            errors["sub_category_id"] = "Subcategory does not belong to the selected category"
    return errors


def validate_variant(values: dict) -> FormErrors:
    errors: FormErrors = {}
    _required(errors, values, "category_id", "Please select a category")
    _required(errors, values, "sub_category_id", "Please select a subcategory")
    _required(errors, values, "product_id", "Please select a product")
    _required(errors, values, "product_color", "Color is required")
    _digits(errors, values, "stock_quantity", "Stock quantity is required", "Stock quantity should only be number")
    _digits(errors, values, "low_stock", "Low stock is required", "Low stock should only be number")
    return errors


def validate_stock_quantity(quantity: Any, upper_bound: Optional[int] = None) -> Optional[str]:
    text = "" if quantity is None else str(quantity).strip()
    if not text:
        return STOCK_REQUIRED
    if not is_digits(text) or int(text) <= 0:
        return STOCK_NOT_NUMBER
    if upper_bound is not None and int(text) > int(upper_bound):
        return STOCK_OVER_AVAILABLE
    return None


def validate_coupon(values: dict) -> FormErrors:
    errors: FormErrors = {}
    code = str(values.get("code") or "").strip()
    if len(code) < MIN_COUPON_CODE_LENGTH:
        errors["code"] = f"Coupon code must be at least {MIN_COUPON_CODE_LENGTH} characters"
    _digits(
        errors,
        values,
        "minimum_purchase_amount",
        "Minimum purchase amount is required",
        "Minimum purchase amount should only be number",
    )
    if values.get("discount_unit") not in DISCOUNT_UNITS:
        errors["discount_unit"] = "Please select a discount unit"
    _digits(errors, values, "discount_value", "Discount value is required", "Discount value should only be number")
    _required(errors, values, "start_date", "Start date is required")
    _required(errors, values, "end_date", "End date is required")
    return errors


def validate_banner(values: dict, *, has_image: bool, editing: bool) -> FormErrors:
    errors: FormErrors = {}
    _required(errors, values, "title", "Banner title is required")
    if not has_image and not editing:
        errors["banner_image"] = "Banner image is required"
    return errors
