from __future__ import annotations

from typing import Any, Optional

from storeadmin.schema import Coupon, parse_rows
from storeadmin.services.validation import raise_if_invalid, validate_coupon


def list_coupons(api) -> list[Coupon]:
    return parse_rows(Coupon, api.get_list("coupons"))


def coupon_body(values: dict) -> dict:
    return {
        "code": str(values["code"]).strip(),
        "minimumPurchaseAmount": int(str(values["minimum_purchase_amount"]).strip()),
        "discountUnit": values["discount_unit"],
        "discountValue": int(str(values["discount_value"]).strip()),
        "startDate": str(values["start_date"]),
        "endDate": str(values["end_date"]),
    }


def save_coupon(api, values: dict, *, coupon_id: Optional[int] = None) -> Any:
    raise_if_invalid(validate_coupon(values))
    if coupon_id is None:
        return api.post("coupons", json=coupon_body(values))
    return api.put(f"coupons/{int(coupon_id)}", json=coupon_body(values))


def delete_coupon(api, coupon_id: int) -> Any:
    return api.delete(f"coupons/{int(coupon_id)}")


def coupon_values(coupon: Coupon) -> dict:
    return {
        "code": coupon.code,
        "minimum_purchase_amount": str(coupon.minimum_purchase_amount),
        "discount_unit": coupon.discount_unit,
        "discount_value": str(coupon.discount_value),
        "start_date": coupon.start_date or "",
        "end_date": coupon.end_date or "",
    }


def coupon_rows(coupons: list[Coupon], currency: str) -> list[dict]:
    rows = []
    for i, c in enumerate(coupons):
        discount = f"{c.discount_value}%" if c.discount_unit == "percentage" else f"{currency}{c.discount_value}"
        rows.append(
            {
                "S.No": i + 1,
                "Code": c.code,
                "Min. Purchase": f"{currency}{c.minimum_purchase_amount}",
                "Discount": discount,
                "Start Date": c.start_date or "-",
                "End Date": c.end_date or "-",
            }
        )
    return rows
