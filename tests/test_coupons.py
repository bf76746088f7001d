from __future__ import annotations

import pytest

from conftest import FakeApi
from storeadmin.schema import Coupon
from storeadmin.services.coupons import coupon_rows, coupon_values, delete_coupon, list_coupons, save_coupon
from storeadmin.services.validation import FormValidationError

VALUES = {
    "code": " SAVE10 ",
    "minimum_purchase_amount": "500",
    "discount_unit": "flat",
    "discount_value": "100",
    "start_date": "2026-01-01",
    "end_date": "2026-02-01",
}


def test_save_coupon_body():
    api = FakeApi()
    save_coupon(api, VALUES)

    assert api.calls == [
        (
            "POST",
            "coupons",
            {
                "json": {
                    "code": "SAVE10",
                    "minimumPurchaseAmount": 500,
                    "discountUnit": "flat",
                    "discountValue": 100,
                    "startDate": "2026-01-01",
                    "endDate": "2026-02-01",
                }
            },
        )
    ]


def test_update_and_delete_coupon():
    api = FakeApi()
    save_coupon(api, VALUES, coupon_id=3)
    delete_coupon(api, 3)
    assert [(m, p) for m, p, _ in api.calls] == [("PUT", "coupons/3"), ("DELETE", "coupons/3")]


def test_short_code_never_sent():
    api = FakeApi()
    with pytest.raises(FormValidationError):
        save_coupon(api, dict(VALUES, code="AB"))
    assert api.calls == []


def test_list_and_edit_values():
    api = FakeApi(
        lists={
            "coupons": [
                {"couponId": 1, "code": "WELCOME", "discountUnit": "percentage", "discountValue": 15},
                {"couponId": 2, "code": "BAD", "discountUnit": "bogus"},
            ]
        }
    )
    coupons = list_coupons(api)

    assert [c.code for c in coupons] == ["WELCOME"]
    assert coupon_values(coupons[0])["discount_value"] == "15"


def test_coupon_rows_format_discount():
    coupons = [
        Coupon.model_validate({"couponId": 1, "code": "PCT", "discountUnit": "percentage", "discountValue": 15}),
        Coupon.model_validate(
            {"couponId": 2, "code": "FLAT", "discountUnit": "flat", "discountValue": 100, "minimumPurchaseAmount": 999}
        ),
    ]
    rows = coupon_rows(coupons, "₹")
    assert rows[0]["Discount"] == "15%"
    assert rows[1]["Discount"] == "₹100"
    assert rows[1]["Min. Purchase"] == "₹999"
