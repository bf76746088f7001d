from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from storeadmin.api import ApiError, NotFoundError
from storeadmin.schema import Customer, Order, OrderLine, parse_rows
from storeadmin.utils import image_url, is_digits, short_date


def parse_order_id(raw: Any) -> Optional[int]:
    """Order id from a query param or text box; None unless it is a positive whole number."""
    text = "" if raw is None else str(raw).strip()
    if not is_digits(text) or int(text) <= 0:
        return None
    return int(text)


def get_order(api, order_id: int) -> Order:
    """
    Invoice lookup. Raises NotFoundError both on HTTP 404 and when the backend
    answers ``success: false`` or omits the order.
    """
    payload = api.get(f"orders/{int(order_id)}")
    if not isinstance(payload, dict) or not payload.get("success") or not isinstance(payload.get("order"), dict):
        raise NotFoundError("No order found", status_code=404)
    try:
        return Order.model_validate(payload["order"])
    except ValidationError as e:
        raise ApiError("Server returned an unexpected order record.") from e


def bill_address(order: Order) -> str:
    if order.bill is None:
        return ""
    return ", ".join(p for p in (order.bill.address_line1, order.bill.address_line2) if p)


def invoice_rows(order: Order, uploads_base_url: str) -> list[dict]:
    return [
        {
            "Product Image": image_url(line.image, uploads_base_url),
            "Product Name": line.product_name,
            "Product Qty": line.quantity,
            "Product Price": line.price,
            "Line Total": round(line.price * line.quantity, 2),
        }
        for line in order.lines
    ]


def line_detail(line: OrderLine, uploads_base_url: str, currency: str) -> dict:
    return {
        "name": line.product_name,
        "image": image_url(line.image, uploads_base_url),
        "quantity": line.quantity,
        "unit_price": f"{currency}{line.price:,.2f}",
        "total": f"{currency}{line.price * line.quantity:,.2f}",
    }


def list_customers(api) -> list[Customer]:
    return parse_rows(Customer, api.get_list("customers"))


def customer_rows(customers: list[Customer]) -> list[dict]:
    return [
        {
            "S.No": i + 1,
            "Name": c.full_name,
            "Email": c.email or "-",
            "Phone": c.phone_no or "-",
            "Joined": short_date(c.created_at),
        }
        for i, c in enumerate(customers)
    ]
