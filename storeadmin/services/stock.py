from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import ValidationError

from storeadmin.api import ApiError, unwrap_record
from storeadmin.schema import ProductStock, ProductVariant, parse_rows
from storeadmin.services.forms import SubmitResult
from storeadmin.services.validation import validate_stock_quantity

logger = logging.getLogger(__name__)

Mode = Literal["closed", "adding", "reducing"]


@dataclass
class StockRow:
    variant_id: int
    category_name: str
    product_name: str
    color: str
    available_stock: int
    sold_stock: int


def list_stock(api) -> list[ProductStock]:
    return parse_rows(ProductStock, api.get_list("product-stock"))


def build_stock_rows(variants: list[ProductVariant], stock: list[ProductStock]) -> list[StockRow]:
    by_variant = {s.variant_id: s for s in stock}
    rows: list[StockRow] = []
    for v in variants:
        s = by_variant.get(v.id)
        product = v.product
        category = "N/A"
        if product is not None:
            if product.category is not None:
                category = product.category.name
            elif product.sub_category is not None and product.sub_category.category is not None:
                category = product.sub_category.category.name
        rows.append(
            StockRow(
                variant_id=v.id,
                category_name=category,
                product_name=product.name if product else "N/A",
                color=v.color,
                available_stock=s.available_stock if s else 0,
                sold_stock=s.sold_stock if s else 0,
            )
        )
    return rows


def _apply(api, action: str, variant_id: int, quantity: int) -> tuple[int, str]:
    response = api.post(
        f"product-stock/{action}",
        json={"productVariantId": int(variant_id), "quantity": int(quantity)},
    )
    record = unwrap_record(response, "stock", "data")
    if "availableStock" not in record and "available_stock" not in record:
        raise ApiError("Server did not return the updated stock.")
    try:
        stock = ProductStock.model_validate({"productVariantId": variant_id, **record})
    except ValidationError as e:
        raise ApiError("Server returned an unexpected stock record.") from e
    message = response.get("message", "") if isinstance(response, dict) else ""
    return stock.available_stock, str(message or "")


def add_stock(api, variant_id: int, quantity: int) -> tuple[int, str]:
    return _apply(api, "add", variant_id, quantity)


def reduce_stock(api, variant_id: int, quantity: int) -> tuple[int, str]:
    return _apply(api, "reduce", variant_id, quantity)


@dataclass
class StockAdjustment:
    """
    closed -> adding | reducing -> closed

    Opening in ``reducing`` snapshots the known available stock as the upper
    bound. On success the row's available stock becomes whatever the backend
    returned; it is never computed here.
    """

    mode: Mode = "closed"
    row: Optional[StockRow] = None
    upper_bound: Optional[int] = None
    quantity: str = ""
    error: str = ""

    def open_add(self, row: StockRow) -> None:
        self.mode = "adding"
        self.row = row
        self.upper_bound = None
        self.quantity = ""
        self.error = ""

    def open_reduce(self, row: StockRow) -> None:
        self.mode = "reducing"
        self.row = row
        self.upper_bound = int(row.available_stock)
        self.quantity = ""
        self.error = ""

    def close(self) -> None:
        self.mode = "closed"
        self.row = None
        self.upper_bound = None
        self.quantity = ""
        self.error = ""

    def set_quantity(self, quantity: str) -> str:
        # Inline validation while typing.
        self.quantity = quantity
        self.error = validate_stock_quantity(quantity, self.upper_bound) or ""
        return self.error

    def confirm(self, api) -> SubmitResult:
        if self.mode == "closed" or self.row is None:
            return SubmitResult(ok=False, message="No stock adjustment in progress.")

        if self.set_quantity(self.quantity):
            return SubmitResult(ok=False, message=self.error)

        qty = int(self.quantity)
        row = self.row
        try:
            if self.mode == "adding":
                available, message = add_stock(api, row.variant_id, qty)
            else:
                available, message = reduce_stock(api, row.variant_id, qty)
        except ApiError as e:
            logger.warning("stock %s for variant %s failed: %s", self.mode, row.variant_id, e)
            return SubmitResult(ok=False, message="Operation failed")

        row.available_stock = available
        self.close()
        return SubmitResult(ok=True, message=message or "Stock updated", data=available)
