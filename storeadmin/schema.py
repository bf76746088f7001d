"""
REST payload schemas

Each model mirrors one resource as the backend returns it. Wire names are
camelCase (``categoryName``); attributes are snake_case. Unknown fields are
ignored so backend additions never break a page.
"""
from __future__ import annotations

import logging
from typing import List, Literal, Optional, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DiscountUnit = Literal["percentage", "flat"]


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Category(Record):
    id: int = Field(..., validation_alias=AliasChoices("categoryId", "categoryid", "id"))
    name: str = Field("", validation_alias=AliasChoices("categoryName", "name"))
    created_at: Optional[str] = Field(None, validation_alias=AliasChoices("createdAt", "created_at"))


class SubCategory(Record):
    id: int = Field(..., validation_alias=AliasChoices("subCategoryId", "id"))
    name: str = Field("", validation_alias=AliasChoices("subCategoryName", "name"))
    category_id: int = Field(..., validation_alias=AliasChoices("categoryId", "category_id"))
    category: Optional[Category] = Field(None, validation_alias=AliasChoices("Category", "category"))


class Product(Record):
    id: int = Field(..., validation_alias=AliasChoices("productId", "id"))
    name: str = Field("", validation_alias=AliasChoices("productName", "name"))
    description: Optional[str] = Field(None, validation_alias=AliasChoices("productDescription", "description"))
    brand: Optional[str] = Field(None, validation_alias=AliasChoices("brandName", "brand"))
    material: Optional[str] = None
    mrp_price: Optional[float] = Field(None, validation_alias=AliasChoices("productMrpPrice", "mrp_price"))
    offer_price: Optional[float] = Field(None, validation_alias=AliasChoices("productOfferPrice", "offer_price"))
    category_id: int = Field(..., validation_alias=AliasChoices("categoryId", "category_id"))
    sub_category_id: int = Field(..., validation_alias=AliasChoices("subCategoryId", "sub_category_id"))
    image: Optional[str] = Field(None, validation_alias=AliasChoices("productImage", "image"))
    category: Optional[Category] = Field(None, validation_alias=AliasChoices("Category", "category"))
    sub_category: Optional[SubCategory] = Field(None, validation_alias=AliasChoices("SubCategory", "sub_category"))


class ProductVariant(Record):
    id: int = Field(..., validation_alias=AliasChoices("productVariantId", "id"))
    product_id: int = Field(..., validation_alias=AliasChoices("productId", "product_id"))
    color: str = Field("", validation_alias=AliasChoices("productColor", "color"))
    stock_quantity: int = Field(0, ge=0, validation_alias=AliasChoices("stockQuantity", "stock_quantity"))
    low_stock: int = Field(0, ge=0, validation_alias=AliasChoices("lowStock", "low_stock"))
    image: Optional[str] = Field(None, validation_alias=AliasChoices("productVariantImage", "variantImage", "image"))
    is_new_arrival: bool = Field(False, validation_alias=AliasChoices("isNewArrival", "is_new_arrival"))
    is_best_seller: bool = Field(False, validation_alias=AliasChoices("isBestSeller", "is_best_seller"))
    is_trending: bool = Field(False, validation_alias=AliasChoices("isTrending", "is_trending"))
    product: Optional[Product] = Field(None, validation_alias=AliasChoices("Product", "product"))


class ProductStock(Record):
    variant_id: int = Field(..., validation_alias=AliasChoices("productVariantId", "variant_id"))
    available_stock: int = Field(0, validation_alias=AliasChoices("availableStock", "available_stock"))
    sold_stock: int = Field(0, validation_alias=AliasChoices("soldStock", "sold_stock"))


class ChildImage(Record):
    id: int = Field(..., validation_alias=AliasChoices("id", "childImageId"))
    variant_id: Optional[int] = Field(None, validation_alias=AliasChoices("variantId", "productVariantId"))
    image: str = Field("", validation_alias=AliasChoices("image", "childImage", "imageUrl"))


class Coupon(Record):
    id: int = Field(..., validation_alias=AliasChoices("couponId", "id"))
    code: str = Field(..., validation_alias=AliasChoices("code", "couponCode"))
    minimum_purchase_amount: int = Field(0, ge=0, validation_alias=AliasChoices("minimumPurchaseAmount", "minimum_purchase_amount"))
    discount_unit: DiscountUnit = Field("percentage", validation_alias=AliasChoices("discountUnit", "discount_unit"))
    discount_value: int = Field(0, validation_alias=AliasChoices("discountValue", "discount_value"))
    start_date: Optional[str] = Field(None, validation_alias=AliasChoices("startDate", "start_date"))
    end_date: Optional[str] = Field(None, validation_alias=AliasChoices("endDate", "end_date"))


class Banner(Record):
    id: int = Field(..., validation_alias=AliasChoices("bannerId", "homeBannerId", "collectionBannerId", "id"))
    title: str = Field("", validation_alias=AliasChoices("title", "bannerTitle"))
    image: Optional[str] = Field(None, validation_alias=AliasChoices("bannerImage", "image"))


class Customer(Record):
    id: int = Field(..., validation_alias=AliasChoices("customerId", "userId", "id"))
    full_name: str = Field("", validation_alias=AliasChoices("fullName", "name"))
    email: Optional[str] = None
    phone_no: Optional[str] = Field(None, validation_alias=AliasChoices("phoneNo", "phone"))
    created_at: Optional[str] = Field(None, validation_alias=AliasChoices("createdAt", "created_at"))


class Bill(Record):
    full_name: str = Field("", validation_alias=AliasChoices("fullName", "full_name"))
    email: Optional[str] = None
    phone_no: Optional[str] = Field(None, validation_alias=AliasChoices("phoneNo", "phone_no"))
    address_line1: Optional[str] = Field(None, validation_alias=AliasChoices("addressLine1", "address_line1"))
    address_line2: Optional[str] = Field(None, validation_alias=AliasChoices("addressLine2", "address_line2"))


class OrderLine(Record):
    id: int
    product_name: str = Field("", validation_alias=AliasChoices("productname", "productName"))
    quantity: int = 0
    price: float = Field(0.0, validation_alias=AliasChoices("product_price", "productPrice"))
    image: Optional[str] = Field(None, validation_alias=AliasChoices("product_variant_image", "image"))


class Order(Record):
    id: int = Field(..., validation_alias=AliasChoices("orderId", "id"))
    grand_total: float = Field(0.0, validation_alias=AliasChoices("grand_total_amount", "grandTotal"))
    bill: Optional[Bill] = Field(None, validation_alias=AliasChoices("Bill", "bill"))
    lines: List[OrderLine] = Field(default_factory=list, validation_alias=AliasChoices("OrderSlots", "lines"))


R = TypeVar("R", bound=Record)


def parse_rows(model: Type[R], rows: list[dict]) -> list[R]:
    out: list[R] = []
    for row in rows:
        try:
            out.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning("skipping malformed %s row: %s", model.__name__, e.errors()[:1])
    return out
