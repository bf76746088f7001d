from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from storeadmin.schema import Category, Product, SubCategory


@dataclass
class CascadingSelection:
    """
    Category -> SubCategory -> Product picker.

    Candidate lists are fetched once by the page and handed in here; changing a
    selection never goes back to the server. Picking a category clears the
    subcategory and product, picking a subcategory clears the product.
    """

    categories: list[Category] = field(default_factory=list)
    subcategories: list[SubCategory] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)

    category_id: Optional[int] = None
    sub_category_id: Optional[int] = None
    product_id: Optional[int] = None

    @property
    def selection(self) -> dict[str, Optional[int]]:
        return {
            "category_id": self.category_id,
            "sub_category_id": self.sub_category_id,
            "product_id": self.product_id,
        }

    def set_category(self, category_id: Optional[int]) -> None:
        self.category_id = category_id
        self.sub_category_id = None
        self.product_id = None

    def set_subcategory(self, sub_category_id: Optional[int]) -> None:
        self.sub_category_id = sub_category_id
        self.product_id = None

    def set_product(self, product_id: Optional[int]) -> None:
        self.product_id = product_id

    def prefill(
        self,
        category_id: Optional[int],
        sub_category_id: Optional[int],
        product_id: Optional[int] = None,
    ) -> None:
        # Edit mode: restore a saved chain without the downstream resets.
        self.category_id = category_id
        self.sub_category_id = sub_category_id
        self.product_id = product_id

    def subcategory_options(self) -> list[SubCategory]:
        if self.category_id is None:
            return []
        return [sc for sc in self.subcategories if sc.category_id == self.category_id]

    def product_options(self) -> list[Product]:
        if self.sub_category_id is None:
            return []
        return [p for p in self.products if p.sub_category_id == self.sub_category_id]

    def clear(self) -> None:
        self.set_category(None)
