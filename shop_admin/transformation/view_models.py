"""
View-model rows

Read-only records rendered by the dashboard tables. Each combines fields of a
source document with values derived from other collections.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class CustomerRow:
    """Customer with order count and total spend"""
    id: str
    user_id: Optional[str]
    created_at: Any
    billing_address_id: Optional[str]
    shipping_address_id: Optional[str]
    total_amount: str  # two fraction digits
    order_count: int


@dataclass(frozen=True)
class CategoryRow:
    """Category with the number of products assigned to it"""
    id: str
    name: Optional[str]
    product_count: int

    @property
    def is_deletable(self) -> bool:
        return self.product_count == 0


@dataclass(frozen=True)
class ProductRow:
    """Product with its category name resolved"""
    id: str
    name: Optional[str]
    description: Optional[str]
    image: Optional[str]
    price: Optional[str]
    stock: Optional[str]
    rating: Optional[str]
    date: Optional[str]
    category_id: Optional[str]
    subcategory_id: Optional[str]
    category_name: str
    in_stock: bool
    tag_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class OrderLine:
    """Order line with quantity times unit price"""
    product_id: Optional[str]
    name: Optional[str]
    quantity: int
    price: Optional[str]
    line_total: str
