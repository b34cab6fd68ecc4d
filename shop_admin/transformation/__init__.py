"""
Transformation Module

Derives dashboard rows from raw document snapshots.
"""
from .aggregators import (
    UNCATEGORIZED,
    aggregate_category_counts,
    aggregate_customer_spend,
    count_products_by_category,
    format_amount,
    parse_amount,
    parse_quantity,
    price_order_lines,
    resolve_category_names,
)
from .search import filter_rows
from .view_models import CategoryRow, CustomerRow, OrderLine, ProductRow

__all__ = [
    "UNCATEGORIZED",
    "aggregate_category_counts",
    "aggregate_customer_spend",
    "count_products_by_category",
    "format_amount",
    "parse_amount",
    "parse_quantity",
    "price_order_lines",
    "resolve_category_names",
    "filter_rows",
    "CategoryRow",
    "CustomerRow",
    "OrderLine",
    "ProductRow",
]
