"""
Local search over already-built rows.

Filtering happens in memory on every request; the document store is never
queried for search.
"""

from typing import Any, List, Mapping, Sequence, TypeVar

Row = TypeVar("Row")

CUSTOMER_SEARCH_FIELDS = ("user_id",)
CATEGORY_SEARCH_FIELDS = ("name",)
PRODUCT_SEARCH_FIELDS = ("name", "description", "category_name")
ORDER_SEARCH_FIELDS = ("orderId", "userId", "paymentStatus")
ADDRESS_SEARCH_FIELDS = ("label", "street", "city", "state", "postalCode", "country")
TAG_SEARCH_FIELDS = ("name",)


def _field_value(row: Any, field: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(field)
    return getattr(row, field, None)


def matches(row: Any, query: str, fields: Sequence[str]) -> bool:
    """True if any of the fields contains the query, ignoring case."""
    needle = query.lower()
    for field in fields:
        value = _field_value(row, field)
        if value is not None and needle in str(value).lower():
            return True
    return False


def filter_rows(rows: Sequence[Row], query: str, fields: Sequence[str]) -> List[Row]:
    """
    Keep the rows where any searchable field contains query.

    An empty query keeps every row. Row order is preserved.
    """
    if not query:
        return list(rows)
    return [row for row in rows if matches(row, query, fields)]
