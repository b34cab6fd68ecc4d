"""
View-Model Aggregation

Pure functions that join raw document collections into the denormalized rows
the dashboard tables render. Each works on snapshots that are already in
memory and never touches the document store.

Includes:
- Customer order count and spend
- Product count per category
- Product category names
- Order line totals
"""

import math
import re
from collections import Counter
from decimal import Context, Decimal, InvalidOperation, Overflow, ROUND_HALF_UP, localcontext
from typing import Any, Dict, Iterable, List, Mapping, Optional

import structlog

from shop_admin.transformation.view_models import CategoryRow, CustomerRow, OrderLine, ProductRow

logger = structlog.get_logger(__name__)

UNCATEGORIZED = "Uncategorized"

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Amounts with more integer digits than this read as zero
MAX_AMOUNT_DIGITS = 40

# Wide enough that sums and cent rounding of bounded amounts stay exact
AMOUNT_CONTEXT = Context(prec=120, rounding=ROUND_HALF_UP)

# Leading numeric prefix, so "12.50 USD" reads as 12.50
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def _bounded(amount: Decimal) -> Decimal:
    if not amount.is_finite() or amount.is_zero():
        return ZERO
    if not -MAX_AMOUNT_DIGITS < amount.adjusted() < MAX_AMOUNT_DIGITS:
        return ZERO
    return amount


def parse_amount(value: Any) -> Decimal:
    """
    Parse a monetary amount stored as text or number.

    Missing, unparseable and non-finite values read as zero, as do values
    too large (or too small) to be a price.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, int):
        return _bounded(Decimal(value))
    if isinstance(value, float):
        return _bounded(Decimal(str(value))) if math.isfinite(value) else ZERO
    if not isinstance(value, str):
        return ZERO

    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return ZERO
    try:
        amount = Decimal(match.group(1))
    except InvalidOperation:
        return ZERO
    return _bounded(amount)


def parse_quantity(value: Any) -> int:
    """Parse an integer count stored as text or number; anything else is 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _INTEGER_PREFIX.match(value)
        return int(match.group(1)) if match else 0
    return 0


def format_amount(amount: Decimal) -> str:
    """Round half-up to cents and render with exactly two fraction digits."""
    with localcontext(AMOUNT_CONTEXT):
        try:
            return format(amount.quantize(CENT, rounding=ROUND_HALF_UP), "f")
        except (InvalidOperation, Overflow):
            logger.warning("Amount out of range", amount=str(amount))
            return format(ZERO.quantize(CENT), "f")


def _line_total(price: Decimal, quantity: int) -> Decimal:
    with localcontext(AMOUNT_CONTEXT):
        try:
            return price * quantity
        except (InvalidOperation, Overflow):
            logger.warning("Line total out of range", price=str(price), quantity=quantity)
            return ZERO


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _key(value: Any) -> Any:
    # Reference fields usable as join keys; lists, maps and booleans never join
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return value or None


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def aggregate_customer_spend(
    orders: Iterable[Mapping[str, Any]],
    customers: Iterable[Mapping[str, Any]],
) -> List[CustomerRow]:
    """
    Build one row per customer with order count and total spend.

    Orders are matched to customers on userId. Orders without a userId, or
    whose userId belongs to no customer, are not reported anywhere.

    Args:
        orders: Order documents
        customers: Customer documents, in the order rows should appear

    Returns:
        Customer rows in customer order
    """
    totals: Dict[Any, Decimal] = {}
    counts: Dict[Any, int] = {}
    with localcontext(AMOUNT_CONTEXT):
        for order in orders:
            user_id = _key(order.get("userId"))
            if user_id is None:
                continue
            totals[user_id] = totals.get(user_id, ZERO) + parse_amount(order.get("totalAmount"))
            counts[user_id] = counts.get(user_id, 0) + 1

    rows = []
    for customer in customers:
        user_id = _key(customer.get("userId"))
        rows.append(CustomerRow(
            id=customer["id"],
            user_id=_text(customer.get("userId")),
            created_at=customer.get("createdAt"),
            billing_address_id=_text(customer.get("billingAddressId")),
            shipping_address_id=_text(customer.get("shippingAddressId")),
            total_amount=format_amount(totals.get(user_id, ZERO)),
            order_count=counts.get(user_id, 0),
        ))

    logger.debug("Customer spend aggregated", customers=len(rows), buyers=len(counts))
    return rows


def count_products_by_category(products: Iterable[Mapping[str, Any]]) -> Counter:
    """Number of products per categoryId; products without one are skipped."""
    return Counter(
        key for key in (_key(product.get("categoryId")) for product in products) if key is not None
    )


def aggregate_category_counts(
    products: Iterable[Mapping[str, Any]],
    categories: Iterable[Mapping[str, Any]],
) -> List[CategoryRow]:
    """Build one row per category with the number of products in it."""
    counts = count_products_by_category(products)
    return [
        CategoryRow(
            id=category["id"],
            name=_text(category.get("name")),
            product_count=counts.get(category["id"], 0),
        )
        for category in categories
    ]


def resolve_category_names(
    products: Iterable[Mapping[str, Any]],
    categories: Iterable[Mapping[str, Any]],
) -> List[ProductRow]:
    """
    Attach a category name to every product.

    Products with no categoryId, or one that matches no category, are
    labelled "Uncategorized".
    """
    names = {category["id"]: category.get("name") for category in categories}

    rows = []
    for product in products:
        category_id = _key(product.get("categoryId"))
        category_name = names.get(category_id) if category_id is not None else None
        rows.append(ProductRow(
            id=product["id"],
            name=_text(product.get("name")),
            description=_text(product.get("description")),
            image=_text(product.get("image")),
            price=_text(product.get("price")),
            stock=_text(product.get("stock")),
            rating=_text(product.get("rating")),
            date=_text(product.get("date")),
            category_id=_text(category_id),
            subcategory_id=_text(_key(product.get("subcategoryId"))),
            category_name=_text(category_name) if category_name is not None else UNCATEGORIZED,
            in_stock=parse_quantity(product.get("stock")) > 0,
            tag_ids=_text_list(product.get("tagIds")),
        ))
    return rows


def price_order_lines(order: Mapping[str, Any]) -> List[OrderLine]:
    """Line totals (unit price times quantity) for the products of an order."""
    items = order.get("products")
    lines = []
    for item in items if isinstance(items, list) else []:
        if not isinstance(item, Mapping):
            continue
        quantity = parse_quantity(item.get("quantity"))
        lines.append(OrderLine(
            product_id=_text(item.get("productId")),
            name=_text(item.get("name")),
            quantity=quantity,
            price=_text(item.get("price")),
            line_total=format_amount(_line_total(parse_amount(item.get("price")), quantity)),
        ))
    return lines
