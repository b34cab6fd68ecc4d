"""
Orders screen: order list and order details.
"""

from dataclasses import dataclass
from typing import List, Optional

from shop_admin.database import Collection, Document
from shop_admin.errors import NotFoundError
from shop_admin.services.base import ScreenService
from shop_admin.transformation import OrderLine, filter_rows, price_order_lines
from shop_admin.transformation.search import ORDER_SEARCH_FIELDS


@dataclass
class OrderDetails:
    order: Document
    shipping_address: Optional[Document]
    lines: List[OrderLine]


class OrderService(ScreenService):

    async def list_orders(self, search: str = "") -> List[Document]:
        async with self.reporting("Failed to load orders"):
            orders = await self.gateway.list_collection(Collection.ORDERS, order_by="createdAt", descending=True)
        return filter_rows(orders, search, ORDER_SEARCH_FIELDS)

    async def get_details(self, order_id: str) -> OrderDetails:
        """Order with its shipping address (when it still exists) and line totals."""
        async with self.reporting("Failed to load order details"):
            order = await self.gateway.get_document(Collection.ORDERS, order_id)
            if order is None:
                raise NotFoundError(
                    "The order you're looking for doesn't exist",
                    title="Order not found",
                )
            address = None
            if order.get("shippingAddressId"):
                address = await self.gateway.get_document(Collection.ADDRESSES, order["shippingAddressId"])
        return OrderDetails(order=order, shipping_address=address, lines=price_order_lines(order))
