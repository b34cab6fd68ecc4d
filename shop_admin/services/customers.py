"""
Customers screen: spend table and customer details.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from shop_admin.database import Collection, Document
from shop_admin.errors import NotFoundError
from shop_admin.services.base import ScreenService
from shop_admin.transformation import CustomerRow, aggregate_customer_spend, filter_rows
from shop_admin.transformation.search import CUSTOMER_SEARCH_FIELDS


@dataclass
class CustomerDetails:
    """A customer with their addresses and orders"""
    customer: Document
    addresses: List[Document]
    orders: List[Document]

    def _address(self, address_id: Optional[str]) -> Optional[Document]:
        return next((a for a in self.addresses if a["id"] == address_id), None) if address_id else None

    @property
    def billing_address(self) -> Optional[Document]:
        return self._address(self.customer.get("billingAddressId"))

    @property
    def shipping_address(self) -> Optional[Document]:
        return self._address(self.customer.get("shippingAddressId"))


class CustomerService(ScreenService):

    async def list_rows(self, search: str = "") -> List[CustomerRow]:
        """Customers, newest first, with order count and total spend."""
        async with self.reporting("Failed to load customers"):
            customers, orders = await asyncio.gather(
                self.gateway.list_collection(Collection.CUSTOMERS, order_by="createdAt", descending=True),
                self.gateway.list_collection(Collection.ORDERS),
            )
        rows = aggregate_customer_spend(orders, customers)
        return filter_rows(rows, search, CUSTOMER_SEARCH_FIELDS)

    async def get_details(self, customer_id: str) -> CustomerDetails:
        async with self.reporting("Failed to load customer details"):
            customer = await self.gateway.get_document(Collection.CUSTOMERS, customer_id)
            if customer is None:
                raise NotFoundError(
                    "The customer you're looking for doesn't exist",
                    title="Customer not found",
                )
            addresses, orders = await asyncio.gather(
                self.gateway.query_where(Collection.ADDRESSES, "userId", customer.get("userId")),
                self.gateway.query_where(Collection.ORDERS, "userId", customer.get("userId")),
            )
        return CustomerDetails(customer=customer, addresses=addresses, orders=orders)
