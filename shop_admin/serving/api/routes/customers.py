"""
Customers API Endpoints

Customer table with order counts and spend, and customer details.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
import structlog

from shop_admin.serving.api.dependencies import get_customer_service
from shop_admin.services import CustomerService

router = APIRouter()
logger = structlog.get_logger(__name__)


class CustomerSummary(BaseModel):
    """Customer table row"""
    id: str
    user_id: Optional[str]
    created_at: Any
    billing_address_id: Optional[str]
    shipping_address_id: Optional[str]
    total_amount: str
    order_count: int

    model_config = ConfigDict(from_attributes=True)


class CustomerListResponse(BaseModel):
    items: List[CustomerSummary]
    total: int


class CustomerDetailResponse(BaseModel):
    """Customer with addresses and orders"""
    customer: Dict[str, Any]
    addresses: List[Dict[str, Any]]
    orders: List[Dict[str, Any]]
    billing_address: Optional[Dict[str, Any]]
    shipping_address: Optional[Dict[str, Any]]


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    search: str = "",
    service: CustomerService = Depends(get_customer_service),
) -> CustomerListResponse:
    """List customers, newest first, with order count and total spent."""
    rows = await service.list_rows(search)
    logger.info("Customers listed", count=len(rows), search=search or None)
    return CustomerListResponse(
        items=[CustomerSummary.model_validate(row) for row in rows],
        total=len(rows),
    )


@router.get("/{customer_id}", response_model=CustomerDetailResponse)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerDetailResponse:
    details = await service.get_details(customer_id)
    return CustomerDetailResponse(
        customer=details.customer,
        addresses=details.addresses,
        orders=details.orders,
        billing_address=details.billing_address,
        shipping_address=details.shipping_address,
    )
