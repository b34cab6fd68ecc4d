"""
Orders API Endpoints
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from shop_admin.serving.api.dependencies import get_order_service
from shop_admin.serving.api.responses import DocumentListResponse
from shop_admin.services import OrderService

router = APIRouter()


class OrderLineResponse(BaseModel):
    product_id: Optional[str]
    name: Optional[str]
    quantity: int
    price: Optional[str]
    line_total: str

    model_config = ConfigDict(from_attributes=True)


class OrderDetailResponse(BaseModel):
    """Order with shipping address and priced lines"""
    order: Dict[str, Any]
    shipping_address: Optional[Dict[str, Any]]
    lines: List[OrderLineResponse]


@router.get("", response_model=DocumentListResponse)
async def list_orders(
    search: str = "",
    service: OrderService = Depends(get_order_service),
) -> DocumentListResponse:
    """List orders, newest first."""
    orders = await service.list_orders(search)
    return DocumentListResponse(items=orders, total=len(orders))


@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> OrderDetailResponse:
    details = await service.get_details(order_id)
    return OrderDetailResponse(
        order=details.order,
        shipping_address=details.shipping_address,
        lines=[OrderLineResponse.model_validate(line) for line in details.lines],
    )
