"""
Categories API Endpoints

Category table with product counts, and category writes.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict

from shop_admin.notifications import NoticeCollector
from shop_admin.serving.api.dependencies import get_category_service, get_notifier
from shop_admin.serving.api.responses import ActionResponse, NameInput
from shop_admin.services import CategoryService

router = APIRouter()


class CategorySummary(BaseModel):
    """Category table row"""
    id: str
    name: Optional[str]
    product_count: int
    is_deletable: bool

    model_config = ConfigDict(from_attributes=True)


class CategoryListResponse(BaseModel):
    items: List[CategorySummary]
    total: int


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    search: str = "",
    service: CategoryService = Depends(get_category_service),
) -> CategoryListResponse:
    rows = await service.list_rows(search)
    return CategoryListResponse(
        items=[CategorySummary.model_validate(row) for row in rows],
        total=len(rows),
    )


@router.get("/{category_id}")
async def get_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> Dict[str, Any]:
    return await service.get(category_id)


@router.post("", response_model=ActionResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: NameInput,
    service: CategoryService = Depends(get_category_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ActionResponse:
    category_id = await service.create(body.name)
    return ActionResponse(id=category_id, notices=notifier.notices)


@router.put("/{category_id}", response_model=ActionResponse)
async def update_category(
    category_id: str,
    body: NameInput,
    service: CategoryService = Depends(get_category_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ActionResponse:
    await service.update(category_id, body.name)
    return ActionResponse(id=category_id, notices=notifier.notices)


@router.delete("/{category_id}", response_model=ActionResponse)
async def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ActionResponse:
    """Delete a category; refused with 409 while products reference it."""
    await service.delete(category_id)
    return ActionResponse(id=category_id, notices=notifier.notices)
