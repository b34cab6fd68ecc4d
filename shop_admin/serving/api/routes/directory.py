"""
Addresses and Tags API Endpoints
"""

from fastapi import APIRouter, Depends, status

from shop_admin.notifications import NoticeCollector
from shop_admin.serving.api.dependencies import get_address_service, get_notifier, get_tag_service
from shop_admin.serving.api.responses import ActionResponse, DocumentListResponse, NameInput
from shop_admin.services import AddressService, TagService

addresses_router = APIRouter()
tags_router = APIRouter()


@addresses_router.get("", response_model=DocumentListResponse)
async def list_addresses(
    search: str = "",
    service: AddressService = Depends(get_address_service),
) -> DocumentListResponse:
    addresses = await service.list_addresses(search)
    return DocumentListResponse(items=addresses, total=len(addresses))


@tags_router.get("", response_model=DocumentListResponse)
async def list_tags(
    search: str = "",
    service: TagService = Depends(get_tag_service),
) -> DocumentListResponse:
    tags = await service.list_tags(search)
    return DocumentListResponse(items=tags, total=len(tags))


@tags_router.post("", response_model=ActionResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    body: NameInput,
    service: TagService = Depends(get_tag_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ActionResponse:
    tag_id = await service.create(body.name)
    return ActionResponse(id=tag_id, notices=notifier.notices)
