"""
FastAPI dependencies

Services are built per request around a shared gateway and a per-request
notice collector. Routes that return notices depend on get_notifier as well
and receive the same collector, since FastAPI caches dependencies within a
request.
"""

from functools import lru_cache

from fastapi import Depends

from shop_admin.config import get_settings
from shop_admin.database import DocumentGateway, get_session_factory
from shop_admin.notifications import NoticeCollector
from shop_admin.services import (
    AddressService,
    CategoryService,
    CustomerService,
    OrderService,
    ProductService,
    TagService,
)
from shop_admin.storage import BlobStore, create_blob_store


def get_gateway() -> DocumentGateway:
    return DocumentGateway(get_session_factory())


def get_notifier() -> NoticeCollector:
    return NoticeCollector()


@lru_cache()
def get_blob_store() -> BlobStore:
    return create_blob_store(get_settings())


def get_customer_service(
    gateway: DocumentGateway = Depends(get_gateway),
    notifier: NoticeCollector = Depends(get_notifier),
) -> CustomerService:
    return CustomerService(gateway, notifier)


def get_order_service(
    gateway: DocumentGateway = Depends(get_gateway),
    notifier: NoticeCollector = Depends(get_notifier),
) -> OrderService:
    return OrderService(gateway, notifier)


def get_category_service(
    gateway: DocumentGateway = Depends(get_gateway),
    notifier: NoticeCollector = Depends(get_notifier),
) -> CategoryService:
    return CategoryService(gateway, notifier)


def get_product_service(
    gateway: DocumentGateway = Depends(get_gateway),
    notifier: NoticeCollector = Depends(get_notifier),
    blobs: BlobStore = Depends(get_blob_store),
) -> ProductService:
    return ProductService(gateway, notifier, blobs)


def get_address_service(
    gateway: DocumentGateway = Depends(get_gateway),
    notifier: NoticeCollector = Depends(get_notifier),
) -> AddressService:
    return AddressService(gateway, notifier)


def get_tag_service(
    gateway: DocumentGateway = Depends(get_gateway),
    notifier: NoticeCollector = Depends(get_notifier),
) -> TagService:
    return TagService(gateway, notifier)
