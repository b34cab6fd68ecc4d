"""
Test Suite Configuration
"""
from typing import Any, AsyncGenerator, Dict, List

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from shop_admin.database import Base, Collection, DocumentGateway
from shop_admin.database.connection import create_session_factory
from shop_admin.notifications import NoticeCollector


@pytest.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite document store in a temporary file"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}",
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def gateway(test_engine) -> DocumentGateway:
    return DocumentGateway(create_session_factory(test_engine))


@pytest.fixture
async def broken_gateway(tmp_path) -> AsyncGenerator[DocumentGateway, None]:
    """Gateway over a database without the documents table"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}",
        poolclass=NullPool,
    )
    yield DocumentGateway(create_session_factory(engine))
    await engine.dispose()


@pytest.fixture
def notifier() -> NoticeCollector:
    return NoticeCollector()


@pytest.fixture
def sample_customers() -> List[Dict[str, Any]]:
    return [
        {"id": "cust-1", "userId": "u1", "createdAt": "2025-01-01T10:00:00.000Z", "billingAddressId": "addr-1"},
        {"id": "cust-2", "userId": "u2", "createdAt": "2025-02-01T10:00:00.000Z"},
        {"id": "cust-3", "userId": "u3", "createdAt": "2025-03-01T10:00:00.000Z"},
    ]


@pytest.fixture
def sample_orders() -> List[Dict[str, Any]]:
    return [
        {"id": "ord-1", "orderId": "1001", "userId": "u1", "createdAt": "2025-01-02T10:00:00.000Z",
         "totalAmount": "150.00", "paymentStatus": "paid", "shippingAddressId": "addr-1",
         "products": [{"productId": "prod-1", "name": "Paperback Novel", "quantity": 2, "price": "12.99"}]},
        {"id": "ord-2", "orderId": "1002", "userId": "u1", "createdAt": "2025-01-05T10:00:00.000Z",
         "totalAmount": "200.50", "paymentStatus": "pending", "shippingAddressId": "addr-gone"},
        {"id": "ord-3", "orderId": "1003", "userId": "u2", "createdAt": "2025-02-02T10:00:00.000Z",
         "totalAmount": "75.25", "paymentStatus": "paid"},
        {"id": "ord-4", "orderId": "1004", "userId": "ghost", "createdAt": "2025-02-03T10:00:00.000Z",
         "totalAmount": "99.99", "paymentStatus": "paid"},
        {"id": "ord-5", "orderId": "1005", "createdAt": "2025-02-04T10:00:00.000Z",
         "totalAmount": "10", "paymentStatus": "failed"},
        {"id": "ord-6", "orderId": "1006", "userId": "u2", "createdAt": "2025-02-05T10:00:00.000Z",
         "totalAmount": "not a number", "paymentStatus": "failed"},
    ]


@pytest.fixture
def sample_categories() -> List[Dict[str, Any]]:
    return [
        {"id": "cat-1", "name": "Books"},
        {"id": "cat-2", "name": "Garden"},
        {"id": "cat-3", "name": "Empty"},
    ]


@pytest.fixture
def sample_products() -> List[Dict[str, Any]]:
    return [
        {"id": "prod-1", "name": "Paperback Novel", "description": "A gripping read",
         "price": "12.99", "stock": "40", "rating": "4.5", "categoryId": "cat-1", "tagIds": ["tag-1"]},
        {"id": "prod-2", "name": "Hand Trowel", "description": "Stainless steel",
         "price": "8.50", "stock": "0", "rating": "4.1", "categoryId": "cat-2", "tagIds": []},
        {"id": "prod-3", "name": "Poetry Anthology", "description": "Collected verse",
         "price": "15", "stock": "3", "rating": "4.8", "categoryId": "cat-1"},
        {"id": "prod-4", "name": "Mystery Box", "description": "Contents unknown",
         "price": "20", "stock": "5", "rating": "3.9"},
        {"id": "prod-5", "name": "Old Lamp", "description": "Vintage",
         "price": "30", "stock": "1", "rating": "4.0", "categoryId": "cat-deleted"},
    ]


@pytest.fixture
def sample_addresses() -> List[Dict[str, Any]]:
    return [
        {"id": "addr-1", "userId": "u1", "label": "Home", "street": "1 Main St",
         "city": "Springfield", "state": "IL", "postalCode": "62701", "country": "US"},
        {"id": "addr-2", "userId": "u2", "label": "Office", "street": "9 Side Rd",
         "city": "Shelbyville", "state": "IL", "postalCode": "62565", "country": "US"},
    ]


@pytest.fixture
async def seeded_gateway(
    gateway,
    sample_customers,
    sample_orders,
    sample_categories,
    sample_products,
    sample_addresses,
) -> DocumentGateway:
    """Gateway with every sample collection written in fixture order"""
    collections = {
        Collection.CUSTOMERS: sample_customers,
        Collection.ORDERS: sample_orders,
        Collection.CATEGORIES: sample_categories,
        Collection.PRODUCTS: sample_products,
        Collection.ADDRESSES: sample_addresses,
        Collection.TAGS: [{"id": "tag-1", "name": "New"}, {"id": "tag-2", "name": "Sale"}],
    }
    for collection, documents in collections.items():
        for document in documents:
            await gateway.put_document(collection, document["id"], document)
    return gateway
