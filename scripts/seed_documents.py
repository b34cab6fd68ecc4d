#!/usr/bin/env python
"""
Load a small sample store into the document database.

Usage:
    python scripts/seed_documents.py [--database-url URL]

Documents are written with fixed ids, so running the script again overwrites
the samples instead of duplicating them.
"""

import argparse
import asyncio
from typing import Any, Dict, List, Optional, Tuple

from shop_admin.config.logging import configure_logging, get_logger
from shop_admin.database import (
    Collection,
    DocumentGateway,
    close_database,
    get_session_factory,
    init_database,
)

logger = get_logger(__name__)

SAMPLE_DOCUMENTS: Dict[Collection, List[Tuple[str, Dict[str, Any]]]] = {
    Collection.CATEGORIES: [
        ("cat-books", {"name": "Books"}),
        ("cat-garden", {"name": "Garden"}),
        ("cat-empty", {"name": "Clearance"}),
    ],
    Collection.TAGS: [
        ("tag-new", {"name": "New"}),
        ("tag-sale", {"name": "Sale"}),
    ],
    Collection.PRODUCTS: [
        ("prod-novel", {
            "name": "Paperback Novel", "description": "A gripping read",
            "image": "", "price": "12.99", "stock": "40", "rating": "4.5",
            "date": "2025-01-10T09:00:00.000Z", "categoryId": "cat-books", "tagIds": ["tag-new"],
        }),
        ("prod-trowel", {
            "name": "Hand Trowel", "description": "Stainless steel trowel",
            "image": "", "price": "8.50", "stock": "0", "rating": "4.1",
            "date": "2025-02-02T14:30:00.000Z", "categoryId": "cat-garden", "tagIds": ["tag-sale"],
        }),
        ("prod-mystery", {
            "name": "Mystery Box", "description": "Contents unknown",
            "image": "", "price": "20", "stock": "5", "rating": "3.9",
            "date": "2025-03-01T08:00:00.000Z", "tagIds": [],
        }),
    ],
    Collection.ADDRESSES: [
        ("addr-ada-home", {
            "userId": "user-ada", "label": "Home", "street": "12 Analytical Row",
            "city": "London", "state": "Greater London", "postalCode": "N1 1AA", "country": "UK",
        }),
        ("addr-alan-work", {
            "userId": "user-alan", "label": "Work", "street": "1 Bletchley Park",
            "city": "Milton Keynes", "state": "Buckinghamshire", "postalCode": "MK3 6EB", "country": "UK",
        }),
    ],
    Collection.CUSTOMERS: [
        ("cust-ada", {
            "userId": "user-ada", "createdAt": "2025-01-05T10:00:00.000Z",
            "billingAddressId": "addr-ada-home", "shippingAddressId": "addr-ada-home",
        }),
        ("cust-alan", {
            "userId": "user-alan", "createdAt": "2025-02-11T16:45:00.000Z",
            "shippingAddressId": "addr-alan-work",
        }),
        ("cust-grace", {"userId": "user-grace", "createdAt": "2025-03-20T12:00:00.000Z"}),
    ],
    Collection.ORDERS: [
        ("order-1001", {
            "orderId": "1001", "userId": "user-ada", "createdAt": "2025-01-12T11:00:00.000Z",
            "products": [{"productId": "prod-novel", "name": "Paperback Novel", "quantity": 2, "price": "12.99"}],
            "subtotal": "25.98", "totalAmount": "25.98", "paymentStatus": "paid",
            "paymentProvider": "stripe", "shippingAddressId": "addr-ada-home",
        }),
        ("order-1002", {
            "orderId": "1002", "userId": "user-ada", "createdAt": "2025-02-03T09:15:00.000Z",
            "products": [{"productId": "prod-trowel", "name": "Hand Trowel", "quantity": 1, "price": "8.50"}],
            "subtotal": "8.50", "totalAmount": "8.50", "paymentStatus": "pending",
            "paymentProvider": "stripe", "shippingAddressId": "addr-ada-home",
        }),
        ("order-1003", {
            "orderId": "1003", "userId": "user-alan", "createdAt": "2025-02-12T18:20:00.000Z",
            "products": [{"productId": "prod-mystery", "name": "Mystery Box", "quantity": 1, "price": "20"}],
            "subtotal": "20", "totalAmount": "20", "paymentStatus": "failed",
            "paymentProvider": "stripe", "shippingAddressId": "addr-alan-work",
        }),
    ],
}


async def seed(database_url: Optional[str] = None) -> int:
    """Write every sample document and return how many were written."""
    await init_database(database_url)
    gateway = DocumentGateway(get_session_factory())
    written = 0
    try:
        for collection, documents in SAMPLE_DOCUMENTS.items():
            for document_id, body in documents:
                await gateway.put_document(collection, document_id, body)
                written += 1
            logger.info("Collection seeded", collection=collection.value, count=len(documents))
    finally:
        await close_database()
    return written


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the store admin document database")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Async SQLAlchemy URL (defaults to the configured database)",
    )
    args = parser.parse_args()

    configure_logging()
    count = asyncio.run(seed(args.database_url))
    logger.info("Seeding complete", documents=count)
