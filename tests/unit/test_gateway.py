"""
Unit Tests - Document Gateway
"""
import asyncio

import pytest

from shop_admin.database import Collection
from shop_admin.errors import NotFoundError, TransportError


class TestDocumentGateway:
    """Tests for DocumentGateway against SQLite"""

    async def test_put_and_get(self, gateway):
        await gateway.put_document(Collection.CATEGORIES, "cat-1", {"name": "Books"})

        document = await gateway.get_document(Collection.CATEGORIES, "cat-1")

        assert document == {"id": "cat-1", "name": "Books"}

    async def test_get_missing_returns_none(self, gateway):
        assert await gateway.get_document("categories", "nope") is None

    async def test_put_replaces_body(self, gateway):
        await gateway.put_document("categories", "cat-1", {"name": "Books", "featured": True})
        await gateway.put_document("categories", "cat-1", {"name": "Novels"})

        assert await gateway.get_document("categories", "cat-1") == {"id": "cat-1", "name": "Novels"}

    async def test_id_is_not_stored_in_body(self, gateway):
        await gateway.put_document("tags", "tag-1", {"id": "other", "name": "New"})

        assert await gateway.get_document("tags", "tag-1") == {"id": "tag-1", "name": "New"}

    async def test_add_generates_id(self, gateway):
        first = await gateway.add_document("tags", {"name": "New"})
        second = await gateway.add_document("tags", {"name": "Sale"})

        assert first != second
        assert (await gateway.get_document("tags", first))["name"] == "New"

    async def test_list_keeps_store_order(self, gateway):
        for document_id in ["b", "c", "a"]:
            await gateway.put_document("tags", document_id, {"name": document_id})

        documents = await gateway.list_collection("tags")

        assert [d["id"] for d in documents] == ["b", "c", "a"]

    async def test_collections_are_separate(self, gateway):
        await gateway.put_document("tags", "x", {"name": "tag"})
        await gateway.put_document("categories", "x", {"name": "category"})

        assert [d["name"] for d in await gateway.list_collection("tags")] == ["tag"]
        assert [d["name"] for d in await gateway.list_collection("categories")] == ["category"]

    async def test_list_ordered_descending_missing_last(self, gateway):
        await gateway.put_document("customers", "old", {"createdAt": "2025-01-01"})
        await gateway.put_document("customers", "none", {"userId": "x"})
        await gateway.put_document("customers", "new", {"createdAt": "2025-06-01"})

        documents = await gateway.list_collection("customers", order_by="createdAt", descending=True)

        assert [d["id"] for d in documents] == ["new", "old", "none"]

    async def test_update_merges(self, gateway):
        await gateway.put_document("products", "p1", {"name": "Lamp", "price": "10"})

        await gateway.update_document("products", "p1", {"price": "12"})

        assert await gateway.get_document("products", "p1") == {"id": "p1", "name": "Lamp", "price": "12"}

    async def test_update_missing_raises(self, gateway):
        with pytest.raises(NotFoundError):
            await gateway.update_document("products", "missing", {"price": "1"})

    async def test_delete(self, gateway):
        await gateway.put_document("products", "p1", {"name": "Lamp"})

        await gateway.delete_document("products", "p1")

        assert await gateway.get_document("products", "p1") is None

    async def test_delete_missing_is_noop(self, gateway):
        await gateway.delete_document("products", "missing")

    async def test_query_where_equality(self, seeded_gateway):
        orders = await seeded_gateway.query_where(Collection.ORDERS, "userId", "u1")

        assert [o["id"] for o in orders] == ["ord-1", "ord-2"]

    async def test_query_where_operators(self, seeded_gateway):
        tagged = await seeded_gateway.query_where("products", "tagIds", "tag-1", operator="array-contains")
        some = await seeded_gateway.query_where("products", "categoryId", ["cat-2", "cat-deleted"], operator="in")
        not_books = await seeded_gateway.query_where("products", "categoryId", "cat-1", operator="!=")

        assert [p["id"] for p in tagged] == ["prod-1"]
        assert [p["id"] for p in some] == ["prod-2", "prod-5"]
        # prod-4 has no categoryId and never matches
        assert [p["id"] for p in not_books] == ["prod-2", "prod-5"]

    async def test_query_where_unknown_operator(self, gateway):
        with pytest.raises(ValueError):
            await gateway.query_where("products", "price", "1", operator="~=")

    async def test_concurrent_reads(self, seeded_gateway):
        customers, orders = await asyncio.gather(
            seeded_gateway.list_collection("customers"),
            seeded_gateway.list_collection("orders"),
        )

        assert len(customers) == 3
        assert len(orders) == 6

    async def test_storage_failure_is_transport_error(self, broken_gateway):
        with pytest.raises(TransportError):
            await broken_gateway.list_collection("customers")

    async def test_concurrent_puts_on_new_id(self, gateway):
        await asyncio.gather(
            gateway.put_document("tags", "tag-1", {"name": "first"}),
            gateway.put_document("tags", "tag-1", {"name": "second"}),
        )

        documents = await gateway.list_collection("tags")
        assert len(documents) == 1
        assert documents[0]["name"] in {"first", "second"}

    async def test_put_replace_keeps_store_order(self, gateway):
        for document_id in ["a", "b"]:
            await gateway.put_document("tags", document_id, {"name": document_id})

        await gateway.put_document("tags", "a", {"name": "renamed"})

        assert [d["name"] for d in await gateway.list_collection("tags")] == ["renamed", "b"]
