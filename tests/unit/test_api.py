"""
Unit Tests - HTTP API
"""
from typing import AsyncGenerator

import httpx
import pytest

from shop_admin.serving.api import create_api_app
from shop_admin.serving.api.dependencies import get_blob_store, get_gateway
from shop_admin.storage import DataUrlBlobStore


@pytest.fixture
async def client(seeded_gateway) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_api_app()
    app.dependency_overrides[get_gateway] = lambda: seeded_gateway
    app.dependency_overrides[get_blob_store] = lambda: DataUrlBlobStore(max_bytes=64)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestCustomersApi:

    async def test_list(self, client):
        response = await client.get("/api/v1/customers")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3
        assert body["items"][2] == {
            "id": "cust-1",
            "user_id": "u1",
            "created_at": "2025-01-01T10:00:00.000Z",
            "billing_address_id": "addr-1",
            "shipping_address_id": None,
            "total_amount": "350.50",
            "order_count": 2,
        }

    async def test_search(self, client):
        response = await client.get("/api/v1/customers", params={"search": "U3"})

        assert [item["id"] for item in response.json()["items"]] == ["cust-3"]

    async def test_missing_customer(self, client):
        response = await client.get("/api/v1/customers/nobody")

        assert response.status_code == 404
        assert response.json()["notice"]["title"] == "Customer not found"
        assert response.json()["notice"]["variant"] == "destructive"


class TestCategoriesApi:

    async def test_list(self, client):
        response = await client.get("/api/v1/categories")

        items = response.json()["items"]
        assert [(i["name"], i["product_count"], i["is_deletable"]) for i in items] == [
            ("Books", 2, False),
            ("Garden", 1, False),
            ("Empty", 0, True),
        ]

    async def test_delete_with_products_conflicts(self, client):
        response = await client.delete("/api/v1/categories/cat-2")

        assert response.status_code == 409
        assert response.json()["notice"]["title"] == "Cannot delete category"

    async def test_delete_empty(self, client):
        response = await client.delete("/api/v1/categories/cat-3")

        assert response.status_code == 200
        assert response.json()["notices"][0]["title"] == "Category deleted"
        assert (await client.get("/api/v1/categories/cat-3")).status_code == 404

    async def test_create(self, client):
        response = await client.post("/api/v1/categories", json={"name": "Toys"})

        assert response.status_code == 201
        category_id = response.json()["id"]
        assert (await client.get(f"/api/v1/categories/{category_id}")).json()["name"] == "Toys"


class TestProductsApi:

    async def test_list_with_search(self, client):
        response = await client.get("/api/v1/products", params={"search": "books"})

        items = response.json()["items"]
        assert [i["id"] for i in items] == ["prod-1", "prod-3"]
        assert items[0]["category_name"] == "Books"

    async def test_create_and_list(self, client):
        response = await client.post(
            "/api/v1/products",
            data={"name": "Garden Gnome", "price": "9.99", "stock": "12", "category_id": "cat-2"},
        )

        assert response.status_code == 201
        assert response.json()["notices"][0]["title"] == "Product created"
        listed = (await client.get("/api/v1/products", params={"search": "gnome"})).json()["items"]
        assert listed[0]["category_name"] == "Garden"
        assert listed[0]["in_stock"] is True

    async def test_invalid_price(self, client):
        response = await client.post("/api/v1/products", data={"name": "Gnome", "price": "-1", "stock": "1"})

        assert response.status_code == 422

    async def test_create_with_image(self, client):
        response = await client.post(
            "/api/v1/products",
            data={"name": "Lamp", "price": "20", "stock": "2", "tag_ids": ["tag-1", "tag-2"]},
            files={"image": ("pixel.png", b"\x89PNG\r\n\x1a\n", "image/png")},
        )

        assert response.status_code == 201
        product = (await client.get(f"/api/v1/products/{response.json()['id']}")).json()
        assert product["image"].startswith("data:image/png;base64,")
        assert product["tagIds"] == ["tag-1", "tag-2"]

    async def test_oversized_image_leaves_no_product(self, client):
        response = await client.post(
            "/api/v1/products",
            data={"name": "Lamp", "price": "20", "stock": "2"},
            files={"image": ("big.png", b"\x00" * 100, "image/png")},
        )

        assert response.status_code == 413
        assert response.json()["notice"]["title"] == "Image too large"
        listed = (await client.get("/api/v1/products", params={"search": "lamp"})).json()
        assert [item["id"] for item in listed["items"]] == ["prod-5"]

    async def test_update_clears_category_and_keeps_unsent_fields(self, client):
        response = await client.put(
            "/api/v1/products/prod-1",
            data={"name": "Paperback Novel", "price": "13.99", "stock": "40", "category_id": ""},
        )

        assert response.status_code == 200
        product = (await client.get("/api/v1/products/prod-1")).json()
        assert product["price"] == "13.99"
        assert product["categoryId"] is None
        assert product["tagIds"] == ["tag-1"]
        assert product["description"] == "A gripping read"

    async def test_loosely_typed_documents_listed(self, client, seeded_gateway):
        await seeded_gateway.put_document("products", "prod-9", {"name": 42, "date": 1718000000, "tagIds": [3]})
        await seeded_gateway.put_document("customers", "cust-9", {"userId": 7})

        products = await client.get("/api/v1/products")
        customers = await client.get("/api/v1/customers")

        assert products.status_code == 200
        assert products.json()["items"][-1]["name"] == "42"
        assert products.json()["items"][-1]["tag_ids"] == ["3"]
        assert customers.status_code == 200
        assert "7" in {item["user_id"] for item in customers.json()["items"]}

    async def test_upload_image(self, client):
        response = await client.post(
            "/api/v1/products/prod-2/image",
            files={"image": ("pixel.png", b"\x89PNG\r\n\x1a\n", "image/png")},
        )

        assert response.status_code == 200
        assert response.json()["image"].startswith("data:image/png;base64,")
        product = (await client.get("/api/v1/products/prod-2")).json()
        assert product["image"] == response.json()["image"]

    async def test_upload_too_large(self, client):
        response = await client.post(
            "/api/v1/products/prod-2/image",
            files={"image": ("big.png", b"\x00" * 100, "image/png")},
        )

        assert response.status_code == 413

    async def test_form_options(self, client):
        body = (await client.get("/api/v1/products/form-options")).json()

        assert len(body["categories"]) == 3
        assert len(body["tags"]) == 2


class TestOrdersAndDirectoryApi:

    async def test_order_details(self, client):
        body = (await client.get("/api/v1/orders/ord-1")).json()

        assert body["order"]["orderId"] == "1001"
        assert body["lines"][0]["line_total"] == "25.98"
        assert body["shipping_address"]["id"] == "addr-1"

    async def test_addresses_and_tags(self, client):
        addresses = (await client.get("/api/v1/addresses")).json()
        tags = await client.post("/api/v1/tags", json={"name": "Gift"})

        assert addresses["total"] == 2
        assert tags.status_code == 201
        assert (await client.get("/api/v1/tags", params={"search": "gift"})).json()["total"] == 1

    async def test_request_id_header(self, client):
        response = await client.get("/api/v1/health/live", headers={"X-Request-ID": "abc"})

        assert response.json() == {"status": "alive"}
        assert response.headers["X-Request-ID"] == "abc"
