"""
Products screen: product table, product form and product writes.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from shop_admin.database import Collection, Document, DocumentGateway
from shop_admin.errors import NotFoundError
from shop_admin.notifications import Notifier
from shop_admin.services.base import ScreenService
from shop_admin.storage import BlobStore, UploadedFile
from shop_admin.transformation import ProductRow, filter_rows, resolve_category_names
from shop_admin.transformation.search import PRODUCT_SEARCH_FIELDS


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _as_text(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


def _decimal(v: str, field: str) -> Decimal:
    try:
        value = Decimal(v.strip())
    except InvalidOperation:
        raise ValueError(f"{field} must be a number") from None
    if not value.is_finite():
        raise ValueError(f"{field} must be a number")
    return value


DOCUMENT_FIELDS = {
    "name": "name",
    "description": "description",
    "image": "image",
    "price": "price",
    "stock": "stock",
    "rating": "rating",
    "date": "date",
    "category_id": "categoryId",
    "subcategory_id": "subcategoryId",
    "tag_ids": "tagIds",
}


class ProductInput(BaseModel):
    """Product form fields. Numbers are kept as text, as stored."""
    name: str = Field(..., min_length=1)
    description: str = ""
    image: Optional[str] = None
    price: str
    stock: str
    rating: str = "0"
    date: Optional[str] = None
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    tag_ids: List[str] = Field(default_factory=list)

    @field_validator("price", "stock", "rating", mode="before")
    @classmethod
    def coerce_numbers(cls, v: Any) -> Any:
        return _as_text(v)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: str) -> str:
        if _decimal(v, "price") < 0:
            raise ValueError("price must not be negative")
        return v.strip()

    @field_validator("stock")
    @classmethod
    def validate_stock(cls, v: str) -> str:
        if not v.strip().isdigit():
            raise ValueError("stock must be a non-negative whole number")
        return v.strip()

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: str) -> str:
        if not 0 <= _decimal(v, "rating") <= 5:
            raise ValueError("rating must be between 0 and 5")
        return v.strip()

    def to_document(self, partial: bool = False) -> Dict[str, Any]:
        """
        Document body under stored field names.

        A field explicitly set to None is written as null and clears the stored
        value. Otherwise None fields are omitted; with partial, so is every
        field the caller did not set, so an update keeps the stored values.
        """
        return {
            DOCUMENT_FIELDS[field]: value
            for field, value in self.model_dump(exclude_unset=partial).items()
            if value is not None or field in self.model_fields_set
        }


@dataclass
class FormOptions:
    """Choices offered by the product form"""
    categories: List[Dict[str, Any]]
    tags: List[Dict[str, Any]]


def _product_not_found() -> NotFoundError:
    return NotFoundError(
        "The product you're trying to edit doesn't exist",
        title="Product not found",
    )


class ProductService(ScreenService):

    def __init__(self, gateway: DocumentGateway, notifier: Notifier, blobs: BlobStore):
        super().__init__(gateway, notifier)
        self.blobs = blobs

    async def list_rows(self, search: str = "") -> List[ProductRow]:
        async with self.reporting("Failed to load products"):
            products, categories = await asyncio.gather(
                self.gateway.list_collection(Collection.PRODUCTS),
                self.gateway.list_collection(Collection.CATEGORIES),
            )
        rows = resolve_category_names(products, categories)
        return filter_rows(rows, search, PRODUCT_SEARCH_FIELDS)

    async def get(self, product_id: str) -> Document:
        async with self.reporting("Failed to load product data"):
            product = await self.gateway.get_document(Collection.PRODUCTS, product_id)
            if product is None:
                raise _product_not_found()
        return product

    async def form_options(self) -> FormOptions:
        async with self.reporting("Failed to load form options"):
            categories, tags = await asyncio.gather(
                self.gateway.list_collection(Collection.CATEGORIES),
                self.gateway.list_collection(Collection.TAGS),
            )
        return FormOptions(
            categories=[{"id": c["id"], "name": c.get("name")} for c in categories],
            tags=[{"id": t["id"], "name": t.get("name")} for t in tags],
        )

    async def create(self, data: ProductInput, image: Optional[UploadedFile] = None) -> str:
        """Create a product, uploading its image first when one is given."""
        body = data.to_document()
        if body.get("image") is None:
            body["image"] = ""
        if body.get("date") is None:
            body["date"] = _utc_now_iso()
        async with self.reporting("Failed to save product"):
            if image is not None:
                body["image"] = await self.blobs.upload(image)
            product_id = await self.gateway.add_document(Collection.PRODUCTS, body)
        self.succeeded("Product created", "The product has been created successfully")
        return product_id

    async def update(self, product_id: str, data: ProductInput, image: Optional[UploadedFile] = None) -> None:
        """Merge form fields into a product; an omitted image keeps the current one."""
        body = data.to_document(partial=True)
        async with self.reporting("Failed to save product"):
            if image is not None:
                body["image"] = await self.blobs.upload(image)
            try:
                await self.gateway.update_document(Collection.PRODUCTS, product_id, body)
            except NotFoundError:
                raise _product_not_found() from None
        self.succeeded("Product updated", "The product has been updated successfully")

    async def set_image(self, product_id: str, image: UploadedFile) -> str:
        """Upload an image and store its URL on the product."""
        async with self.reporting("Failed to save product"):
            if await self.gateway.get_document(Collection.PRODUCTS, product_id) is None:
                raise _product_not_found()
            url = await self.blobs.upload(image)
            await self.gateway.update_document(Collection.PRODUCTS, product_id, {"image": url})
        self.succeeded("Product updated", "The product image has been updated successfully")
        return url

    async def delete(self, product_id: str) -> None:
        async with self.reporting("Failed to delete product"):
            await self.gateway.delete_document(Collection.PRODUCTS, product_id)
        self.succeeded("Product deleted", "The product has been deleted successfully")
