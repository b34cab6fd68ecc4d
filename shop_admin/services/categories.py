"""
Categories screen: category table with product counts and category writes.
"""

import asyncio
from typing import List

import structlog

from shop_admin.database import Collection, Document
from shop_admin.errors import ConstraintViolationError, NotFoundError
from shop_admin.services.base import ScreenService
from shop_admin.transformation import CategoryRow, aggregate_category_counts, filter_rows
from shop_admin.transformation.search import CATEGORY_SEARCH_FIELDS

logger = structlog.get_logger(__name__)


def _category_not_found() -> NotFoundError:
    return NotFoundError(
        "The category you're trying to edit doesn't exist",
        title="Category not found",
    )


class CategoryService(ScreenService):

    async def list_rows(self, search: str = "") -> List[CategoryRow]:
        async with self.reporting("Failed to load categories"):
            categories, products = await asyncio.gather(
                self.gateway.list_collection(Collection.CATEGORIES),
                self.gateway.list_collection(Collection.PRODUCTS),
            )
        rows = aggregate_category_counts(products, categories)
        return filter_rows(rows, search, CATEGORY_SEARCH_FIELDS)

    async def get(self, category_id: str) -> Document:
        async with self.reporting("Failed to load category data"):
            category = await self.gateway.get_document(Collection.CATEGORIES, category_id)
            if category is None:
                raise _category_not_found()
        return category

    async def create(self, name: str) -> str:
        async with self.reporting("Failed to save category"):
            category_id = await self.gateway.add_document(Collection.CATEGORIES, {"name": name})
        self.succeeded("Category created", "The category has been created successfully")
        return category_id

    async def update(self, category_id: str, name: str) -> None:
        async with self.reporting("Failed to save category"):
            try:
                await self.gateway.update_document(Collection.CATEGORIES, category_id, {"name": name})
            except NotFoundError:
                raise _category_not_found() from None
        self.succeeded("Category updated", "The category has been updated successfully")

    async def delete(self, category_id: str) -> None:
        """
        Delete a category that has no products.

        The product count shown in the table may be stale, so it is read
        again here before anything is deleted.

        Raises:
            ConstraintViolationError: If products still reference the category
        """
        async with self.reporting("Failed to delete category"):
            products = await self.gateway.query_where(Collection.PRODUCTS, "categoryId", category_id)
            if products:
                logger.warning("Category still has products", category_id=category_id, products=len(products))
                raise ConstraintViolationError(
                    f"This category has {len(products)} products. Remove the products first.",
                    title="Cannot delete category",
                )
            await self.gateway.delete_document(Collection.CATEGORIES, category_id)
        self.succeeded("Category deleted", "The category has been deleted successfully")
