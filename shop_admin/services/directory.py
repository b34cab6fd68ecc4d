"""
Addresses and tags screens.
"""

from typing import List

from shop_admin.database import Collection, Document
from shop_admin.services.base import ScreenService
from shop_admin.transformation import filter_rows
from shop_admin.transformation.search import ADDRESS_SEARCH_FIELDS, TAG_SEARCH_FIELDS


class AddressService(ScreenService):

    async def list_addresses(self, search: str = "") -> List[Document]:
        async with self.reporting("Failed to load addresses"):
            addresses = await self.gateway.list_collection(Collection.ADDRESSES)
        return filter_rows(addresses, search, ADDRESS_SEARCH_FIELDS)


class TagService(ScreenService):

    async def list_tags(self, search: str = "") -> List[Document]:
        async with self.reporting("Failed to load tags"):
            tags = await self.gateway.list_collection(Collection.TAGS)
        return filter_rows(tags, search, TAG_SEARCH_FIELDS)

    async def create(self, name: str) -> str:
        async with self.reporting("Failed to save tag"):
            tag_id = await self.gateway.add_document(Collection.TAGS, {"name": name})
        self.succeeded("Tag created", "The tag has been created successfully")
        return tag_id
