"""
Document Gateway

Collection-level read/write/delete operations over the documents table.

Each call runs in its own session so that a screen can issue several reads
concurrently with asyncio.gather. There are no transactions spanning
documents: a write is a single statement and the last write wins.
"""

import operator
import uuid
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Union

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shop_admin.database.models import DocumentRecord
from shop_admin.errors import NotFoundError, TransportError

logger = structlog.get_logger(__name__)

Document = Dict[str, Any]
CollectionName = Union[str, Enum]


def _array_contains(field_value: Any, value: Any) -> bool:
    return isinstance(field_value, list) and value in field_value


def _is_in(field_value: Any, value: Any) -> bool:
    return field_value in value


QUERY_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "in": _is_in,
    "array-contains": _array_contains,
}

_MISSING = object()


def _collection_name(name: CollectionName) -> str:
    return name.value if isinstance(name, Enum) else name


def _to_document(record: DocumentRecord) -> Document:
    return {"id": record.document_id, **record.data}


def _body(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key != "id"}


UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class DocumentGateway:
    """
    Document store client.

    Documents are returned as plain dicts carrying an "id" key next to the
    body fields. Storage failures surface as TransportError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str, collection: str) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self._session_factory() as session:
                yield session
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Document store call failed",
                action=action,
                collection=collection,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportError(f"Document store {action} failed on {collection}") from e

    async def _find(self, session: AsyncSession, collection: str, document_id: str) -> Optional[DocumentRecord]:
        result = await session.execute(
            select(DocumentRecord).where(
                DocumentRecord.collection == collection,
                DocumentRecord.document_id == document_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_collection(
        self,
        name: CollectionName,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Document]:
        """
        Read every document of a collection.

        Args:
            name: Collection name
            order_by: Body field to sort by; documents without it go last
            descending: Sort direction for order_by

        Returns:
            Documents in store order, or sorted by order_by
        """
        collection = _collection_name(name)
        async with self._session("list", collection) as session:
            result = await session.execute(
                select(DocumentRecord)
                .where(DocumentRecord.collection == collection)
                .order_by(DocumentRecord.pk)
            )
            documents = [_to_document(record) for record in result.scalars().all()]

        logger.debug("Collection listed", collection=collection, count=len(documents))

        if order_by is None:
            return documents

        present = [doc for doc in documents if doc.get(order_by) is not None]
        missing = [doc for doc in documents if doc.get(order_by) is None]
        try:
            present.sort(key=lambda doc: doc[order_by], reverse=descending)
        except TypeError:
            present.sort(key=lambda doc: str(doc[order_by]), reverse=descending)
        return present + missing

    async def get_document(self, name: CollectionName, document_id: str) -> Optional[Document]:
        collection = _collection_name(name)
        async with self._session("get", collection) as session:
            record = await self._find(session, collection, document_id)
            return _to_document(record) if record is not None else None

    async def query_where(
        self,
        name: CollectionName,
        field: str,
        value: Any,
        operator: str = "==",
    ) -> List[Document]:
        """
        Read the documents of a collection whose field satisfies a condition.

        Documents lacking the field never match.

        Raises:
            ValueError: For an unsupported operator
        """
        try:
            predicate = QUERY_OPERATORS[operator]
        except KeyError:
            raise ValueError(f"Unsupported query operator: {operator!r}") from None

        matches = []
        for document in await self.list_collection(name):
            field_value = document.get(field, _MISSING)
            if field_value is _MISSING:
                continue
            try:
                if predicate(field_value, value):
                    matches.append(document)
            except TypeError:
                # Incomparable types, e.g. "<" between str and int
                continue
        return matches

    async def put_document(self, name: CollectionName, document_id: str, data: Dict[str, Any]) -> str:
        """Create or replace a document under a caller-chosen id."""
        collection = _collection_name(name)
        async with self._session("put", collection) as session:
            insert = UPSERT_DIALECTS[session.get_bind().dialect.name]
            statement = insert(DocumentRecord).values(
                collection=collection,
                document_id=document_id,
                data=_body(data),
            )
            # Last write wins on (collection, document_id)
            await session.execute(statement.on_conflict_do_update(
                index_elements=[DocumentRecord.collection, DocumentRecord.document_id],
                set_={"data": statement.excluded.data, "updated_at": func.now()},
            ))

        logger.info("Document written", collection=collection, document_id=document_id)
        return document_id

    async def add_document(self, name: CollectionName, data: Dict[str, Any]) -> str:
        """Create a document under a freshly generated id."""
        return await self.put_document(name, str(uuid.uuid4()), data)

    async def update_document(self, name: CollectionName, document_id: str, partial: Dict[str, Any]) -> None:
        """
        Merge fields into an existing document.

        Raises:
            NotFoundError: If the document does not exist
        """
        collection = _collection_name(name)
        async with self._session("update", collection) as session:
            record = await self._find(session, collection, document_id)
            if record is None:
                raise NotFoundError(f"No document {document_id} in {collection}")
            # Reassign so the JSON column is flagged as modified
            record.data = {**record.data, **_body(partial)}

        logger.info("Document updated", collection=collection, document_id=document_id, fields=sorted(partial))

    async def delete_document(self, name: CollectionName, document_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""
        collection = _collection_name(name)
        async with self._session("delete", collection) as session:
            result = await session.execute(
                delete(DocumentRecord).where(
                    DocumentRecord.collection == collection,
                    DocumentRecord.document_id == document_id,
                )
            )

        logger.info("Document deleted", collection=collection, document_id=document_id, deleted=result.rowcount)
