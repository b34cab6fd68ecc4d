"""
Database Models - Document Store

All dashboard entities live in one table as schema-less JSON documents,
addressed by collection name and document id. The surrogate primary key
records insertion order, which is the store order of a collection.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict

from sqlalchemy import (
    JSON,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


class Collection(str, Enum):
    """Collections used by the dashboard"""
    CUSTOMERS = "customers"
    ORDERS = "orders"
    PRODUCTS = "products"
    CATEGORIES = "categories"
    TAGS = "tags"
    ADDRESSES = "addresses"


class DocumentRecord(Base):
    """
    Stored Document

    `data` holds the document body; the id is kept out of the body and
    re-attached by the gateway on read.
    """
    __tablename__ = "documents"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    document_id: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        UniqueConstraint("collection", "document_id", name="uq_documents_collection_document_id"),
        Index("ix_documents_collection", "collection"),
    )

    def __repr__(self) -> str:
        return f"<DocumentRecord {self.collection}/{self.document_id}>"
