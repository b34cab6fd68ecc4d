"""
Database Module
"""
from .connection import init_database, close_database, get_db, get_session_factory
from .gateway import Document, DocumentGateway
from .models import Base, Collection, DocumentRecord

__all__ = [
    "init_database",
    "close_database",
    "get_db",
    "get_session_factory",
    "Document",
    "DocumentGateway",
    "Base",
    "Collection",
    "DocumentRecord",
]
