"""
Storage Module
"""
from .blobs import BlobStore, DataUrlBlobStore, LocalBlobStore, UploadedFile, create_blob_store

__all__ = [
    "BlobStore",
    "DataUrlBlobStore",
    "LocalBlobStore",
    "UploadedFile",
    "create_blob_store",
]
