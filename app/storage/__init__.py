"""
Object storage gateway for the Asset Warehouse API.
Issues pre-signed upload URLs against an S3-compatible bucket.
"""

from app.storage.base import StorageBackend, asset_object_key, thumbnail_object_key
from app.storage.s3 import S3StorageBackend
from app.storage.factory import get_storage_backend, get_storage

__all__ = [
    "StorageBackend",
    "S3StorageBackend",
    "asset_object_key",
    "thumbnail_object_key",
    "get_storage_backend",
    "get_storage",
]
